"""Warning sink adapter that writes through :mod:`logging`."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import Logger, getLogger

log = getLogger(__name__)


@dataclass(slots=True)
class LoggingWarningSink:
    """Send resolution warnings to a logger; ``warnonce`` drops repeated messages."""

    logger: Logger = field(default=log)
    _seen: set[str] = field(default_factory=set[str], init=False, repr=False)

    def warn(self, message: str) -> None:
        self.logger.warning("%s", message)

    def warnonce(self, message: str) -> None:
        if message in self._seen:
            return
        self._seen.add(message)
        self.logger.warning("%s", message)


__all__ = ["LoggingWarningSink"]
