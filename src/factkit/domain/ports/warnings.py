"""Port for reporting non-fatal resolution problems."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class WarningSink(Protocol):
    """Fire-and-forget warning channel; implementations must not raise."""

    def warn(self, message: str) -> None: ...

    def warnonce(self, message: str) -> None: ...


__all__ = ["WarningSink"]
