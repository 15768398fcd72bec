"""Application wiring: builds domain objects with their concrete adapters."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from factkit.adapters.subprocess import SubprocessExecutor
from factkit.adapters.warnings import LoggingWarningSink
from factkit.config import ExecutionConfig, get_execution_config
from factkit.domain.fact import FactCollection

if TYPE_CHECKING:
    from factkit.domain.ports import CommandExecutor, WarningSink


log = getLogger(__name__)


def build_collection(
    config: ExecutionConfig | None = None,
    *,
    executor: CommandExecutor | None = None,
    warnings: WarningSink | None = None,
) -> FactCollection:
    """Create a fact collection backed by subprocess execution and logging warnings.

    ``config`` defaults to the environment (``FACTKIT_EXEC_TIMEOUT``, ``FACTKIT_PATH``);
    explicit ``executor``/``warnings`` replace the default adapters.
    """

    if executor is None:
        executor = SubprocessExecutor(config=config or get_execution_config())
    if warnings is None:
        warnings = LoggingWarningSink()
    log.debug("Building fact collection with %s", type(executor).__name__)
    return FactCollection(executor=executor, warnings=warnings)
