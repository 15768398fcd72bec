"""Shared logging helpers for factkit."""

from __future__ import annotations

import logging
from typing import Final

from .env import optional_env_var
from .errors import InvalidConfigurationError

LOG_LEVEL_ENV_VAR: Final[str] = "FACTKIT_LOG_LEVEL"


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelNamesMapping().get(level.strip().upper())
    if resolved is None:
        raise InvalidConfigurationError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(*, level: int | str | None = None, force: bool = False) -> None:
    """Initialise the root logger with a terse format.

    Without an explicit ``level`` the ``FACTKIT_LOG_LEVEL`` environment variable is
    consulted (a level name such as ``debug``), falling back to WARNING so that
    resolution warnings show while skipped commands stay quiet. Pass ``force=True``
    to reconfigure during tests or specialised entry points.
    """

    if level is None:
        level = optional_env_var(LOG_LEVEL_ENV_VAR) or logging.WARNING
    logging.basicConfig(
        level=_resolve_level(level),
        format="%(levelname)s [%(name)s] %(message)s",
        force=force,
    )
