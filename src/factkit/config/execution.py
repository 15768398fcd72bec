"""Command execution defaults."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_env_seconds, optional_env_var

TIMEOUT_ENV_VAR: Final[str] = "FACTKIT_EXEC_TIMEOUT"
SEARCH_PATH_ENV_VAR: Final[str] = "FACTKIT_PATH"


@dataclass(frozen=True, slots=True)
class ExecutionConfig:
    """Settings shared by every command a resolution runs."""

    default_timeout_seconds: float | None = None
    search_path: str | None = None
    shell: bool = True


def get_execution_config() -> ExecutionConfig:
    return ExecutionConfig(
        default_timeout_seconds=optional_env_seconds(TIMEOUT_ENV_VAR),
        search_path=optional_env_var(SEARCH_PATH_ENV_VAR),
    )
