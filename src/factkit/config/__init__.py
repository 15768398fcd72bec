"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_seconds, optional_env_var
from .errors import ConfigurationError, InvalidConfigurationError
from .execution import ExecutionConfig, get_execution_config
from .logging import configure_logging

__all__ = [
    "ConfigurationError",
    "ExecutionConfig",
    "InvalidConfigurationError",
    "configure_logging",
    "get_execution_config",
    "optional_env_seconds",
    "optional_env_var",
]
