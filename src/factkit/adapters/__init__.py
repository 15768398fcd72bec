"""Adapters implementing the domain ports."""

from __future__ import annotations

from .subprocess import SubprocessExecutor, which
from .warnings import LoggingWarningSink

__all__ = ["LoggingWarningSink", "SubprocessExecutor", "which"]
