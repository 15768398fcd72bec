"""Domain port definitions for adapters."""

from __future__ import annotations

from .execution import CommandExecutor
from .warnings import WarningSink

__all__ = ["CommandExecutor", "WarningSink"]
