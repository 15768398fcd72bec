"""Port for running external commands on behalf of resolutions."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CommandExecutor(Protocol):
    """Run a command string and return its captured output.

    Implementations never raise for a missing command, a non-zero exit or a
    timeout; they return ``None`` instead.
    """

    def __call__(
        self,
        command: str,
        *,
        timeout: float | None = None,
        path: str | None = None,
    ) -> str | None: ...


__all__ = ["CommandExecutor"]
