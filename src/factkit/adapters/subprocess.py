"""Command execution adapter backed by :mod:`subprocess`.

Platform differences (quoting rules, executable lookup, ``PATHEXT`` on
Windows) are handled here so that resolutions can pass command strings
through unchanged.
"""

from __future__ import annotations

import os
import shlex
import shutil
import signal
import subprocess
from dataclasses import dataclass, field
from logging import getLogger

from factkit.config import ExecutionConfig, get_execution_config

log = getLogger(__name__)

_IS_WINDOWS = os.name == "nt"


def which(command: str, *, path: str | None = None) -> str | None:
    """Return the full path of ``command`` if it is an executable on ``path``."""

    return shutil.which(command, path=path)


def _split(command: str) -> list[str]:
    try:
        tokens = shlex.split(command, posix=not _IS_WINDOWS)
    except ValueError:
        return []
    if _IS_WINDOWS:
        tokens = [token.strip('"') for token in tokens]
    return tokens


def _kill_group(proc: subprocess.Popen[str]) -> None:
    """Kill the command together with any children its shell started."""

    try:
        if _IS_WINDOWS:
            proc.kill()
        else:
            os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        log.debug("Process group %s already exited", proc.pid)


@dataclass(frozen=True, slots=True)
class SubprocessExecutor:
    """Run commands and return their stripped standard output.

    Missing executables, timeouts, launch errors and non-zero exits all yield
    ``None``. A timeout of ``0`` means no bound at all. Each command runs in
    its own session so that a timeout kills everything the shell started.
    """

    config: ExecutionConfig = field(default_factory=get_execution_config)

    def __call__(
        self,
        command: str,
        *,
        timeout: float | None = None,
        path: str | None = None,
    ) -> str | None:
        tokens = _split(command)
        if not tokens:
            log.debug("Could not parse command %r; skipping", command)
            return None

        search_path = path or self.config.search_path
        if which(tokens[0], path=search_path) is None:
            log.debug("Command %r not found; skipping", tokens[0])
            return None

        if timeout is None:
            timeout = self.config.default_timeout_seconds
        env = {**os.environ, "PATH": search_path} if search_path else None

        try:
            proc = subprocess.Popen(  # noqa: S603
                command if self.config.shell else tokens,
                shell=self.config.shell,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                env=env,
                start_new_session=not _IS_WINDOWS,
            )
        except OSError as exc:
            log.warning("Could not run %r: %s", command, exc)
            return None

        try:
            stdout, stderr = proc.communicate(timeout=timeout or None)
        except subprocess.TimeoutExpired:
            _kill_group(proc)
            proc.communicate()
            log.warning("Timed out after %s seconds running %r", timeout, command)
            return None

        if proc.returncode != 0:
            log.debug(
                "Command %r exited with status %s: %s",
                command,
                proc.returncode,
                stderr.strip(),
            )
            return None

        output = stdout.rstrip()
        return output or None


__all__ = ["SubprocessExecutor", "which"]
