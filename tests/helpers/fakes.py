"""In-memory collaborators for resolution tests."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class ExecCall:
    command: str
    timeout: float | None
    path: str | None


@dataclass(slots=True)
class FakeExecutor:
    """Command executor returning canned output per command line."""

    outputs: dict[str, str | None] = field(default_factory=dict[str, str | None])
    calls: list[ExecCall] = field(default_factory=list[ExecCall])

    def __call__(
        self,
        command: str,
        *,
        timeout: float | None = None,
        path: str | None = None,
    ) -> str | None:
        self.calls.append(ExecCall(command=command, timeout=timeout, path=path))
        return self.outputs.get(command)


@dataclass(slots=True)
class RecordingWarningSink:
    warnings: list[str] = field(default_factory=list[str])
    once: list[str] = field(default_factory=list[str])

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def warnonce(self, message: str) -> None:
        self.once.append(message)


@dataclass(frozen=True, slots=True)
class StubFact:
    name: str = "stubfact"
