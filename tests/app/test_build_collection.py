from __future__ import annotations

import pytest

from factkit.adapters import LoggingWarningSink, SubprocessExecutor
from factkit.app import build_collection
from factkit.config import ExecutionConfig, InvalidConfigurationError
from factkit.domain import Resolution
from tests.helpers.fakes import FakeExecutor, RecordingWarningSink, StubFact


def test_build_collection_wires_default_adapters(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FACTKIT_EXEC_TIMEOUT", raising=False)
    collection = build_collection(ExecutionConfig(default_timeout_seconds=3.0))

    resolution = collection.define_fact("kernel").define_resolution("uname")

    executor = resolution._executor  # noqa: SLF001  # pyright: ignore[reportPrivateUsage]
    warnings = resolution._warnings  # noqa: SLF001  # pyright: ignore[reportPrivateUsage]
    assert isinstance(executor, SubprocessExecutor)
    assert executor.config.default_timeout_seconds == 3.0
    assert isinstance(warnings, LoggingWarningSink)


def test_build_collection_reads_environment_only_at_the_edge(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("FACTKIT_EXEC_TIMEOUT", "never")

    with pytest.raises(InvalidConfigurationError):
        build_collection()

    resolution = Resolution(
        "uname", StubFact(), executor=FakeExecutor(), warnings=RecordingWarningSink()
    )
    assert resolution.value() is None


def test_build_collection_accepts_explicit_collaborators() -> None:
    executor = FakeExecutor(outputs={"uname -s": "Linux"})
    collection = build_collection(executor=executor, warnings=RecordingWarningSink())
    collection.add("kernel", lambda r: r.setcode("uname -s"))

    assert collection.value("kernel") == "Linux"
    assert [call.command for call in executor.calls] == ["uname -s"]


def test_resolution_requires_injected_collaborators() -> None:
    with pytest.raises(TypeError):
        Resolution("uname", StubFact())  # type: ignore[call-arg]
