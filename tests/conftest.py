from __future__ import annotations

import pytest

from factkit.domain import FactCollection, Resolution
from tests.helpers.fakes import FakeExecutor, RecordingWarningSink, StubFact


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def warning_sink() -> RecordingWarningSink:
    return RecordingWarningSink()


@pytest.fixture
def stub_fact() -> StubFact:
    return StubFact()


@pytest.fixture
def resolution(
    stub_fact: StubFact,
    executor: FakeExecutor,
    warning_sink: RecordingWarningSink,
) -> Resolution:
    return Resolution("foo", stub_fact, executor=executor, warnings=warning_sink)


@pytest.fixture
def collection(executor: FakeExecutor, warning_sink: RecordingWarningSink) -> FactCollection:
    return FactCollection(executor=executor, warnings=warning_sink)
