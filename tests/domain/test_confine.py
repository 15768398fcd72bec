from __future__ import annotations

import re

import pytest

from factkit.domain import Confine, Resolution
from factkit.domain.confine import confine_from_expectation

FACTS: dict[str, object] = {"kernel": "Linux", "processorcount": 8}


def lookup(name: str) -> object:
    return FACTS.get(name)


def test_confine_requires_predicate_or_values() -> None:
    with pytest.raises(ValueError, match="predicate or a fact"):
        Confine(fact="kernel")


@pytest.mark.parametrize(
    ("expected", "passes"),
    [
        ("linux", True),
        ("LINUX", True),
        (("Darwin", "Linux"), True),
        (["windows"], False),
        (re.compile(r"^Lin"), True),
        (lambda value: value == "Linux", True),
        (lambda value: value == "Darwin", False),
    ],
)
def test_confine_from_expectation_matches_kernel(expected: object, passes: bool) -> None:
    assert confine_from_expectation("kernel", expected).passes(lookup) is passes


def test_confine_accepts_ranges_for_numeric_facts() -> None:
    assert confine_from_expectation("processorcount", range(4, 16)).passes(lookup)
    assert not confine_from_expectation("processorcount", range(1, 4)).passes(lookup)


def test_confine_fails_when_fact_has_no_value() -> None:
    assert not confine_from_expectation("virtual", "physical").passes(lookup)


def test_predicate_is_not_called_when_fact_has_no_value() -> None:
    seen: list[object] = []

    def not_windows(value: object) -> bool:
        seen.append(value)
        return value != "windows"

    assert not confine_from_expectation("virtual", not_windows).passes(lookup)
    assert seen == []


def test_confine_treats_raising_predicate_as_unsuitable() -> None:
    def broken() -> bool:
        raise RuntimeError("boom")

    assert Confine(predicate=broken).passes(lookup) is False


def test_resolution_is_suitable_when_all_confines_pass(resolution: Resolution) -> None:
    resolution.confine(kernel="linux").confine(lambda: True)

    assert resolution.suitable(lookup)
    assert len(resolution.confines) == 2


def test_resolution_is_unsuitable_when_any_confine_fails(resolution: Resolution) -> None:
    resolution.confine(kernel="linux", processorcount=range(1, 2))

    assert not resolution.suitable(lookup)


def test_resolution_without_confines_is_suitable(resolution: Resolution) -> None:
    assert resolution.suitable(lookup)


def test_confine_requires_arguments(resolution: Resolution) -> None:
    with pytest.raises(TypeError):
        resolution.confine()


def test_selection_weight_defaults_to_confine_count(resolution: Resolution) -> None:
    resolution.confine(kernel="linux", processorcount=8)
    assert resolution.weight is None
    assert resolution.selection_weight == 2

    resolution.has_weight(100)
    assert resolution.selection_weight == 100
