"""Suitability constraints recorded on a resolution.

A confine either compares the current value of another fact against a set of
accepted values, or calls a predicate. Accepted values may be:

- plain values, compared case-insensitively when both sides are strings
- compiled regular expressions, matched with ``search``
- ``range`` objects, tested for membership
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TypeAlias

log = getLogger(__name__)

FactLookup: TypeAlias = Callable[[str], object]


def _normalize(value: object) -> object:
    if isinstance(value, str):
        return value.lower()
    return value


def _matches(expected: object, actual: object) -> bool:
    if isinstance(expected, re.Pattern):
        return expected.search(str(actual)) is not None
    if isinstance(expected, range):
        return isinstance(actual, int) and actual in expected
    return _normalize(expected) == _normalize(actual)


@dataclass(frozen=True, slots=True)
class Confine:
    """One suitability rule; see :meth:`passes`."""

    fact: str | None = None
    values: tuple[object, ...] = ()
    predicate: Callable[..., object] | None = None

    def __post_init__(self) -> None:
        if self.predicate is None and (self.fact is None or not self.values):
            raise ValueError("Confine requires a predicate or a fact with accepted values")

    def passes(self, lookup: FactLookup) -> bool:
        """Return whether this rule holds, treating predicate errors as a failure."""

        predicate = self.predicate
        try:
            if self.fact is None:
                return predicate is not None and bool(predicate())
            actual = lookup(self.fact)
            if actual is None:
                return False
            if predicate is not None:
                return bool(predicate(actual))
        except Exception as exc:  # noqa: BLE001
            log.debug("Confine on %s raised %s; treating as unsuitable", self.fact, exc)
            return False

        return any(_matches(expected, actual) for expected in self.values)

    def __str__(self) -> str:
        if self.fact is None:
            return "confined to a predicate"
        if self.predicate is not None:
            return f"confined by a predicate on {self.fact!r}"
        accepted = ", ".join(repr(value) for value in self.values)
        return f"{self.fact!r} in ({accepted})"


def confine_from_expectation(fact: str, expected: object) -> Confine:
    """Build a confine from a ``fact=expected`` keyword pair."""

    if callable(expected) and not isinstance(expected, re.Pattern):
        return Confine(fact=fact, predicate=expected)
    if isinstance(expected, list | tuple | set | frozenset):
        return Confine(fact=fact, values=tuple(expected))
    return Confine(fact=fact, values=(expected,))


__all__ = ["Confine", "FactLookup", "confine_from_expectation"]
