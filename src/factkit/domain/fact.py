"""Facts and the collection that owns them.

A fact owns any number of resolutions and picks among them: suitable
resolutions are tried in descending selection weight and the first non-``None``
value wins. A found value is cached on the fact until :meth:`Fact.flush`; a fact
that found nothing is searched again on the next lookup.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .resolution import Resolution

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping

    from .ports import CommandExecutor, WarningSink

log = getLogger(__name__)


def normalize_fact_name(name: object) -> str:
    normalized = str(name).strip().lower()
    if not normalized:
        raise ValueError("Fact name must not be blank")
    return normalized


class Fact:
    """A named piece of system information with one or more resolutions."""

    def __init__(
        self,
        name: str,
        *,
        collection: FactCollection | None = None,
        executor: CommandExecutor,
        warnings: WarningSink,
    ) -> None:
        self._name = normalize_fact_name(name)
        self._collection = collection
        self._executor = executor
        self._warnings = warnings
        self._resolutions: list[Resolution] = []
        self._value: object = None
        self._resolved = False
        self._searching = False

    def __repr__(self) -> str:
        return f"Fact({self._name!r}, resolutions={len(self._resolutions)})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def resolutions(self) -> tuple[Resolution, ...]:
        return tuple(self._resolutions)

    def resolution(self, name: str) -> Resolution | None:
        return next((r for r in self._resolutions if r.name == name), None)

    def define_resolution(
        self, name: str | None = None, options: Mapping[str, object] | None = None
    ) -> Resolution:
        """Return the named resolution, creating it first if needed, and apply options.

        Without a name a new resolution named after the fact is always created.
        """

        resolution = self.resolution(name) if name is not None else None
        if resolution is None:
            resolution = Resolution(
                name or self._name,
                self,
                executor=self._executor,
                warnings=self._warnings,
            )
            self._resolutions.append(resolution)
        if options:
            resolution.set_options(options)
        return resolution

    def add(
        self, block: Callable[[Resolution], object] | None = None, /, **options: object
    ) -> Resolution:
        resolution = self.define_resolution(options=options)
        if block is not None:
            resolution.evaluate(block)
        return resolution

    def value(self) -> object:
        if self._resolved:
            return self._value
        if self._searching:
            log.debug("Caught recursion on %s", self._name)
            return None

        self._searching = True
        try:
            value = self._find_value()
        finally:
            self._searching = False

        if value is not None:
            self._value = value
            self._resolved = True
        return value

    def flush(self) -> None:
        for resolution in self._resolutions:
            resolution.flush()
        self._value = None
        self._resolved = False

    def _find_value(self) -> object:
        lookup = self._collection.value if self._collection is not None else _no_lookup
        suitable = [r for r in self._resolutions if r.suitable(lookup)]
        if not suitable:
            log.debug(
                "Found no suitable resolutions of %d for %s", len(self._resolutions), self._name
            )
            return None

        # sorted() is stable, so equal weights keep definition order
        for resolution in sorted(suitable, key=lambda r: r.selection_weight, reverse=True):
            value = resolution.value()
            if value is not None:
                return value
        return None


def _no_lookup(_name: str) -> object:
    return None


class FactCollection:
    """Registry of facts sharing one executor and one warning sink."""

    def __init__(
        self,
        *,
        executor: CommandExecutor,
        warnings: WarningSink,
    ) -> None:
        self._executor = executor
        self._warnings = warnings
        self._facts: dict[str, Fact] = {}

    def __iter__(self) -> Iterator[Fact]:
        return iter(self._facts.values())

    def __len__(self) -> int:
        return len(self._facts)

    def __contains__(self, name: object) -> bool:
        return str(name).strip().lower() in self._facts

    def define_fact(self, name: str) -> Fact:
        key = normalize_fact_name(name)
        fact = self._facts.get(key)
        if fact is None:
            fact = Fact(key, collection=self, executor=self._executor, warnings=self._warnings)
            self._facts[key] = fact
        return fact

    def add(
        self,
        name: str,
        block: Callable[[Resolution], object] | None = None,
        /,
        **options: object,
    ) -> Fact:
        fact = self.define_fact(name)
        fact.add(block, **options)
        return fact

    def fact(self, name: str) -> Fact | None:
        return self._facts.get(normalize_fact_name(name))

    def value(self, name: str) -> object:
        fact = self.fact(name)
        if fact is None:
            return None
        return fact.value()

    def flush(self) -> None:
        for fact in self._facts.values():
            fact.flush()

    def to_dict(self) -> dict[str, object]:
        """Resolve every fact and return the ones with a value, keyed by name."""

        values: dict[str, object] = {}
        for name, fact in sorted(self._facts.items()):
            value = fact.value()
            if value is not None:
                values[name] = value
        return values


__all__ = ["Fact", "FactCollection", "normalize_fact_name"]
