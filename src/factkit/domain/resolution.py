"""Resolutions: one strategy for producing the value of a fact.

A resolution holds either a command string, which is handed to a
:class:`~factkit.domain.ports.CommandExecutor`, or a callable that is invoked
directly. Value priority is fixed:

1) an explicitly set value
2) the configured code (command or callable)
3) ``None``

Nothing is cached here; the owning fact decides how often ``value()`` runs.
Failures of callable code are reported through the injected
:class:`~factkit.domain.ports.WarningSink` and turn into ``None``.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, TypeVar

from pydantic import BaseModel, ConfigDict, NonNegativeFloat, NonNegativeInt, ValidationError

from .confine import Confine, confine_from_expectation

if TYPE_CHECKING:
    from .confine import FactLookup
    from .ports import CommandExecutor, WarningSink

log = getLogger(__name__)

Callback: TypeAlias = Callable[[], object]
TCallback = TypeVar("TCallback", bound=Callback)


class FactHandle(Protocol):
    """What a resolution needs to know about its owning fact."""

    @property
    def name(self) -> str: ...


class InvalidResolutionOptionsError(ValueError):
    """Raised when ``set_options`` receives unknown keys or malformed values."""


@dataclass(frozen=True, slots=True)
class UnsetCode:
    """No code configured yet."""


@dataclass(frozen=True, slots=True)
class CommandCode:
    """Command line run through the execution collaborator."""

    command: str


@dataclass(frozen=True, slots=True)
class CallbackCode:
    """Callable invoked with no arguments."""

    callback: Callback


ResolutionCode: TypeAlias = UnsetCode | CommandCode | CallbackCode

UNSET = UnsetCode()


class ResolutionOptions(BaseModel):
    """Options accepted by :meth:`Resolution.set_options`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    value: Any = None
    timeout: NonNegativeInt | NonNegativeFloat | None = None
    weight: int | None = None

    @classmethod
    def parse(cls, options: Mapping[str, object]) -> ResolutionOptions:
        try:
            return cls.model_validate(dict(options))
        except ValidationError as exc:
            errors = exc.errors()
            unknown = sorted(
                str(error["loc"][0]) for error in errors if error["type"] == "extra_forbidden"
            )
            if unknown:
                raise InvalidResolutionOptionsError(
                    f"Invalid resolution options {', '.join(unknown)}"
                ) from exc
            details = "; ".join(f"{error['loc'][0]}: {error['msg']}" for error in errors)
            raise InvalidResolutionOptionsError(
                f"Invalid resolution option values: {details}"
            ) from exc


def _source_location(block: Callable[..., object]) -> str:
    code = getattr(block, "__code__", None)
    if code is not None:
        return f"{code.co_filename}:{code.co_firstlineno}"
    frame = inspect.currentframe()
    # this helper <- evaluate() <- caller
    for _ in range(2):
        frame = frame.f_back if frame is not None else None
    if frame is None:
        return "<unknown>"
    return f"{frame.f_code.co_filename}:{frame.f_lineno}"


class Resolution:
    """A named way of computing one fact's value."""

    def __init__(
        self,
        name: str,
        fact: FactHandle,
        *,
        executor: CommandExecutor,
        warnings: WarningSink,
    ) -> None:
        if not name:
            raise ValueError("Resolution requires a name")
        if fact is None:
            raise ValueError("Resolution requires a fact")
        self._name = name
        self._fact = fact
        self._executor = executor
        self._warnings = warnings

        self._code: ResolutionCode = UNSET
        self._value: object = None
        self._limit: int | float | None = None
        self._weight: int | None = None
        self._confines: list[Confine] = []
        self._on_flush: Callback | None = None
        self._last_evaluated: str | None = None

    def __repr__(self) -> str:
        return f"Resolution({self._name!r}, fact={self.fact_name!r}, code={self._code!r})"

    # Identity

    @property
    def name(self) -> str:
        return self._name

    @property
    def fact(self) -> FactHandle:
        return self._fact

    @property
    def fact_name(self) -> str:
        return str(getattr(self._fact, "name", self._fact))

    @property
    def qualified_name(self) -> str:
        return f"fact={self.fact_name!r}, resolution={self._name!r}"

    # Code

    @property
    def code(self) -> str | Callback | None:
        """The configured command string or callable, or ``None`` when unset."""

        code = self._code
        if isinstance(code, CommandCode):
            return code.command
        if isinstance(code, CallbackCode):
            return code.callback
        return None

    @property
    def code_variant(self) -> ResolutionCode:
        return self._code

    def setcode(
        self,
        command: str | TCallback | None = None,
        block: Callback | None = None,
    ) -> str | TCallback | Callback:
        """Set the code used by :meth:`value`, replacing whatever was set before.

        A command string always wins over a callable passed alongside it. A
        callable may also be given as the only positional argument, which lets
        ``setcode`` decorate a function; the function is returned unchanged.
        """

        if isinstance(command, str):
            self._code = CommandCode(command)
            return command
        if command is not None:
            if not callable(command):
                kind = type(command).__name__
                raise TypeError(f"setcode expects a command string or a callable, got {kind}")
            self._code = CallbackCode(command)
            return command
        if block is not None:
            if not callable(block):
                raise TypeError(f"setcode block must be callable, got {type(block).__name__}")
            self._code = CallbackCode(block)
            return block
        raise TypeError("setcode requires a command string or a callable")

    # Options

    @property
    def limit(self) -> int | float | None:
        """Timeout in seconds handed to the executor; ``None`` uses its default."""

        return self._limit

    @property
    def timeout(self) -> int | float | None:
        return self._limit

    @property
    def weight(self) -> int | None:
        return self._weight

    @property
    def selection_weight(self) -> int:
        """Weight used to rank resolutions: explicit weight, else confine count."""

        if self._weight is not None:
            return self._weight
        return len(self._confines)

    def set_value(self, value: object) -> None:
        self._value = value

    def has_weight(self, weight: int) -> Resolution:
        self._weight = weight
        return self

    def set_options(
        self, options: Mapping[str, object] | None = None, /, **kwargs: object
    ) -> Resolution:
        """Apply ``value``, ``timeout`` and ``weight`` options.

        Every key is validated before any is applied, so a bad key or value
        leaves the resolution untouched.
        """

        merged: dict[str, object] = dict(options or {})
        merged.update(kwargs)
        parsed = ResolutionOptions.parse(merged)
        for key in parsed.model_fields_set:
            if key == "value":
                self._value = parsed.value
            elif key == "timeout":
                self._limit = parsed.timeout
            elif key == "weight":
                self._weight = parsed.weight
        return self

    # Suitability

    @property
    def confines(self) -> tuple[Confine, ...]:
        return tuple(self._confines)

    def confine(
        self, predicate: Callable[[], object] | None = None, /, **expected: object
    ) -> Resolution:
        """Restrict this resolution to systems where the given checks pass.

        Keyword arguments map another fact's name to an accepted value, a
        collection of accepted values, or a one-argument predicate over that
        fact's value.
        """

        if predicate is None and not expected:
            raise TypeError("confine requires a predicate or fact expectations")
        if predicate is not None:
            self._confines.append(Confine(predicate=predicate))
        self._confines.extend(
            confine_from_expectation(fact, value) for fact, value in expected.items()
        )
        return self

    def suitable(self, lookup: FactLookup) -> bool:
        for confine in self._confines:
            if not confine.passes(lookup):
                log.debug("%s is unsuitable: %s", self.qualified_name, confine)
                return False
        return True

    # Flushing

    def on_flush(self, callback: TCallback) -> TCallback:
        self._on_flush = callback
        return callback

    def flush(self) -> None:
        if self._on_flush is not None:
            self._on_flush()

    # Evaluation

    @property
    def last_evaluated(self) -> str | None:
        return self._last_evaluated

    @property
    def evaluated(self) -> bool:
        return self._last_evaluated is not None

    def evaluate(self, block: Callable[[Resolution], object]) -> Resolution:
        """Run a configuration block against this resolution.

        The block receives the resolution as its only argument. Evaluating the
        same resolution twice is allowed but reported as a warning.
        """

        location = _source_location(block)
        if self._last_evaluated is not None:
            self._warnings.warn(
                f"Already evaluated {self._name} at {self._last_evaluated}, reevaluating anyways"
            )
        block(self)
        self._last_evaluated = location
        return self

    # Value

    def value(self) -> object:
        if self._value is not None:
            return self._value

        code = self._code
        if isinstance(code, CommandCode):
            return self._executor(code.command, timeout=self._limit)
        if isinstance(code, CallbackCode):
            try:
                return code.callback()
            except Exception as exc:  # noqa: BLE001
                self._warnings.warn(f"Could not retrieve {self.qualified_name}: {exc}")
                return None
        return None


__all__ = [
    "UNSET",
    "CallbackCode",
    "CommandCode",
    "FactHandle",
    "InvalidResolutionOptionsError",
    "Resolution",
    "ResolutionCode",
    "ResolutionOptions",
    "UnsetCode",
]
