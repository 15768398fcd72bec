"""Fact resolution domain: resolutions, confines and the facts that own them."""

from __future__ import annotations

from .confine import Confine
from .fact import Fact, FactCollection
from .resolution import (
    CallbackCode,
    CommandCode,
    InvalidResolutionOptionsError,
    Resolution,
    ResolutionCode,
    ResolutionOptions,
    UnsetCode,
)

__all__ = [
    "CallbackCode",
    "CommandCode",
    "Confine",
    "Fact",
    "FactCollection",
    "InvalidResolutionOptionsError",
    "Resolution",
    "ResolutionCode",
    "ResolutionOptions",
    "UnsetCode",
]
