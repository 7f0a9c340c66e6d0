"""
State views: typed facades exposing boolean predicates over a lazily read value.

``state_for`` picks the catalog matching a value's runtime type.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date
from numbers import Number
from typing import Any

from affirm.states.base import PredicateSpec, StateView, predicate, render
from affirm.states.booleans import BooleanState
from affirm.states.collections import CollectionState
from affirm.states.dates import DateState
from affirm.states.mappings import MappingState
from affirm.states.numbers import NumberState
from affirm.states.objects import ObjectState
from affirm.states.strings import StringState


def state_for(value: Any) -> type[ObjectState]:
    """Return the state class best matching the runtime type of a value."""
    # bool before Number: bool is an int subclass
    if isinstance(value, bool):
        return BooleanState
    if isinstance(value, str):
        return StringState
    if isinstance(value, Number):
        return NumberState
    if isinstance(value, date):
        return DateState
    if isinstance(value, Mapping):
        return MappingState
    if isinstance(value, Iterable) and not isinstance(value, (bytes, bytearray)):
        return CollectionState
    return ObjectState


__all__ = [
    "BooleanState",
    "CollectionState",
    "DateState",
    "MappingState",
    "NumberState",
    "ObjectState",
    "PredicateSpec",
    "StateView",
    "StringState",
    "predicate",
    "render",
    "state_for",
]
