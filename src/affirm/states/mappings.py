"""Mapping predicates over keys, values and entries."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from affirm.assertions import assert_argument
from affirm.states.base import predicate
from affirm.states.objects import ObjectState

_MISSING = object()


def _validate_entries(expected: Mapping[Any, Any] | None) -> None:
    assert_argument(
        expected is None or isinstance(expected, Mapping),
        f"Expected a mapping of entries, got {type(expected).__name__}",
        argument="expected",
    )


def _validate_size(expected: int) -> None:
    assert_argument(isinstance(expected, int) and expected >= 0, "Size must be a non-negative int", argument="expected")


class MappingState(ObjectState):
    type_name = "Map"

    @predicate("Equals '{0}'", diff=True)
    def is_equal(self, expected: Mapping[Any, Any] | None) -> bool:
        value = self.value
        if value is None or expected is None:
            return value is None and expected is None
        return dict(value) == dict(expected)

    @predicate("Contains Key '{0}'")
    def contains_key(self, key: Any) -> bool:
        value = self.value
        return value is not None and key in value

    @predicate("Not Contains Key '{0}'")
    def not_contains_key(self, key: Any) -> bool:
        value = self.value
        return value is not None and key not in value

    @predicate("Contains Value '{0}'")
    def contains_value(self, expected: Any) -> bool:
        value = self.value
        return value is not None and any(v == expected for v in value.values())

    @predicate("Contains Entry '{0}' => '{1}'")
    def contains_entry(self, key: Any, expected: Any) -> bool:
        value = self.value
        if value is None:
            return False
        return bool(value.get(key, _MISSING) == expected)

    @predicate("Contains All Entries '{0}'", validate=_validate_entries)
    def contains_all_entries(self, expected: Mapping[Any, Any] | None) -> bool:
        value = self.value
        if value is None or expected is None:
            return False
        return all(value.get(k, _MISSING) == v for k, v in expected.items())

    @predicate("Is Empty")
    def is_empty(self) -> bool:
        return not self.value

    @predicate("Is Not Empty")
    def is_not_empty(self) -> bool:
        return bool(self.value)

    @predicate("Size Equals '{0}'", validate=_validate_size)
    def size_equals(self, expected: int) -> bool:
        value = self.value
        return value is not None and len(value) == expected
