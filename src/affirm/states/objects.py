"""Predicates shared by every value type: equality, nullness, membership."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from affirm.assertions import assert_argument
from affirm.states.base import StateView, predicate


def _validate_candidates(expected: Iterable[Any] | None) -> None:
    assert_argument(
        expected is None or (isinstance(expected, Iterable) and not isinstance(expected, str)),
        f"Expected a collection of candidates, got {type(expected).__name__}",
        argument="expected",
    )


def _validate_type(expected: type | tuple[type, ...]) -> None:
    types = expected if isinstance(expected, tuple) else (expected,)
    assert_argument(
        all(isinstance(t, type) for t in types),
        f"Expected a type or tuple of types, got {expected!r}",
        argument="expected",
    )


class ObjectState(StateView[Any]):
    type_name = "Object"

    @predicate("Equals '{0}'", diff=True)
    def is_equal(self, expected: Any) -> bool:
        return bool(self.value == expected)

    @predicate("Not Equals '{0}'")
    def is_not_equal(self, expected: Any) -> bool:
        return not self.is_equal(expected)

    @predicate("Is Null")
    def is_null(self) -> bool:
        return self.value is None

    @predicate("Is Not Null")
    def is_not_null(self) -> bool:
        return self.value is not None

    @predicate("Is In '{0}'", validate=_validate_candidates)
    def is_in(self, expected: Iterable[Any] | None) -> bool:
        if expected is None:
            return False
        value = self.value
        return any(value == e for e in expected)

    @predicate("Is Not In '{0}'", validate=_validate_candidates)
    def is_not_in(self, expected: Iterable[Any] | None) -> bool:
        if expected is None:
            return True
        return not self.is_in(expected)

    @predicate("Is Instance Of '{0}'", validate=_validate_type)
    def is_instance_of(self, expected: type | tuple[type, ...]) -> bool:
        return isinstance(self.value, expected)
