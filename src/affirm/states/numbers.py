"""Ordering and range predicates for numbers (int, float, Decimal, Fraction)."""

from __future__ import annotations

import math
from numbers import Real
from typing import Any

from affirm.assertions import assert_argument
from affirm.states.base import predicate
from affirm.states.objects import ObjectState


def _validate_range(lower: Any, upper: Any) -> None:
    assert_argument(lower is not None and upper is not None, "Range bounds must not be None", argument="lower")
    assert_argument(lower <= upper, f"Lower bound {lower} exceeds upper bound {upper}", argument="lower")


def _validate_precision(expected: Any, precision: Any) -> None:
    assert_argument(precision is not None and precision >= 0, "Precision must be a non-negative number", argument="precision")


class NumberState(ObjectState):
    type_name = "Number"

    def _comparable(self, other: Any) -> Any:
        value = self.value
        if value is None or other is None:
            return None
        return value

    @predicate("Is Greater Than '{0}'")
    def is_greater_than(self, expected: Any) -> bool:
        value = self._comparable(expected)
        return value is not None and value > expected

    @predicate("Is Greater Or Equal '{0}'")
    def is_greater_or_equal(self, expected: Any) -> bool:
        value = self._comparable(expected)
        return value is not None and value >= expected

    @predicate("Is Less Than '{0}'")
    def is_less_than(self, expected: Any) -> bool:
        value = self._comparable(expected)
        return value is not None and value < expected

    @predicate("Is Less Or Equal '{0}'")
    def is_less_or_equal(self, expected: Any) -> bool:
        value = self._comparable(expected)
        return value is not None and value <= expected

    @predicate("Is Between '{0}' And '{1}'", validate=_validate_range)
    def is_between(self, lower: Any, upper: Any) -> bool:
        value = self.value
        return value is not None and lower <= value <= upper

    @predicate("Is Not Between '{0}' And '{1}'", validate=_validate_range)
    def is_not_between(self, lower: Any, upper: Any) -> bool:
        value = self.value
        return value is not None and not lower <= value <= upper

    @predicate("Is Close To '{0}' With Precision '{1}'", validate=_validate_precision)
    def is_close_to(self, expected: Any, precision: Any) -> bool:
        value = self._comparable(expected)
        if value is None:
            return False
        if isinstance(value, Real) and isinstance(expected, Real) and not (
            math.isfinite(value) and math.isfinite(expected)
        ):
            return False
        return bool(abs(value - expected) <= precision)

    @predicate("Is Positive")
    def is_positive(self) -> bool:
        value = self.value
        return value is not None and value > 0

    @predicate("Is Negative")
    def is_negative(self) -> bool:
        value = self.value
        return value is not None and value < 0

    @predicate("Is Zero")
    def is_zero(self) -> bool:
        value = self.value
        return value is not None and value == 0
