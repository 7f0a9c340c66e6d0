"""Predicates for date and datetime values."""

from __future__ import annotations

from datetime import date, datetime

from affirm.assertions import assert_argument
from affirm.states.base import predicate
from affirm.states.objects import ObjectState


def _validate_range(lower: date, upper: date) -> None:
    assert_argument(lower is not None and upper is not None, "Range bounds must not be None", argument="lower")
    pair = _comparable(lower, upper)
    assert_argument(pair is not None, f"Bounds {lower!r} and {upper!r} cannot be compared", argument="lower")
    assert_argument(pair is None or pair[0] <= pair[1], f"Lower bound {lower} is after upper bound {upper}", argument="lower")


def _day(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def _comparable(left: date, right: date) -> tuple[date, date] | None:
    """Bring two dates to a common footing, or None when they cannot be ordered.

    A datetime compared with a plain date is compared by day. Naive and
    aware datetimes have no common footing.
    """
    if isinstance(left, datetime) and isinstance(right, datetime):
        if (left.utcoffset() is None) != (right.utcoffset() is None):
            return None
        return left, right
    return _day(left), _day(right)


def _ordered(*values: date) -> bool:
    """True when each value is at or before the next one."""
    for earlier, later in zip(values, values[1:]):
        pair = _comparable(earlier, later)
        if pair is None or pair[0] > pair[1]:
            return False
    return True


class DateState(ObjectState):
    type_name = "Date"

    @predicate("Is Before '{0}'")
    def is_before(self, expected: date | None) -> bool:
        value = self.value
        if value is None or expected is None:
            return False
        pair = _comparable(value, expected)
        return pair is not None and pair[0] < pair[1]

    @predicate("Is After '{0}'")
    def is_after(self, expected: date | None) -> bool:
        value = self.value
        if value is None or expected is None:
            return False
        pair = _comparable(value, expected)
        return pair is not None and pair[0] > pair[1]

    @predicate("Is Same Day As '{0}'", diff=True)
    def is_same_day_as(self, expected: date | None) -> bool:
        value = self.value
        return value is not None and expected is not None and _day(value) == _day(expected)

    @predicate("Is Same Time As '{0}'", diff=True)
    def is_same_time_as(self, expected: datetime | None) -> bool:
        value = self.value
        if not isinstance(value, datetime) or not isinstance(expected, datetime):
            return False
        return value.replace(microsecond=0) == expected.replace(microsecond=0)

    @predicate("Is Between '{0}' And '{1}'", validate=_validate_range)
    def is_between(self, lower: date, upper: date) -> bool:
        value = self.value
        return value is not None and _ordered(lower, value, upper)
