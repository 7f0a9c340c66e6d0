"""
Predicates for iterables and sized collections.

The wrapped value is re-read on every predicate call, so generators are
consumed once per check; pass an accessor producing a fresh iterable when the
source is a generator.

``contains_all`` and ``contains_none`` accept an optional callback that
receives each offending element, which verifiers use to report what is
missing or unexpected.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from affirm.assertions import assert_argument, assert_callable
from affirm.states.base import predicate
from affirm.states.objects import ObjectState


def _validate_size(expected: int) -> None:
    assert_argument(isinstance(expected, int) and expected >= 0, "Size must be a non-negative int", argument="expected")


def _validate_matcher(matcher: Callable[[Any], bool]) -> None:
    assert_callable(matcher, "Expected a callable element matcher", argument="matcher")


def _validate_elements(expected: Iterable[Any] | None, *args: Any, **kwargs: Any) -> None:
    assert_argument(
        expected is None or (isinstance(expected, Iterable) and not isinstance(expected, str)),
        f"Expected a collection of elements, got {type(expected).__name__}",
        argument="expected",
    )


def _contains(items: list[Any], element: Any) -> bool:
    return any(item == element for item in items)


class CollectionState(ObjectState):
    type_name = "Collection"

    def _items(self) -> list[Any] | None:
        value = self.value
        return None if value is None else list(value)

    @predicate("Equals '{0}'", diff=True)
    def is_equal(self, expected: Iterable[Any] | None) -> bool:
        items = self._items()
        if items is None or expected is None:
            return items is None and expected is None
        return items == list(expected)

    @predicate("Contains '{0}'")
    def contains(self, expected: Any) -> bool:
        items = self._items()
        return items is not None and _contains(items, expected)

    @predicate("Not Contains '{0}'")
    def not_contains(self, expected: Any) -> bool:
        items = self._items()
        return items is not None and not _contains(items, expected)

    @predicate("Contains All '{0}'", validate=_validate_elements)
    def contains_all(
        self,
        expected: Iterable[Any] | None,
        on_missing: Callable[[Any], None] | None = None,
    ) -> bool:
        items = self._items()
        if items is None or expected is None:
            return False
        result = True
        for element in expected:
            if not _contains(items, element):
                result = False
                if on_missing is None:
                    break
                on_missing(element)
        return result

    @predicate("Not Contains All '{0}'", validate=_validate_elements)
    def not_contains_all(self, expected: Iterable[Any] | None) -> bool:
        items = self._items()
        if items is None or expected is None:
            return False
        return not self.contains_all(expected)

    @predicate("Contains Any '{0}'", validate=_validate_elements)
    def contains_any(self, expected: Iterable[Any] | None) -> bool:
        items = self._items()
        if items is None or expected is None:
            return False
        return any(_contains(items, element) for element in expected)

    @predicate("Contains None '{0}'", validate=_validate_elements)
    def contains_none(
        self,
        expected: Iterable[Any] | None,
        on_match: Callable[[Any], None] | None = None,
    ) -> bool:
        items = self._items()
        if items is None or expected is None:
            return False
        result = True
        for element in expected:
            if _contains(items, element):
                result = False
                if on_match is None:
                    break
                on_match(element)
        return result

    @predicate("Has Element Matching '{0}'", validate=_validate_matcher)
    def has(self, matcher: Callable[[Any], bool]) -> bool:
        items = self._items()
        return items is not None and any(matcher(item) for item in items)

    @predicate("Has No Element Matching '{0}'", validate=_validate_matcher)
    def has_not(self, matcher: Callable[[Any], bool]) -> bool:
        items = self._items()
        return items is not None and not any(matcher(item) for item in items)

    @predicate("Is Empty")
    def is_empty(self) -> bool:
        items = self._items()
        return items is None or not items

    @predicate("Is Not Empty")
    def is_not_empty(self) -> bool:
        items = self._items()
        return bool(items)

    @predicate("Is Empty Or Contains '{0}'")
    def empty_or_contains(self, expected: Any) -> bool:
        items = self._items()
        return not items or _contains(items, expected)

    @predicate("Is Empty Or Not Contains '{0}'")
    def empty_or_not_contains(self, expected: Any) -> bool:
        items = self._items()
        return not items or not _contains(items, expected)

    @predicate("Size Equals '{0}'", validate=_validate_size)
    def size_equals(self, expected: int) -> bool:
        items = self._items()
        return items is not None and len(items) == expected

    @predicate("Size Is Greater Than '{0}'", validate=_validate_size)
    def size_is_greater_than(self, expected: int) -> bool:
        items = self._items()
        return items is not None and len(items) > expected

    @predicate("Size Is Less Than '{0}'", validate=_validate_size)
    def size_is_less_than(self, expected: int) -> bool:
        items = self._items()
        return items is not None and len(items) < expected
