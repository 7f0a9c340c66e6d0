"""
String predicates.

Positive predicates return False when either the value or the argument is
None. Whole-value comparisons (``is_equal``, ``equals_ignore_case``) treat two
Nones as equal, and their negations are exact complements.

Regular expressions must match the whole value. A pattern that does not
compile raises ArgumentError when the condition is declared.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from affirm.assertions import assert_argument, compile_pattern
from affirm.states.base import predicate
from affirm.states.objects import ObjectState

_WHITESPACE = re.compile(r"\s")


def _validate_pattern(pattern: str | re.Pattern[str]) -> None:
    compile_pattern(pattern)


def _validate_patterns(patterns: Iterable[str | re.Pattern[str]]) -> None:
    assert_argument(
        patterns is not None and not isinstance(patterns, (str, re.Pattern)),
        "Expected a collection of patterns",
        argument="patterns",
    )
    for pattern in patterns:
        compile_pattern(pattern, argument="patterns")


def _validate_candidates(expected: Iterable[str] | None) -> None:
    assert_argument(
        expected is None or (isinstance(expected, Iterable) and not isinstance(expected, str)),
        f"Expected a collection of strings, got {type(expected).__name__}",
        argument="expected",
    )


def _candidates(expected: Iterable[str]) -> list[str]:
    # A lone string is one candidate, not a sequence of characters
    return [expected] if isinstance(expected, str) else list(expected)


def _validate_length(expected: int) -> None:
    assert_argument(isinstance(expected, int) and expected >= 0, "Length must be a non-negative int", argument="expected")


def _validate_count(sub_string: str, expected: int) -> None:
    assert_argument(bool(sub_string), "Substring to count must not be empty", argument="sub_string")
    _validate_length(expected)


def _strip_whitespace(value: str | None) -> str | None:
    return None if value is None else _WHITESPACE.sub("", value)


def _fold(value: str | None) -> str | None:
    return None if value is None else value.casefold()


class StringState(ObjectState):
    type_name = "String"

    @predicate("Contains '{0}'")
    def contains(self, expected: str | None) -> bool:
        value = self.value
        return value is not None and expected is not None and expected in value

    @predicate("Not Contains '{0}'")
    def not_contains(self, expected: str | None) -> bool:
        value = self.value
        return value is not None and expected is not None and expected not in value

    @predicate("Contains Ignore Case '{0}'")
    def contains_ignore_case(self, expected: str | None) -> bool:
        value = self.value
        return value is not None and expected is not None and expected.casefold() in value.casefold()

    @predicate("Starts With '{0}'")
    def starts_with(self, prefix: str | None) -> bool:
        value = self.value
        return value is not None and prefix is not None and value.startswith(prefix)

    @predicate("Not Starts With '{0}'")
    def not_starts_with(self, prefix: str | None) -> bool:
        value = self.value
        return value is not None and prefix is not None and not value.startswith(prefix)

    @predicate("Ends With '{0}'")
    def ends_with(self, suffix: str | None) -> bool:
        value = self.value
        return value is not None and suffix is not None and value.endswith(suffix)

    @predicate("Not Ends With '{0}'")
    def not_ends_with(self, suffix: str | None) -> bool:
        value = self.value
        return value is not None and suffix is not None and not value.endswith(suffix)

    @predicate("Equals Ignore Case '{0}'", diff=True)
    def equals_ignore_case(self, expected: str | None) -> bool:
        return _fold(self.value) == _fold(expected)

    @predicate("Not Equals Ignore Case '{0}'")
    def not_equals_ignore_case(self, expected: str | None) -> bool:
        return not self.equals_ignore_case(expected)

    @predicate("Equals Ignore White Spaces '{0}'", diff=True)
    def equals_ignore_white_spaces(self, expected: str | None) -> bool:
        return _strip_whitespace(self.value) == _strip_whitespace(expected)

    @predicate("Equals Any '{0}'", validate=_validate_candidates)
    def equals_any(self, expected: Iterable[str] | None) -> bool:
        value = self.value
        return value is not None and expected is not None and value in _candidates(expected)

    @predicate("Equals None '{0}'", validate=_validate_candidates)
    def equals_none(self, expected: Iterable[str] | None) -> bool:
        value = self.value
        return value is not None and expected is not None and value not in _candidates(expected)

    @predicate("Matches '{0}'", validate=_validate_pattern)
    def matches(self, pattern: str | re.Pattern[str]) -> bool:
        value = self.value
        return value is not None and compile_pattern(pattern).fullmatch(value) is not None

    @predicate("Not Matches '{0}'", validate=_validate_pattern)
    def not_matches(self, pattern: str | re.Pattern[str]) -> bool:
        value = self.value
        return value is not None and compile_pattern(pattern).fullmatch(value) is None

    @predicate("Match Any '{0}'", validate=_validate_patterns)
    def match_any(self, patterns: Iterable[str | re.Pattern[str]]) -> bool:
        value = self.value
        if value is None or patterns is None:
            return False
        return any(compile_pattern(p, argument="patterns").fullmatch(value) for p in patterns)

    @predicate("Match None '{0}'", validate=_validate_patterns)
    def match_none(self, patterns: Iterable[str | re.Pattern[str]]) -> bool:
        value = self.value
        if value is None or patterns is None:
            return False
        return not any(compile_pattern(p, argument="patterns").fullmatch(value) for p in patterns)

    @predicate("Is Blank")
    def is_blank(self) -> bool:
        value = self.value
        return value is None or not value.strip()

    @predicate("Is Not Blank")
    def is_not_blank(self) -> bool:
        return not self.is_blank()

    @predicate("Is Empty")
    def is_empty(self) -> bool:
        return not self.value

    @predicate("Is Not Empty")
    def is_not_empty(self) -> bool:
        return bool(self.value)

    @predicate("Is Alpha")
    def is_alpha(self) -> bool:
        value = self.value
        return value is not None and value.isalpha()

    @predicate("Is Alphanumeric")
    def is_alphanumeric(self) -> bool:
        value = self.value
        return value is not None and value.isalnum()

    @predicate("Is Numeric")
    def is_numeric(self) -> bool:
        value = self.value
        return value is not None and value.isdigit()

    @predicate("Length Equals '{0}'", validate=_validate_length)
    def length_equals(self, expected: int) -> bool:
        return len(self.value or "") == expected

    @predicate("Length Not Equals '{0}'", validate=_validate_length)
    def length_not_equals(self, expected: int) -> bool:
        return len(self.value or "") != expected

    @predicate("Number Of Matches Of '{0}' Equals '{1}'", validate=_validate_count)
    def number_of_matches_equals(self, sub_string: str, expected: int) -> bool:
        value = self.value
        return value is not None and value.count(sub_string) == expected
