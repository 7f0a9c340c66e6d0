"""
Guard helpers for validating arguments and configuration.

These raise immediately at the point of use. They are for programming
mistakes (a bad regex, a negative timeout), not for verification outcomes,
which go through verifiers and surface as VerificationFailure.

Example:
    from affirm.assertions import assert_config, assert_argument

    assert_config(timeout >= 0, "Timeout must not be negative", field="timeout")
    assert_argument(lower <= upper, "Lower bound exceeds upper bound", argument="lower")
"""

from __future__ import annotations

import re
from typing import TypeVar

from affirm.errors import ArgumentError, ConfigError

T = TypeVar("T")


def assert_argument(
    condition: bool,
    message: str,
    argument: str | None = None,
) -> None:
    """
    Assert that a predicate argument is well formed.

    Args:
        condition: The condition to check
        message: Error message if condition is false
        argument: Optional argument name for context

    Raises:
        ArgumentError: If condition is false

    Example:
        assert_argument(size >= 0, "Size must not be negative", argument="size")
    """
    if not condition:
        raise ArgumentError(message, argument=argument)


def assert_config(
    condition: bool,
    message: str,
    field: str | None = None,
) -> None:
    """
    Assert a configuration condition.

    Args:
        condition: The condition to check
        message: Error message if condition is false
        field: Optional field name for context

    Raises:
        ConfigError: If condition is false

    Example:
        assert_config(interval_ms >= 0, "Interval must not be negative", field="interval_ms")
    """
    if not condition:
        raise ConfigError(message, field=field)


def assert_not_none(
    value: T | None,
    message: str,
    argument: str | None = None,
) -> T:
    """
    Assert that a value is not None and return it.

    Raises:
        ArgumentError: If value is None
    """
    if value is None:
        raise ArgumentError(message, argument=argument)
    return value


def assert_callable(value: object, message: str, argument: str | None = None) -> None:
    """Assert that a value can be called."""
    if not callable(value):
        raise ArgumentError(message, argument=argument)


def compile_pattern(pattern: str | re.Pattern[str], argument: str = "pattern") -> re.Pattern[str]:
    """
    Compile a regular expression, reporting malformed patterns as ArgumentError.

    Already-compiled patterns are returned unchanged.

    Raises:
        ArgumentError: If the pattern is None or does not compile
    """
    if isinstance(pattern, re.Pattern):
        return pattern
    assert_not_none(pattern, "Pattern must not be None", argument=argument)
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ArgumentError(f"Invalid regular expression {pattern!r}: {e}", argument=argument, cause=e) from e
