"""Tests for the exception hierarchy, guard helpers and value accessors."""

import re

import pytest

from affirm.assertions import assert_argument, assert_callable, assert_config, assert_not_none, compile_pattern
from affirm.errors import AffirmError, ArgumentError, ConfigError, VerificationFailure
from affirm.queue import VerificationReport
from affirm.records import AssertionOutcome
from affirm.suppliers import as_supplier, is_lazy, lazy, resolve


class TestExceptionHierarchy:
    """Tests for the exception hierarchy."""

    def test_verification_failure_is_assertion_error(self) -> None:
        """Test runners report verification failures as failed tests."""
        error = VerificationFailure("failed")
        assert isinstance(error, AffirmError)
        assert isinstance(error, AssertionError)
        assert error.code == 600
        assert error.failures == []

    def test_failures_come_from_report(self) -> None:
        outcome = AssertionOutcome(passed=False, message="m", text="FAIL ::> m")
        report = VerificationReport(passed=False, outcomes=[outcome])

        error = VerificationFailure("failed", report=report)

        assert error.failures == [outcome]

    def test_argument_error_is_value_error(self) -> None:
        error = ArgumentError("bad", argument="pattern")
        assert isinstance(error, ValueError)
        assert error.argument == "pattern"
        assert error.code == 400

    def test_config_error_field(self) -> None:
        error = ConfigError("bad", field="interval_ms")
        assert error.field == "interval_ms"
        assert error.code == 300

    def test_cause_in_message(self) -> None:
        error = AffirmError("outer", cause=ValueError("inner"))
        assert str(error) == "outer caused by: inner"

    def test_explicit_code(self) -> None:
        assert AffirmError("x", code=123).code == 123


class TestGuardHelpers:
    """Tests for argument and configuration guards."""

    def test_assert_argument(self) -> None:
        assert_argument(True, "unused")
        with pytest.raises(ArgumentError) as exc_info:
            assert_argument(False, "Size must not be negative", argument="size")
        assert exc_info.value.argument == "size"

    def test_assert_config(self) -> None:
        assert_config(True, "unused")
        with pytest.raises(ConfigError):
            assert_config(False, "bad timeout", field="timeout")

    def test_assert_not_none_returns_value(self) -> None:
        assert assert_not_none(0, "unused") == 0
        with pytest.raises(ArgumentError):
            assert_not_none(None, "missing")

    def test_assert_callable(self) -> None:
        assert_callable(len, "unused")
        with pytest.raises(ArgumentError):
            assert_callable(42, "not callable")

    def test_compile_pattern(self) -> None:
        compiled = re.compile("a+")
        assert compile_pattern(compiled) is compiled
        assert compile_pattern("b+").fullmatch("bbb")
        with pytest.raises(ArgumentError, match="Invalid regular expression"):
            compile_pattern("(")


class TestSuppliers:
    """Tests for value accessors and lazy expected values."""

    def test_lazy_resolved_on_each_call(self) -> None:
        counter = iter(range(10))
        value = lazy(lambda: next(counter))

        assert is_lazy(value)
        assert resolve(value) == 0
        assert resolve(value) == 1
        assert resolve("plain") == "plain"

    def test_lazy_requires_callable(self) -> None:
        with pytest.raises(ArgumentError):
            lazy(5)  # type: ignore[arg-type]

    def test_as_supplier(self) -> None:
        """Callables become accessors; classes and plain values become constants."""
        assert as_supplier(5)() == 5
        assert as_supplier(lambda: 6)() == 6
        assert as_supplier(int)() is int
        assert as_supplier(lazy(lambda: 7))() == 7
