"""Tests for immediate and polling assertion records."""

import operator
from typing import Any

import pytest

from affirm.config import AffirmConfig
from affirm.errors import ConfigError
from affirm.records import (
    AssertionOutcome,
    ImmediateAssertionRecord,
    PollingAssertionRecord,
    RetryPolicy,
    immediate_record,
    polling_record,
)

FAST_RETRY = RetryPolicy(timeout_seconds=0.05, interval_ms=5)


def constant(value: Any) -> Any:
    return lambda: value


class TestImmediateRecordFormatting:
    """Tests for PASS/FAIL section formatting."""

    def test_pass_section(self) -> None:
        """A passing comparison appends one PASS section."""
        record = immediate_record(constant("ABC"), constant("ABC"), operator.eq, "Verify Equals 'ABC'.")
        messages: list[str] = []

        assert record.evaluate(messages) is True
        assert messages == ["PASS ::> Verify Equals 'ABC'. Exp: 'ABC', Act: 'ABC'"]

    def test_fail_section_without_diff(self) -> None:
        """A failing comparison appends one FAIL section."""
        record = immediate_record(constant("ABC"), constant("ABD"), operator.eq, "Verify Equals 'ABD'.")
        messages: list[str] = []

        assert record.evaluate(messages) is False
        assert messages == ["FAIL ::> Verify Equals 'ABD'. Exp: 'ABD', Act: 'ABC'"]

    def test_fail_section_with_diff(self) -> None:
        """With print_diff, the failure shows a character diff and both values."""
        record = immediate_record(
            constant("ABC"),
            constant("ABD"),
            operator.eq,
            "Verify Equals 'ABD'.",
            print_diff=True,
        )
        messages: list[str] = []

        assert record.evaluate(messages) is False
        assert messages == ["FAIL ::> Verify Equals 'ABD'.\nDiff: 'AB|(-)D||(+)C|',\nExp: 'ABD',\nAct: 'ABC'"]

    def test_diff_uses_configured_formats(self) -> None:
        """Diff markers come from the record's config."""
        config = AffirmConfig(diff_insert_format="[+{}]", diff_delete_format="[-{}]")
        record = immediate_record(
            constant("ABC"),
            constant("ABD"),
            operator.eq,
            "Verify Equals 'ABD'.",
            print_diff=True,
            config=config,
        )

        outcome = record.run()

        assert "Diff: 'AB[-D][+C]'" in outcome.text

    def test_none_renders_as_null(self) -> None:
        """None values render as <NULL>."""
        record = immediate_record(constant(None), constant("x"), operator.eq, "Verify Equals 'x'.")

        outcome = record.run()

        assert outcome.text == "FAIL ::> Verify Equals 'x'. Exp: 'x', Act: '<NULL>'"

    def test_describe_returns_message(self) -> None:
        """describe() exposes the intent message."""
        record = immediate_record(constant(1), constant(1), operator.eq, "Verify one.")
        assert record.describe() == "Verify one."

    def test_factory_builds_immediate_record(self) -> None:
        """immediate_record returns the single-check record type."""
        record = immediate_record(constant(1), constant(1), operator.eq, "m")
        assert isinstance(record, ImmediateAssertionRecord)


class TestImmediateRecordEvaluation:
    """Tests for evaluation timing, hooks and exceptions."""

    def test_values_read_only_at_evaluation(self) -> None:
        """Neither accessor runs when the record is built."""
        reads: list[str] = []

        def actual() -> int:
            reads.append("actual")
            return 1

        def expected() -> int:
            reads.append("expected")
            return 1

        record = immediate_record(actual, expected, operator.eq, "m")
        assert reads == []

        record.run()
        assert reads == ["actual", "expected"]

    def test_failure_hook_receives_values(self) -> None:
        """The failure hook gets the compared actual and expected values."""
        seen: list[tuple[Any, Any]] = []
        record = immediate_record(constant(3), constant(4), operator.eq, "m", on_failure=lambda a, e: seen.append((a, e)))

        record.run()

        assert seen == [(3, 4)]

    def test_failure_hook_not_called_on_pass(self) -> None:
        """A passing record does not call the hook."""
        seen: list[Any] = []
        record = immediate_record(constant(4), constant(4), operator.eq, "m", on_failure=lambda a, e: seen.append(a))

        record.run()

        assert seen == []

    def test_failure_hook_error_does_not_change_outcome(self) -> None:
        """A raising hook is logged and the outcome stays a plain failure."""

        def hook(actual: Any, expected: Any) -> None:
            raise RuntimeError("hook broke")

        record = immediate_record(constant(3), constant(4), operator.eq, "m", on_failure=hook)

        outcome = record.run()

        assert outcome.passed is False
        assert outcome.text.startswith("FAIL ::>")

    def test_accessor_exception_propagates_after_hook(self) -> None:
        """An exception from the actual accessor propagates once the hook ran."""
        seen: list[tuple[Any, Any]] = []

        def actual() -> int:
            raise KeyError("missing")

        record = immediate_record(actual, constant(1), operator.eq, "m", on_failure=lambda a, e: seen.append((a, e)))

        with pytest.raises(KeyError):
            record.run()
        assert seen == [(None, None)]

    def test_comparator_exception_propagates(self) -> None:
        """An exception from the comparator propagates."""
        record = immediate_record(constant("a"), constant(1), operator.lt, "m")

        with pytest.raises(TypeError):
            record.run()


class TestPollingRecord:
    """Tests for records retried under a retry policy."""

    def test_passes_once_value_converges(self) -> None:
        """The comparison is retried until the actual value matches."""
        values = iter(range(100))
        record = polling_record(lambda: next(values), constant(3), operator.eq, "m", RetryPolicy(1.0, 1))

        outcome = record.run()

        assert outcome.passed is True
        assert outcome.actual == 3
        assert isinstance(record, PollingAssertionRecord)

    def test_expected_reread_every_attempt(self) -> None:
        """The expected accessor is re-read on each attempt too."""
        targets = iter(range(100))
        record = polling_record(constant(2), lambda: next(targets), operator.eq, "m", RetryPolicy(1.0, 1))

        assert record.run().passed is True

    def test_timeout_formats_final_snapshot(self) -> None:
        """After the timeout the failure reports the last values read."""
        values = iter(range(10_000))
        record = polling_record(lambda: next(values), constant(-1), operator.eq, "Verify negative.", FAST_RETRY)

        outcome = record.run()

        assert outcome.passed is False
        assert outcome.text == f"FAIL ::> Verify negative. Exp: '-1', Act: '{outcome.actual}'"
        assert outcome.actual > 0

    def test_transient_exceptions_are_retried(self) -> None:
        """Attempts that raise are retried until one passes."""
        calls = iter([ConnectionError("a"), ConnectionError("b"), 7])

        def actual() -> int:
            result = next(calls)
            if isinstance(result, Exception):
                raise result
            return result

        record = polling_record(actual, constant(7), operator.eq, "m", RetryPolicy(1.0, 1))

        assert record.run().passed is True

    def test_last_attempt_exception_propagates(self) -> None:
        """If the final attempt raised, the exception surfaces after the timeout."""

        def actual() -> int:
            raise ConnectionError("still down")

        record = polling_record(actual, constant(1), operator.eq, "m", FAST_RETRY)

        with pytest.raises(ConnectionError, match="still down"):
            record.run()

    def test_default_retry_comes_from_config(self) -> None:
        """A polling record built without a policy uses the configured defaults."""
        record = PollingAssertionRecord(actual=constant(1), expected=constant(1), comparator=operator.eq, message="m")

        assert record.retry == RetryPolicy(timeout_seconds=5.0, interval_ms=10)


class TestRetryPolicy:
    """Tests for retry policy construction."""

    def test_from_config_fills_missing_values(self) -> None:
        """Only the values not given are taken from config."""
        config = AffirmConfig(default_wait_seconds=9, default_interval_ms=300)

        assert RetryPolicy.from_config(config) == RetryPolicy(9, 300)
        assert RetryPolicy.from_config(config, timeout_seconds=2) == RetryPolicy(2, 300)
        assert RetryPolicy.from_config(config, 2, 50) == RetryPolicy(2, 50)

    def test_zero_values_are_not_replaced(self) -> None:
        """Zero is an explicit value, not a missing one."""
        config = AffirmConfig(default_wait_seconds=9, default_interval_ms=300)

        assert RetryPolicy.from_config(config, 0, 0) == RetryPolicy(0, 0)

    def test_negative_values_rejected(self) -> None:
        """Negative timeouts or intervals are configuration errors."""
        with pytest.raises(ConfigError):
            RetryPolicy(-1, 10)
        with pytest.raises(ConfigError):
            RetryPolicy(1, -10)


class TestAssertionOutcome:
    """Tests for outcome snapshots."""

    def test_errored_outcome(self) -> None:
        """An errored outcome is a failure with an ERROR section."""
        error = ValueError("boom")

        outcome = AssertionOutcome.errored("Verify thing.", error)

        assert outcome.passed is False
        assert outcome.error is error
        assert outcome.text == "ERROR ::> Verify thing. ValueError: boom"
