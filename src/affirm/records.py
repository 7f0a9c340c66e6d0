"""
Assertion records: one pending comparison each.

A record pairs an actual-value accessor with an expected-value accessor and a
comparator. It exposes a narrow contract:

- ``evaluate(messages)`` runs the comparison once, appends one formatted
  section to ``messages`` and returns the outcome;
- ``describe()`` returns the intent message.

Two kinds exist:

- ImmediateAssertionRecord reads both values once and compares.
- PollingAssertionRecord re-reads and compares under a RetryPolicy until the
  comparison holds or the policy's timeout elapses.

Expected values are read only when the comparison runs, never when the record
is built. Section formats:

    PASS ::> Verify Equals 'ABC'. Exp: 'ABC', Act: 'ABC'
    FAIL ::> Verify Equals 'ABD'. Exp: 'ABD', Act: 'ABC'
    FAIL ::> Verify Equals 'ABD'.
    Diff: 'AB|(-)D||(+)C|',
    Exp: 'ABD',
    Act: 'ABC'
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from affirm.assertions import assert_config
from affirm.config import AffirmConfig, get_config
from affirm.diff import structural_diff
from affirm.polling import PollingEngine
from affirm.states.base import render
from affirm.suppliers import Supplier

logger = logging.getLogger(__name__)

Comparator = Callable[[Any, Any], bool]
FailureHook = Callable[[Any, Any], None]


@dataclass(frozen=True)
class RetryPolicy:
    """
    How long and how often a polling record retries.

    Attributes:
        timeout_seconds: Maximum time to keep retrying
        interval_ms: Sleep between attempts in milliseconds
    """

    timeout_seconds: float
    interval_ms: int

    def __post_init__(self) -> None:
        assert_config(self.timeout_seconds >= 0, f"timeout_seconds must not be negative, got {self.timeout_seconds}", field="timeout_seconds")
        assert_config(self.interval_ms >= 0, f"interval_ms must not be negative, got {self.interval_ms}", field="interval_ms")

    @classmethod
    def from_config(
        cls,
        config: AffirmConfig,
        timeout_seconds: float | None = None,
        interval_ms: int | None = None,
    ) -> RetryPolicy:
        """Build a policy, taking missing values from the configured defaults."""
        return cls(
            timeout_seconds=config.default_wait_seconds if timeout_seconds is None else timeout_seconds,
            interval_ms=config.default_interval_ms if interval_ms is None else interval_ms,
        )

    def engine(self) -> PollingEngine:
        return PollingEngine(self.timeout_seconds, self.interval_ms)


@dataclass(frozen=True)
class AssertionOutcome:
    """
    Snapshot of one record evaluation.

    Attributes:
        passed: Whether the comparison held
        message: The record's intent message
        text: The formatted PASS/FAIL/ERROR section
        actual: Actual value of the final attempt
        expected: Expected value of the final attempt
        error: Exception raised while evaluating, if any
    """

    passed: bool
    message: str
    text: str
    actual: Any = None
    expected: Any = None
    error: BaseException | None = None

    @classmethod
    def errored(cls, message: str, error: BaseException) -> AssertionOutcome:
        """Outcome for a record whose evaluation raised instead of answering."""
        return cls(
            passed=False,
            message=message,
            text=f"ERROR ::> {message.strip()} {type(error).__name__}: {error}",
            error=error,
        )


@dataclass(frozen=True)
class AssertionRecord(ABC):
    """
    Base record. Subclasses decide how the comparison is attempted.

    Attributes:
        actual: Accessor producing the actual value
        expected: Accessor producing the expected value
        comparator: (actual, expected) -> bool
        message: Description of the intent
        print_diff: Append a structural diff on failure
        on_failure: Called with the final (actual, expected) on failure
        config: Supplies diff formats; defaults to the process-wide config
    """

    actual: Supplier
    expected: Supplier
    comparator: Comparator
    message: str
    print_diff: bool = False
    on_failure: FailureHook | None = None
    config: AffirmConfig | None = field(default=None, repr=False, compare=False)

    def evaluate(self, messages: list[str]) -> bool:
        """Run the comparison, append its formatted section and return the result."""
        outcome = self.run()
        messages.append(outcome.text)
        return outcome.passed

    def describe(self) -> str:
        return self.message

    def run(self) -> AssertionOutcome:
        """Run the comparison and return the full outcome."""
        actual, expected, passed = self._compute()
        if not passed:
            self._notify_failure(actual, expected)
        return AssertionOutcome(
            passed=passed,
            message=self.message,
            text=self._format(passed, actual, expected),
            actual=actual,
            expected=expected,
        )

    @abstractmethod
    def _compute(self) -> tuple[Any, Any, bool]:
        """Return (actual, expected, passed) for the final attempt."""

    def _compare_once(self) -> tuple[Any, Any, bool]:
        actual = self.actual()
        expected = self.expected()
        return actual, expected, bool(self.comparator(actual, expected))

    def _notify_failure(self, actual: Any, expected: Any) -> None:
        if self.on_failure is None:
            return
        try:
            self.on_failure(actual, expected)
        except Exception:
            logger.exception("Failure hook raised for %r", self.message)

    def _format(self, passed: bool, actual: Any, expected: Any) -> str:
        expected_text = render(expected)
        actual_text = render(actual)
        message = self.message.strip()
        if passed:
            return f"PASS ::> {message} Exp: '{expected_text}', Act: '{actual_text}'"
        if self.print_diff:
            config = self.config or get_config()
            diff = structural_diff(expected, actual, config.diff_insert_format, config.diff_delete_format)
            return f"FAIL ::> {message}\nDiff: '{diff}',\nExp: '{expected_text}',\nAct: '{actual_text}'"
        return f"FAIL ::> {message} Exp: '{expected_text}', Act: '{actual_text}'"


@dataclass(frozen=True)
class ImmediateAssertionRecord(AssertionRecord):
    """Compares once. Exceptions from accessors or the comparator propagate after the failure hook runs."""

    def _compute(self) -> tuple[Any, Any, bool]:
        actual = expected = None
        try:
            actual = self.actual()
            expected = self.expected()
            return actual, expected, bool(self.comparator(actual, expected))
        except Exception:
            self._notify_failure(actual, expected)
            raise


class _Attempt:
    """Mutable snapshot of the latest polling attempt."""

    def __init__(self) -> None:
        self.actual: Any = None
        self.expected: Any = None
        self.error: Exception | None = None


@dataclass(frozen=True)
class PollingAssertionRecord(AssertionRecord):
    """
    Re-reads both values and re-compares until true or the retry timeout elapses.

    Exceptions raised by individual attempts are retried. If the final attempt
    raised, that exception propagates once time is up.
    """

    retry: RetryPolicy = field(default_factory=lambda: RetryPolicy.from_config(get_config()))

    def _compute(self) -> tuple[Any, Any, bool]:
        last = _Attempt()

        def attempt() -> bool:
            try:
                last.actual, last.expected, passed = self._compare_once()
            except Exception as e:
                last.error = e
                return False
            last.error = None
            return passed

        engine = self.retry.engine()
        passed = engine.poll(attempt)
        if not passed and last.error is not None:
            self._notify_failure(last.actual, last.expected)
            raise last.error
        return last.actual, last.expected, passed


def immediate_record(
    actual: Supplier,
    expected: Supplier,
    comparator: Comparator,
    message: str,
    *,
    print_diff: bool = False,
    on_failure: FailureHook | None = None,
    config: AffirmConfig | None = None,
) -> ImmediateAssertionRecord:
    """Build a record evaluated with a single comparison."""
    return ImmediateAssertionRecord(
        actual=actual,
        expected=expected,
        comparator=comparator,
        message=message,
        print_diff=print_diff,
        on_failure=on_failure,
        config=config,
    )


def polling_record(
    actual: Supplier,
    expected: Supplier,
    comparator: Comparator,
    message: str,
    retry: RetryPolicy,
    *,
    print_diff: bool = False,
    on_failure: FailureHook | None = None,
    config: AffirmConfig | None = None,
) -> PollingAssertionRecord:
    """Build a record evaluated by polling under ``retry``."""
    return PollingAssertionRecord(
        actual=actual,
        expected=expected,
        comparator=comparator,
        message=message,
        print_diff=print_diff,
        on_failure=on_failure,
        config=config,
        retry=retry,
    )
