"""
Verifier front ends.

A verifier turns condition calls into assertion records and dispatches them:

- HardVerifier evaluates each record on the spot and raises
  VerificationFailure on the first failure.
- SoftVerifier queues records and evaluates them together when ``verify()``
  (or ``verify_any()`` / ``verify_none()``) is called, reporting every failure
  at once.

Both build immediate records by default. ``eventually()`` returns a sibling
front end that builds polling records instead, re-checking each condition
until it holds or the timeout elapses.

Example:
    from affirm import SoftVerifier, verify

    verify.number(5).is_equal(5)

    with SoftVerifier() as soft:
        soft.string(lambda: page.title, "Title").starts_with("Order")
        soft.eventually(timeout_seconds=2).collection(lambda: cart.items).size_equals(3)
    # leaving the block verifies the batch
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from types import TracebackType
from typing import Any

from ulid import ULID

from affirm.config import AffirmConfig, get_config
from affirm.conditions import verifier_surface
from affirm.errors import VerificationFailure
from affirm.logging import session_logger
from affirm.queue import VerificationMode, VerificationQueue, VerificationReport
from affirm.records import (
    AssertionRecord,
    Comparator,
    FailureHook,
    RetryPolicy,
    immediate_record,
    polling_record,
)
from affirm.states import (
    BooleanState,
    CollectionState,
    DateState,
    MappingState,
    NumberState,
    ObjectState,
    StateView,
    StringState,
    state_for,
)
from affirm.suppliers import Supplier, as_supplier, resolve

logger = logging.getLogger(__name__)


class Verifier(ABC):
    """
    Base front end: typed entry points plus record construction.

    Args:
        config: Timing and formatting settings; defaults to ``get_config()``
            at the time of use
        retry: When set, conditions build polling records under this policy
    """

    def __init__(self, config: AffirmConfig | None = None, *, retry: RetryPolicy | None = None) -> None:
        self._config = config
        self.retry = retry

    @property
    def config(self) -> AffirmConfig:
        return self._config or get_config()

    def eventually(self, timeout_seconds: float | None = None, interval_ms: int | None = None) -> Verifier:
        """
        Return a front end whose conditions are retried until they hold.

        Missing values come from this verifier's config. The returned front end
        shares this one's dispatch (and queue, for soft verifiers).
        """
        return self._with_retry(RetryPolicy.from_config(self.config, timeout_seconds, interval_ms))

    @abstractmethod
    def _with_retry(self, retry: RetryPolicy) -> Verifier:
        """Sibling front end building polling records under ``retry``."""

    @abstractmethod
    def dispatch(self, record: AssertionRecord) -> None:
        """Hand a freshly built record to this front end."""

    def build_record(
        self,
        *,
        actual: Supplier,
        expected: Supplier,
        comparator: Comparator,
        message: str,
        print_diff: bool = False,
        on_failure: FailureHook | None = None,
    ) -> AssertionRecord:
        if self.retry is None:
            return immediate_record(
                actual,
                expected,
                comparator,
                message,
                print_diff=print_diff,
                on_failure=on_failure,
                config=self._config,
            )
        return polling_record(
            actual,
            expected,
            comparator,
            message,
            self.retry,
            print_diff=print_diff,
            on_failure=on_failure,
            config=self._config,
        )

    def check(
        self,
        actual: Any,
        expected: Any,
        comparator: Comparator,
        message: str,
        *,
        print_diff: bool = False,
        on_failure: FailureHook | None = None,
    ) -> Verifier:
        """
        Verify an arbitrary comparison.

        Args:
            actual: Value or zero-argument accessor
            expected: Value, or ``lazy(...)`` to compute it at comparison time
            comparator: (actual, expected) -> bool
            message: Description of the intent
        """
        record = self.build_record(
            actual=as_supplier(actual),
            expected=lambda: resolve(expected),
            comparator=comparator,
            message=message,
            print_diff=print_diff,
            on_failure=on_failure,
        )
        self.dispatch(record)
        return self

    def state(self, state_class: type[StateView[Any]], actual: Any, name: str | None = None) -> Any:
        """Condition surface for any StateView subclass, including user-defined ones."""
        return verifier_surface(state_class)(self, as_supplier(actual), name)

    def object(self, actual: Any, name: str | None = None) -> Any:
        return self.state(ObjectState, actual, name)

    def boolean(self, actual: Any, name: str | None = None) -> Any:
        return self.state(BooleanState, actual, name)

    def string(self, actual: Any, name: str | None = None) -> Any:
        return self.state(StringState, actual, name)

    def number(self, actual: Any, name: str | None = None) -> Any:
        return self.state(NumberState, actual, name)

    def date(self, actual: Any, name: str | None = None) -> Any:
        return self.state(DateState, actual, name)

    def collection(self, actual: Any, name: str | None = None) -> Any:
        return self.state(CollectionState, actual, name)

    def mapping(self, actual: Any, name: str | None = None) -> Any:
        return self.state(MappingState, actual, name)

    def that(self, actual: Any, name: str | None = None) -> Any:
        """
        Condition surface chosen from the runtime type of the value.

        An accessor is read once here to pick the catalog; conditions still
        re-read it when they are evaluated.
        """
        supplier = as_supplier(actual)
        return self.state(state_for(supplier()), supplier, name)


class HardVerifier(Verifier):
    """Evaluates every condition immediately; the first failure raises."""

    def _with_retry(self, retry: RetryPolicy) -> HardVerifier:
        return HardVerifier(self._config, retry=retry)

    def dispatch(self, record: AssertionRecord) -> None:
        outcome = record.run()
        if not outcome.passed:
            logger.error("Verification failed: %s", outcome.text)
            report = VerificationReport(passed=False, outcomes=[outcome])
            raise VerificationFailure(outcome.text, report=report)
        if self.config.print_passed:
            logger.info("Verification passed: %s", outcome.text)


class SoftVerifier(Verifier):
    """
    Accumulates conditions and evaluates them as one batch.

    Args:
        config: Timing and formatting settings
        queue: Queue to accumulate into (a new one by default)
        retry: When set, conditions build polling records
        session_id: Identifier included in batch logs (a new ULID by default)

    Example:
        soft = SoftVerifier()
        soft.number(order.total).is_greater_than(0)
        soft.string(order.status).equals_any(["PAID", "SHIPPED"])
        soft.verify("Order 42")
    """

    def __init__(
        self,
        config: AffirmConfig | None = None,
        *,
        queue: VerificationQueue | None = None,
        retry: RetryPolicy | None = None,
        session_id: str | None = None,
    ) -> None:
        super().__init__(config, retry=retry)
        self.queue = queue if queue is not None else VerificationQueue()
        self.session_id = session_id or str(ULID())

    def _with_retry(self, retry: RetryPolicy) -> SoftVerifier:
        return SoftVerifier(self._config, queue=self.queue, retry=retry, session_id=self.session_id)

    def dispatch(self, record: AssertionRecord) -> None:
        self.queue.enqueue(record)

    @property
    def pending(self) -> int:
        """Number of records waiting for evaluation."""
        return len(self.queue)

    def verify(self, header: str | None = "") -> VerificationReport:
        """
        Evaluate every queued condition; all of them must pass.

        Raises:
            VerificationFailure: Listing every failing condition
        """
        return self._perform(header, VerificationMode.ALL)

    def verify_any(self, header: str | None = "") -> VerificationReport:
        """Evaluate every queued condition; at least one must pass."""
        return self._perform(header, VerificationMode.ANY)

    def verify_none(self, header: str | None = "") -> VerificationReport:
        """Evaluate every queued condition; none may pass."""
        return self._perform(header, VerificationMode.NONE)

    def _perform(self, header: str | None, mode: VerificationMode) -> VerificationReport:
        report = self.queue.evaluate_all(header, mode)
        log = session_logger(self.session_id)
        if not report.passed:
            log.error(
                "verification_failed",
                mode=mode.value,
                failures=len(report.failures),
                total=len(report.outcomes),
                report=report.text,
            )
            raise VerificationFailure(report.failure_text, report=report)
        if self.config.print_passed and report.outcomes:
            log.info("verification_passed", mode=mode.value, total=len(report.outcomes), report=report.text)
        return report

    def __enter__(self) -> SoftVerifier:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            # The block already failed; drop whatever it queued
            self.queue.clear()
            return
        self.verify()


verify = HardVerifier()
