"""
Verification queue: ordered pending assertion records evaluated as a batch.

Records are evaluated in insertion order. A failing record never stops the
evaluation of later ones, and neither does a record that raises: the
exception is reported as an ERROR section and counted as a failure.

The queue computes and reports; it never raises an assertion failure
itself. Deciding whether a failed report becomes a VerificationFailure is up
to the caller (see SoftVerifier).

The queue is always emptied by ``evaluate_all``, even if evaluation is
interrupted, so a session can be reused for a fresh batch.

A queue is not thread-safe; use one per verification session.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from affirm.records import AssertionOutcome, AssertionRecord

logger = logging.getLogger(__name__)

SEPARATOR = "-" * 60


class VerificationMode(Enum):
    """How individual outcomes combine into the batch result."""

    # Every record must pass
    ALL = "All"

    # At least one record must pass
    ANY = "Any"

    # No record may pass
    NONE = "None"

    def decide(self, outcomes: list[AssertionOutcome]) -> bool:
        if self is VerificationMode.ALL:
            return all(o.passed for o in outcomes)
        if self is VerificationMode.ANY:
            return any(o.passed for o in outcomes)
        return not any(o.passed for o in outcomes)

    def offending(self, outcomes: list[AssertionOutcome]) -> list[AssertionOutcome]:
        """Outcomes responsible for a failed batch under this mode."""
        if self is VerificationMode.NONE:
            return [o for o in outcomes if o.passed]
        return [o for o in outcomes if not o.passed]


@dataclass
class VerificationReport:
    """
    Result of draining a verification queue.

    Attributes:
        passed: Cumulative result under ``mode``
        mode: How outcomes were combined
        header: Optional title framing the report
        outcomes: One outcome per record, in insertion order
    """

    passed: bool
    mode: VerificationMode = VerificationMode.ALL
    header: str = ""
    outcomes: list[AssertionOutcome] = field(default_factory=list)

    @property
    def failures(self) -> list[AssertionOutcome]:
        """Outcomes that made the batch fail (empty when it passed)."""
        if self.passed:
            return []
        return self.mode.offending(self.outcomes)

    @property
    def text(self) -> str:
        """Full transcript, one section per record, including passes."""
        return self._render([o.text for o in self.outcomes])

    @property
    def failure_text(self) -> str:
        """Header plus one section per failing record and a summary line."""
        failures = self.failures
        if not failures:
            return ""
        sections = [o.text for o in failures]
        if self.mode is VerificationMode.NONE:
            sections.append(f"{len(failures)} of {len(self.outcomes)} verifications unexpectedly passed")
        else:
            sections.append(f"{len(failures)} of {len(self.outcomes)} verifications failed")
        return self._render(sections)

    def _render(self, sections: list[str]) -> str:
        if not self.outcomes:
            return ""
        status = "Passed" if self.passed else "Failed"
        lines = [f"============== Verify {self.mode.value} {status} =============="]
        titled = bool(self.header and self.header.strip())
        if titled:
            lines.extend([SEPARATOR, self.header, SEPARATOR])
        lines.extend(sections)
        if titled:
            lines.append(SEPARATOR)
        return "\n".join(lines)


class VerificationQueue:
    """Ordered, mutable container of assertion records."""

    def __init__(self) -> None:
        self._records: list[AssertionRecord] = []

    def enqueue(self, record: AssertionRecord) -> None:
        """Append a record. Nothing is evaluated until ``evaluate_all``."""
        self._records.append(record)

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[AssertionRecord]:
        return iter(list(self._records))

    def evaluate_all(
        self,
        header: str | None = "",
        mode: VerificationMode = VerificationMode.ALL,
    ) -> VerificationReport:
        """
        Evaluate every queued record in order and empty the queue.

        Args:
            header: Optional title for the report; None means no title
            mode: How outcomes combine into the batch result

        Returns:
            The report. An empty queue yields a passing report with empty text.
        """
        outcomes: list[AssertionOutcome] = []
        try:
            for record in self._records:
                outcomes.append(self._run(record))
        finally:
            self.clear()

        passed = mode.decide(outcomes) if outcomes else True
        return VerificationReport(passed=passed, mode=mode, header=header or "", outcomes=outcomes)

    def _run(self, record: AssertionRecord) -> AssertionOutcome:
        try:
            return record.run()
        except Exception as e:
            logger.debug("Record %r raised during evaluation", record.describe(), exc_info=True)
            return AssertionOutcome.errored(record.describe(), e)
