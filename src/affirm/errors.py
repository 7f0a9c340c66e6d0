"""Exception hierarchy for affirm.

Two kinds of error leave this package:

1. VerificationFailure - a verification outcome. It is an AssertionError so
   test runners report it as a failed test, not as a crash.
2. ConfigError / ArgumentError - programming mistakes, raised at the point of
   use and never deferred to queue evaluation.

Polling timeouts are not errors: waiters return False.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from affirm.queue import VerificationReport
    from affirm.records import AssertionOutcome


class AffirmError(Exception):
    """Base exception for affirm errors.

    Attributes:
        code: Numeric error code for programmatic handling
        cause: Optional original exception that caused this error
    """

    code: int = 100

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code
        self.cause = cause

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.cause:
            parts.append(f"caused by: {self.cause}")
        return " ".join(parts)


class VerificationFailure(AffirmError, AssertionError):
    """
    Raised when a hard verification fails or a soft batch is drained with failures.

    The message holds every failing section, including structural diffs.
    """

    code: int = 600

    def __init__(
        self,
        message: str,
        *,
        report: VerificationReport | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.report = report

    @property
    def failures(self) -> list[AssertionOutcome]:
        """Outcomes of the records that failed."""
        if self.report is None:
            return []
        return self.report.failures


class ConfigError(AffirmError):
    """
    Error raised when configuration is invalid.

    Config errors indicate invalid setup, such as a negative timeout.
    """

    code: int = 300

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ArgumentError(AffirmError, ValueError):
    """
    Error raised when a predicate receives a malformed argument.

    Examples are a regular expression that does not compile or an inverted range.
    """

    code: int = 400

    def __init__(
        self,
        message: str,
        argument: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.argument = argument
