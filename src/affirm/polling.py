"""
Condition polling.

PollingEngine evaluates a condition repeatedly until it returns True or the
timeout elapses:

    Polling --condition true--> Done(True)
    Polling --elapsed >= timeout--> Done(False)
    Polling --otherwise--> sleep(interval) --> Polling

A timeout is a normal False result, never an exception. The condition is
re-invoked on every tick so it observes the current state of whatever it
reads. Each sleep is capped at the time remaining before the deadline, so a
poll returns within one interval of the timeout.

There is no cancellation: the calling thread blocks until success or timeout.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from affirm.assertions import assert_config

logger = logging.getLogger(__name__)


class PollingEngine:
    """
    Timed retry loop for a zero-argument boolean condition.

    Args:
        timeout_seconds: Maximum time to keep polling; 0 evaluates once
        interval_ms: Sleep between attempts in milliseconds
        clock: Monotonic clock returning seconds (injectable for tests)
        sleep: Sleep function taking seconds (injectable for tests)

    Example:
        engine = PollingEngine(timeout_seconds=2, interval_ms=100)
        ready = engine.poll(lambda: service.status() == "UP")
    """

    def __init__(
        self,
        timeout_seconds: float,
        interval_ms: int,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        assert_config(timeout_seconds >= 0, f"timeout_seconds must not be negative, got {timeout_seconds}", field="timeout_seconds")
        assert_config(interval_ms >= 0, f"interval_ms must not be negative, got {interval_ms}", field="interval_ms")
        self.timeout_seconds = timeout_seconds
        self.interval_ms = interval_ms
        self._clock = clock
        self._sleep = sleep
        self.attempts = 0
        self.elapsed_seconds = 0.0

    def poll(self, condition: Callable[[], bool]) -> bool:
        """
        Poll ``condition`` until it returns True or the timeout elapses.

        An exception raised by the condition counts as a False attempt.

        Returns:
            True if the condition was met, False on timeout
        """
        started = self._clock()
        deadline = started + self.timeout_seconds
        interval = self.interval_ms / 1000.0
        self.attempts = 0

        while True:
            self.attempts += 1
            if self._attempt(condition):
                self.elapsed_seconds = self._clock() - started
                logger.debug(
                    "Condition met after %d attempt(s) in %.3fs",
                    self.attempts,
                    self.elapsed_seconds,
                )
                return True

            now = self._clock()
            remaining = deadline - now
            if remaining <= 0:
                self.elapsed_seconds = now - started
                logger.debug(
                    "Condition not met after %d attempt(s) in %.3fs (timeout %.3fs)",
                    self.attempts,
                    self.elapsed_seconds,
                    self.timeout_seconds,
                )
                return False

            self._sleep(min(interval, remaining))

    def _attempt(self, condition: Callable[[], bool]) -> bool:
        try:
            return bool(condition())
        except Exception as e:
            logger.debug("Polling attempt %d raised %s: %s", self.attempts, type(e).__name__, e)
            return False
