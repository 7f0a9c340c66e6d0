"""Tests for the polling engine.

Most tests drive the engine with a fake clock whose time only advances when
the engine sleeps, so timing bounds can be asserted exactly.
"""

import pytest
from conftest import FakeClock

from affirm.errors import ConfigError
from affirm.polling import PollingEngine


def make_engine(clock: FakeClock, timeout_seconds: float, interval_ms: int) -> PollingEngine:
    return PollingEngine(timeout_seconds, interval_ms, clock=clock, sleep=clock.sleep)


class TestPollingSuccess:
    """Tests for conditions that become true."""

    def test_true_on_first_attempt_does_not_sleep(self, fake_clock: FakeClock) -> None:
        """An already-true condition returns after one attempt."""
        engine = make_engine(fake_clock, 1.0, 250)

        assert engine.poll(lambda: True) is True
        assert engine.attempts == 1
        assert fake_clock.sleeps == []

    def test_condition_true_after_delay(self, fake_clock: FakeClock) -> None:
        """A condition true from T0 on returns with elapsed time in [T0, T0 + interval)."""
        engine = make_engine(fake_clock, 2.0, 250)

        assert engine.poll(lambda: fake_clock.now >= 0.5) is True
        assert 0.5 <= engine.elapsed_seconds < 0.75
        assert engine.attempts == 3

    def test_condition_reinvoked_every_tick(self, fake_clock: FakeClock) -> None:
        """The condition is called once per attempt and sees fresh state."""
        calls: list[float] = []

        def condition() -> bool:
            calls.append(fake_clock.now)
            return len(calls) == 4

        engine = make_engine(fake_clock, 1.0, 100)

        assert engine.poll(condition) is True
        assert len(calls) == 4
        assert calls == sorted(calls)

    def test_exception_counts_as_false_tick(self, fake_clock: FakeClock) -> None:
        """A raising condition is retried rather than propagated."""
        attempts = iter([ValueError("not yet"), RuntimeError("still not"), True])

        def condition() -> bool:
            result = next(attempts)
            if isinstance(result, Exception):
                raise result
            return result

        engine = make_engine(fake_clock, 1.0, 250)

        assert engine.poll(condition) is True
        assert engine.attempts == 3


class TestPollingTimeout:
    """Tests for conditions that never become true."""

    def test_permanently_false_times_out(self, fake_clock: FakeClock) -> None:
        """A false condition returns False with elapsed time in [S, S + interval)."""
        engine = make_engine(fake_clock, 1.0, 250)

        assert engine.poll(lambda: False) is False
        assert 1.0 <= engine.elapsed_seconds < 1.25
        assert engine.attempts == 5
        assert fake_clock.sleeps == [0.25, 0.25, 0.25, 0.25]

    def test_zero_timeout_evaluates_once(self, fake_clock: FakeClock) -> None:
        """Timeout 0 means exactly one evaluation and no sleep."""
        calls = []
        engine = make_engine(fake_clock, 0, 250)

        assert engine.poll(lambda: calls.append(1) or False) is False
        assert calls == [1]
        assert fake_clock.sleeps == []

    def test_sleep_capped_at_remaining_time(self, fake_clock: FakeClock) -> None:
        """An interval longer than the timeout does not overshoot the deadline."""
        engine = make_engine(fake_clock, 0.5, 2000)

        assert engine.poll(lambda: False) is False
        assert fake_clock.sleeps == [0.5]
        assert engine.attempts == 2

    def test_always_raising_condition_times_out(self, fake_clock: FakeClock) -> None:
        """A condition that always raises ends in a normal False result."""

        def condition() -> bool:
            raise ConnectionError("down")

        engine = make_engine(fake_clock, 0.5, 250)

        assert engine.poll(condition) is False

    def test_real_clock_timeout(self) -> None:
        """With the real clock, a false condition waits at least the timeout."""
        engine = PollingEngine(0.05, 5)

        assert engine.poll(lambda: False) is False
        assert engine.elapsed_seconds >= 0.05
        assert engine.attempts >= 2


class TestPollingValidation:
    """Tests for engine argument validation."""

    def test_negative_timeout_rejected(self) -> None:
        """A negative timeout is a configuration error."""
        with pytest.raises(ConfigError) as exc_info:
            PollingEngine(-1, 10)
        assert exc_info.value.field == "timeout_seconds"

    def test_negative_interval_rejected(self) -> None:
        """A negative interval is a configuration error."""
        with pytest.raises(ConfigError) as exc_info:
            PollingEngine(1, -10)
        assert exc_info.value.field == "interval_ms"
