"""
Waiter front end: block until a condition holds or a timeout elapses.

Every predicate of a state catalog is available as ``wait_<predicate>``:

    waiter = Waiter()
    if not waiter.string(lambda: job.status).wait_is_equal("DONE", timeout_seconds=30):
        pytest.fail("job did not finish")

Timeouts are reported as False, never raised. Timeout and interval fall back
to the waiter's config one at a time, so either can be given alone.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from affirm.assertions import assert_callable
from affirm.conditions import waiter_surface
from affirm.config import AffirmConfig, get_config
from affirm.polling import PollingEngine
from affirm.records import RetryPolicy
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
from affirm.suppliers import as_supplier


class Waiter:
    """
    Polls conditions with configurable defaults.

    Args:
        config: Timing settings; defaults to ``get_config()`` at the time of use
        clock: Monotonic clock returning seconds
        sleep: Sleep function taking seconds
    """

    def __init__(
        self,
        config: AffirmConfig | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._config = config
        self._clock = clock
        self._sleep = sleep

    @property
    def config(self) -> AffirmConfig:
        return self._config or get_config()

    def until(
        self,
        condition: Callable[[], bool],
        timeout_seconds: float | None = None,
        interval_ms: int | None = None,
    ) -> bool:
        """
        Poll a zero-argument condition.

        Returns:
            True as soon as the condition holds, False on timeout
        """
        assert_callable(condition, "until() requires a zero-argument condition", argument="condition")
        policy = RetryPolicy.from_config(self.config, timeout_seconds, interval_ms)
        engine = PollingEngine(
            policy.timeout_seconds,
            policy.interval_ms,
            clock=self._clock,
            sleep=self._sleep,
        )
        return engine.poll(condition)

    def state(self, state_class: type[StateView[Any]], actual: Any, name: str | None = None) -> Any:
        return waiter_surface(state_class)(self, as_supplier(actual), name)

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
        supplier = as_supplier(actual)
        return self.state(state_for(supplier()), supplier, name)
