"""Shared pytest fixtures."""

from collections.abc import Generator

import pytest

from affirm.config import AffirmConfig, reset_config, set_config


class FakeClock:
    """Monotonic clock that only advances when slept on."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture(autouse=True)
def isolated_config() -> Generator[None, None, None]:
    """Reset the default config singleton between tests for isolation."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fast_config() -> AffirmConfig:
    """Short real-clock timings for eventual verification tests."""
    config = AffirmConfig(default_wait_seconds=0.2, default_interval_ms=5)
    set_config(config)
    return config
