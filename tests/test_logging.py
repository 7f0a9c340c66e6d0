"""Tests for structured logging of verification events."""

import json
from collections.abc import Generator

import pytest
from structlog.testing import CapturingLoggerFactory

from affirm.errors import VerificationFailure
from affirm.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    is_configured,
    session_logger,
    unbind_context,
    verification_context,
)
from affirm.verifier import SoftVerifier


@pytest.fixture
def captured() -> Generator[CapturingLoggerFactory, None, None]:
    """Route structlog events, rendered as JSON, into memory."""
    factory = CapturingLoggerFactory()
    configure_logging(json_format=True, logger_factory=factory)
    yield factory
    clear_context()
    configure_logging()


def events(factory: CapturingLoggerFactory) -> list[dict]:
    return [json.loads(call.args[0]) for call in factory.logger.calls]


class TestConfiguration:
    """Tests for logging setup."""

    def test_get_logger_configures_on_first_use(self) -> None:
        get_logger("affirm.tests")
        assert is_configured() is True


class TestContextBinding:
    """Tests for fields attached to events."""

    def test_verification_context_scoped_to_block(self, captured: CapturingLoggerFactory) -> None:
        logger = get_logger("affirm.tests")

        with verification_context(test="test_checkout"):
            logger.info("inside")
        logger.info("outside")

        inside, outside = events(captured)
        assert inside["test"] == "test_checkout"
        assert "test" not in outside

    def test_bind_and_unbind(self, captured: CapturingLoggerFactory) -> None:
        logger = get_logger("affirm.tests")

        bind_context(build="1234", shard=2)
        logger.info("bound")
        unbind_context("shard")
        logger.info("unbound")

        bound, unbound = events(captured)
        assert bound["build"] == "1234"
        assert bound["shard"] == 2
        assert "shard" not in unbound
        assert unbound["build"] == "1234"

    def test_session_logger_binds_session_id(self, captured: CapturingLoggerFactory) -> None:
        session_logger("01HZYSESSION").warning("checked")

        (event,) = events(captured)
        assert event["session_id"] == "01HZYSESSION"
        assert event["level"] == "warning"


class TestSessionEvents:
    """Tests for events emitted by soft verification sessions."""

    def test_failed_batch_event(self, captured: CapturingLoggerFactory) -> None:
        soft = SoftVerifier(session_id="run-7")
        soft.number(-1).is_positive()
        soft.number(1).is_positive()

        with pytest.raises(VerificationFailure):
            soft.verify()

        (event,) = events(captured)
        assert event["event"] == "verification_failed"
        assert event["session_id"] == "run-7"
        assert event["mode"] == "All"
        assert event["failures"] == 1
        assert event["total"] == 2
        assert event["report"][0] == "============== Verify All Failed =============="
        assert any(line.startswith("PASS ::> Verify Is Positive.") for line in event["report"])

    def test_passing_batch_silent_by_default(self, captured: CapturingLoggerFactory) -> None:
        soft = SoftVerifier()
        soft.number(1).is_positive()

        soft.verify()

        assert events(captured) == []
