"""
Affirm - deferred assertions and condition polling for tests.

This package provides:
- Hard verification that fails on the first unmet condition
- Soft verification that collects every failure and reports them together
- Eventual verification that retries a condition until it holds
- Waiters that poll a condition and report a timeout as False
- Typed state views with named, null-tolerant predicates
- Structural diffs for failed comparisons
"""

__version__ = "0.1.0"

# Verification front ends
from affirm.verifier import HardVerifier, SoftVerifier, Verifier, verify
from affirm.waiter import Waiter

# Records and batches
from affirm.queue import VerificationMode, VerificationQueue, VerificationReport
from affirm.records import (
    AssertionOutcome,
    AssertionRecord,
    ImmediateAssertionRecord,
    PollingAssertionRecord,
    RetryPolicy,
    immediate_record,
    polling_record,
)
from affirm.polling import PollingEngine

# State views
from affirm.states import (
    BooleanState,
    CollectionState,
    DateState,
    MappingState,
    NumberState,
    ObjectState,
    StateView,
    StringState,
    predicate,
    state_for,
)
from affirm.suppliers import lazy

# Configuration
from affirm.config import AffirmConfig, get_config, reset_config, set_config

# Errors
from affirm.errors import AffirmError, ArgumentError, ConfigError, VerificationFailure

__all__ = [
    # Front ends
    "Verifier",
    "HardVerifier",
    "SoftVerifier",
    "Waiter",
    "verify",
    # Records and batches
    "AssertionOutcome",
    "AssertionRecord",
    "ImmediateAssertionRecord",
    "PollingAssertionRecord",
    "RetryPolicy",
    "immediate_record",
    "polling_record",
    "VerificationMode",
    "VerificationQueue",
    "VerificationReport",
    "PollingEngine",
    # State views
    "StateView",
    "ObjectState",
    "BooleanState",
    "StringState",
    "NumberState",
    "DateState",
    "CollectionState",
    "MappingState",
    "predicate",
    "state_for",
    "lazy",
    # Configuration
    "AffirmConfig",
    "get_config",
    "set_config",
    "reset_config",
    # Errors
    "AffirmError",
    "VerificationFailure",
    "ConfigError",
    "ArgumentError",
]
