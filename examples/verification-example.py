#!/usr/bin/env python3
"""
Verification Example - Demonstrates hard, soft and eventual verification with Affirm.

This example shows how to:
1. Fail fast with the module-level hard verifier
2. Collect several failures into one report with a soft verifier
3. Retry a condition until a background worker catches up
4. Wait for a condition without failing

Requirements:
    None beyond affirm itself

Run with:
    python examples/verification-example.py
"""

import logging
import threading
import time
from typing import Any

logging.basicConfig(level=logging.ERROR)

from affirm import AffirmConfig, SoftVerifier, VerificationFailure, Waiter, lazy, verify
from affirm.logging import configure_logging

# =============================================================================
# A tiny system under test
# =============================================================================


class OrderService:
    """In-memory order store whose status is advanced by a background thread."""

    def __init__(self) -> None:
        self.orders: dict[str, dict[str, Any]] = {}

    def place(self, order_id: str, items: list[str], total: float) -> None:
        self.orders[order_id] = {"items": items, "total": total, "status": "PENDING"}

    def fulfil_later(self, order_id: str, delay: float) -> None:
        def advance() -> None:
            time.sleep(delay)
            self.orders[order_id]["status"] = "SHIPPED"

        threading.Thread(target=advance, daemon=True).start()


# =============================================================================
# Examples
# =============================================================================


def example_hard_verification() -> None:
    """Hard verification raises on the first unmet condition."""
    print("\n[hard] checking an order")
    service = OrderService()
    service.place("ord-1", ["apple", "pear"], 7.5)
    order = service.orders["ord-1"]

    verify.collection(order["items"], "Items").size_equals(2).contains("pear")
    verify.number(order["total"], "Total").is_between(5, 10)

    try:
        verify.string(order["status"], "Status").is_equal("PAID")
    except VerificationFailure as e:
        print(f"  raised as expected:\n{e}")


def example_soft_verification() -> None:
    """Soft verification reports every failure of the batch at once."""
    print("\n[soft] checking an order")
    service = OrderService()
    service.place("ord-2", ["apple"], 0.0)

    try:
        with SoftVerifier() as soft:
            order = service.orders["ord-2"]
            soft.collection(order["items"], "Items").size_equals(2)
            soft.number(order["total"], "Total").is_positive()
            soft.string(order["status"], "Status").equals_any(["PENDING", "PAID"])
    except VerificationFailure as e:
        print(f"  {len(e.failures)} failures reported together:\n{e}")


def example_eventual_verification() -> None:
    """Eventual verification retries until the worker has shipped the order."""
    print("\n[eventually] waiting for shipment")
    service = OrderService()
    service.place("ord-3", ["pear"], 3.0)
    service.fulfil_later("ord-3", delay=0.2)

    verify.eventually(timeout_seconds=2, interval_ms=50).string(
        lambda: service.orders["ord-3"]["status"], "Status"
    ).is_equal(lazy(lambda: "SHIPPED"))
    print("  order shipped")


def example_waiter() -> None:
    """A waiter reports a timeout as False instead of raising."""
    print("\n[waiter] polling without failing")
    service = OrderService()
    service.place("ord-4", [], 0.0)
    waiter = Waiter(AffirmConfig(default_wait_seconds=0.3, default_interval_ms=50))

    shipped = waiter.mapping(lambda: service.orders["ord-4"]).wait_contains_entry("status", "SHIPPED")
    print(f"  shipped within timeout: {shipped}")


if __name__ == "__main__":
    configure_logging(level=logging.ERROR)

    print("Affirm Verification Examples")
    print("=" * 60)

    example_hard_verification()
    example_soft_verification()
    example_eventual_verification()
    example_waiter()

    print("\n" + "=" * 60)
    print("All examples completed!")
    print("=" * 60)
