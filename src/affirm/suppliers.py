"""
Value accessors.

Verifiers and waiters read the actual value through a zero-argument callable
that is re-invoked on every check. Expected values are literals unless wrapped
with ``lazy()``, in which case they are computed at comparison time.

Example:
    verify.string(lambda: page.title).is_equal(lazy(lambda: catalog.current_title()))
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from affirm.assertions import assert_callable

T = TypeVar("T")

Supplier = Callable[[], Any]


class Lazy:
    """An expected value computed when the comparison happens, not when it is declared."""

    __slots__ = ("supplier",)

    def __init__(self, supplier: Callable[[], Any]) -> None:
        assert_callable(supplier, "lazy() requires a zero-argument callable", argument="supplier")
        self.supplier = supplier

    def get(self) -> Any:
        return self.supplier()

    def __repr__(self) -> str:
        name = getattr(self.supplier, "__qualname__", type(self.supplier).__name__)
        return f"lazy({name})"


def lazy(supplier: Callable[[], T]) -> Lazy:
    """Defer computing an expected value until the comparison runs."""
    return Lazy(supplier)


def resolve(value: Any) -> Any:
    """Return the current value of a possibly lazy argument."""
    if isinstance(value, Lazy):
        return value.get()
    return value


def is_lazy(value: Any) -> bool:
    return isinstance(value, Lazy)


def as_supplier(actual: Any) -> Supplier:
    """
    Normalize an actual value into an accessor.

    A callable that is not a class is treated as the accessor itself. Anything
    else is wrapped in a constant accessor. To verify a function object as a
    value, pass ``lambda: fn``.
    """
    if isinstance(actual, Lazy):
        return actual.supplier
    if callable(actual) and not isinstance(actual, type):
        return actual
    return lambda: actual
