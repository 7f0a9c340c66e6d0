"""
Generated condition surfaces.

Rather than writing one verify method and one wait method per predicate and
per type, each state class's predicate registry is turned into a surface
class once and cached:

    StringState.contains  ->  StringVerifier.contains(expected, message=..., on_failure=...)
                          ->  StringWaiter.wait_contains(expected, timeout_seconds=..., interval_ms=...)

A verifier method builds an assertion record whose comparator is the
predicate and hands it to the owning front end (hard: evaluate now; soft:
enqueue). A waiter method polls the predicate and returns a bool.

Arguments are validated when the method is called, so a malformed argument
(for example a regex that does not compile) raises ArgumentError at the call
site even for soft verifications.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import cache
from typing import TYPE_CHECKING, Any, ClassVar

from affirm.records import Comparator, FailureHook
from affirm.states.base import PredicateSpec, StateView
from affirm.suppliers import Supplier, resolve

if TYPE_CHECKING:
    from affirm.verifier import Verifier
    from affirm.waiter import Waiter


def default_message(spec: PredicateSpec, name: str | None, args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    """Build ``Verify [<name> ]<Description>.`` for a predicate call."""
    description = spec.describe(*args, **kwargs)
    if name:
        return f"Verify {name} {description}."
    return f"Verify {description}."


def expected_supplier(args: tuple[Any, ...]) -> Supplier:
    """
    Accessor for the value shown as "Exp" and passed to the comparator.

    No arguments -> True (the predicate is expected to hold), one argument ->
    that argument, several -> a tuple. Lazy arguments are resolved on each call.
    """
    if not args:
        return lambda: True
    if len(args) == 1:
        only = args[0]
        return lambda: resolve(only)
    return lambda: tuple(resolve(a) for a in args)


def predicate_comparator(
    state_class: type[StateView[Any]],
    spec: PredicateSpec,
    arity: int,
    kwargs: dict[str, Any],
) -> Comparator:
    """Comparator applying ``spec`` to a view over the actual value."""

    def compare(actual: Any, expected: Any) -> bool:
        state = state_class.of(actual)
        resolved_kw = {k: resolve(v) for k, v in kwargs.items()}
        if arity == 0:
            return bool(spec.func(state, **resolved_kw))
        if arity == 1:
            return bool(spec.func(state, expected, **resolved_kw))
        return bool(spec.func(state, *expected, **resolved_kw))

    return compare


class Conditions:
    """Base for generated surfaces: an actual-value accessor plus an optional display name."""

    state_class: ClassVar[type[StateView[Any]]]

    def __init__(self, actual: Supplier, name: str | None = None) -> None:
        self._actual = actual
        self._name = name

    @property
    def state(self) -> StateView[Any]:
        """A fresh view over the current actual value."""
        return self.state_class(self._actual)

    def __repr__(self) -> str:
        label = f" {self._name!r}" if self._name else ""
        return f"<{type(self).__name__}{label}>"


class VerifierConditions(Conditions):
    """Verification surface; each predicate method dispatches one assertion record."""

    def __init__(self, front: Verifier, actual: Supplier, name: str | None = None) -> None:
        super().__init__(actual, name)
        self._front = front

    def _invoke(
        self,
        spec: PredicateSpec,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        message: str | None,
        on_failure: FailureHook | None,
    ) -> VerifierConditions:
        spec.check_arguments(*args, **kwargs)
        record = self._front.build_record(
            actual=self._actual,
            expected=expected_supplier(args),
            comparator=predicate_comparator(self.state_class, spec, len(args), kwargs),
            message=message or default_message(spec, self._name, args, kwargs),
            print_diff=spec.diff,
            on_failure=on_failure,
        )
        self._front.dispatch(record)
        return self


class WaiterConditions(Conditions):
    """Waiting surface; each ``wait_<predicate>`` method polls and returns a bool."""

    def __init__(self, front: Waiter, actual: Supplier, name: str | None = None) -> None:
        super().__init__(actual, name)
        self._front = front

    def _invoke(
        self,
        spec: PredicateSpec,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        timeout_seconds: float | None,
        interval_ms: int | None,
    ) -> bool:
        spec.check_arguments(*args, **kwargs)
        state = self.state

        def condition() -> bool:
            return state.check(spec.name, *args, **kwargs)

        return self._front.until(condition, timeout_seconds=timeout_seconds, interval_ms=interval_ms)


def _surface_name(state_class: type[StateView[Any]], suffix: str) -> str:
    base = state_class.__name__
    if base.endswith("State"):
        base = base[: -len("State")]
    return f"{base}{suffix}"


def _verify_method(spec: PredicateSpec) -> Callable[..., VerifierConditions]:
    def method(
        self: VerifierConditions,
        *args: Any,
        message: str | None = None,
        on_failure: FailureHook | None = None,
        **kwargs: Any,
    ) -> VerifierConditions:
        return self._invoke(spec, args, kwargs, message, on_failure)

    method.__name__ = spec.name
    method.__doc__ = f"Verify that the value: {spec.description}.\n\n{spec.func.__doc__ or ''}".rstrip()
    return method


def _wait_method(spec: PredicateSpec) -> Callable[..., bool]:
    def method(
        self: WaiterConditions,
        *args: Any,
        timeout_seconds: float | None = None,
        interval_ms: int | None = None,
        **kwargs: Any,
    ) -> bool:
        return self._invoke(spec, args, kwargs, timeout_seconds, interval_ms)

    method.__name__ = f"wait_{spec.name}"
    method.__doc__ = f"Wait until the value: {spec.description}. Returns False on timeout."
    return method


@cache
def verifier_surface(state_class: type[StateView[Any]]) -> type[VerifierConditions]:
    """Generate (once) the verification surface for a state class."""
    namespace: dict[str, Any] = {"state_class": state_class, "__module__": __name__}
    for name, spec in state_class.predicates().items():
        namespace[name] = _verify_method(spec)
    return type(_surface_name(state_class, "Verifier"), (VerifierConditions,), namespace)


@cache
def waiter_surface(state_class: type[StateView[Any]]) -> type[WaiterConditions]:
    """Generate (once) the waiting surface for a state class."""
    namespace: dict[str, Any] = {"state_class": state_class, "__module__": __name__}
    for name, spec in state_class.predicates().items():
        namespace[f"wait_{name}"] = _wait_method(spec)
    return type(_surface_name(state_class, "Waiter"), (WaiterConditions,), namespace)
