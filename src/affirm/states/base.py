"""
StateView: a typed facade exposing boolean predicates over a lazily read value.

A StateView holds a zero-argument accessor. ``value`` calls the accessor on
every access; nothing is cached, so a view over a changing source always
reports the current state.

Predicates are plain methods marked with ``@predicate``. Each subclass gets a
registry of its own and inherited predicates, which verifiers and waiters use
to generate their condition methods:

    class TemperatureState(NumberState):
        type_name = "Temperature"

        @predicate("Is Freezing")
        def is_freezing(self) -> bool:
            value = self.value
            return value is not None and value <= 0

Predicates must be pure and tolerate a None value, returning a well-defined
boolean instead of raising TypeError.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, ClassVar, Generic, TypeVar

from affirm.assertions import assert_argument, assert_callable
from affirm.suppliers import is_lazy, resolve

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., bool])

PREDICATE_ATTR = "__affirm_predicate__"


def render(value: Any) -> str:
    """Render a value for verification messages. None renders as <NULL>."""
    if value is None:
        return "<NULL>"
    if isinstance(value, str):
        return value
    return str(value)


@dataclass(frozen=True)
class PredicateSpec:
    """
    Metadata for one registered predicate.

    Attributes:
        name: Method name on the state class
        description: str.format template for default messages; positional and
            keyword placeholders receive the rendered predicate arguments
        func: The predicate function (unbound)
        diff: Whether failures print a structural diff of actual vs expected
        validate: Optional callable checking arguments eagerly; raises ArgumentError
    """

    name: str
    description: str
    func: Callable[..., bool]
    diff: bool = False
    validate: Callable[..., Any] | None = None

    def describe(self, *args: Any, **kwargs: Any) -> str:
        rendered = [render(a) for a in args]
        rendered_kw = {k: render(v) for k, v in kwargs.items()}
        try:
            return self.description.format(*rendered, **rendered_kw)
        except (IndexError, KeyError):
            # Optional arguments omitted by the caller
            return self.description.split("{", 1)[0].strip()

    def check_arguments(self, *args: Any, **kwargs: Any) -> None:
        """Validate arguments now; lazy arguments are checked when resolved."""
        if self.validate is None:
            return
        if any(is_lazy(a) for a in args) or any(is_lazy(v) for v in kwargs.values()):
            return
        self.validate(*args, **kwargs)


def predicate(
    description: str,
    *,
    diff: bool = False,
    validate: Callable[..., Any] | None = None,
) -> Callable[[F], F]:
    """Mark a StateView method as a named predicate."""

    def decorator(func: F) -> F:
        spec = PredicateSpec(
            name=func.__name__,
            description=description,
            func=func,
            diff=diff,
            validate=validate,
        )
        setattr(func, PREDICATE_ATTR, spec)
        return func

    return decorator


def _collect_predicates(cls: type) -> dict[str, PredicateSpec]:
    registry: dict[str, PredicateSpec] = {}
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            spec = getattr(attr, PREDICATE_ATTR, None)
            if spec is not None:
                registry[name] = spec
            elif name in registry:
                # Overridden by a plain method
                del registry[name]
    return registry


class StateView(Generic[T]):
    """Base state: a value accessor plus a registry of named predicates."""

    type_name: ClassVar[str] = ""
    _predicates: ClassVar[Mapping[str, PredicateSpec]] = MappingProxyType({})

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._predicates = MappingProxyType(_collect_predicates(cls))

    def __init__(self, accessor: Callable[[], T | None]) -> None:
        assert_callable(accessor, "StateView requires a zero-argument accessor", argument="accessor")
        self._accessor = accessor

    @classmethod
    def of(cls, value: T | None) -> StateView[T]:
        """Build a view over a constant value."""
        return cls(lambda: value)

    @property
    def value(self) -> T | None:
        """The current value, re-read from the accessor."""
        return self._accessor()

    @classmethod
    def predicates(cls) -> Mapping[str, PredicateSpec]:
        """All predicates available on this state class, by name."""
        return cls._predicates

    @classmethod
    def predicate_spec(cls, name: str) -> PredicateSpec:
        spec = cls._predicates.get(name)
        assert_argument(
            spec is not None,
            f"{cls.__name__} has no predicate named {name!r}",
            argument="name",
        )
        return spec  # type: ignore[return-value]

    def check(self, name: str, *args: Any, **kwargs: Any) -> bool:
        """Evaluate a registered predicate by name, resolving lazy arguments first."""
        spec = self.predicate_spec(name)
        resolved = [resolve(a) for a in args]
        resolved_kw = {k: resolve(v) for k, v in kwargs.items()}
        return bool(spec.func(self, *resolved, **resolved_kw))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._accessor!r})"
