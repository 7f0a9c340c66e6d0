"""Boolean predicates. Only the ``True`` and ``False`` singletons qualify."""

from __future__ import annotations

from affirm.states.base import predicate
from affirm.states.objects import ObjectState


class BooleanState(ObjectState):
    type_name = "Boolean"

    @predicate("Is True")
    def is_true(self) -> bool:
        return self.value is True

    @predicate("Is False")
    def is_false(self) -> bool:
        return self.value is False
