"""Membership operators: in, not_in."""

from __future__ import annotations

from typing import Any

from ..evaluator import MemoryOperator
from ..operators import SpecificationOperator

# A bare string is one choice; the collection types hold several.
CHOICE_COLLECTIONS = (list, tuple, set, frozenset)
MEMBERSHIP_OPERANDS = (str, *CHOICE_COLLECTIONS)


def as_choices(condition_value: Any) -> list[Any]:
    """Return the operand as a list of choices; a scalar is a single choice."""
    if isinstance(condition_value, CHOICE_COLLECTIONS):
        return list(condition_value)
    return [condition_value]


class _MembershipOperator(MemoryOperator):
    def accepts(self, condition_value: Any) -> bool:
        return isinstance(condition_value, MEMBERSHIP_OPERANDS)


class InOperator(_MembershipOperator):
    name = SpecificationOperator.IN

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return field_value in as_choices(condition_value)


class NotInOperator(_MembershipOperator):
    name = SpecificationOperator.NOT_IN

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return field_value not in as_choices(condition_value)
