"""
Operator strategies for evaluating attribute specifications in memory.

A registry is assembled once from a fixed set of strategies and is
read-only afterwards. Leaf specifications resolve their operator against
it when they are constructed, so an unsupported operator or an unusable
operand is reported before any item is filtered.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from .exceptions import InvalidArgumentError, OperatorNotFoundError
from .operators import LOGICAL_OPERATORS, SpecificationOperator


class MemoryOperator(ABC):
    """One comparison between an attribute value and a specification operand."""

    name: ClassVar[SpecificationOperator]

    def accepts(self, condition_value: Any) -> bool:
        """Whether *condition_value* can be used as this operator's operand."""
        return True

    @abstractmethod
    def evaluate(self, field_value: Any, condition_value: Any) -> bool: ...


class MemoryOperatorRegistry:
    """
    Immutable table of attribute operators and their strategies.

    Usage::

        registry = MemoryOperatorRegistry(EqualOperator(), InOperator())
        SpecificationOperator.EQ in registry          # True
        registry.resolve("in").evaluate("red", ["red", "blue"])  # True

    Logical operators (``and``/``or``/``not``) are combinations, not
    comparisons, and are refused, as is registering one operator twice.
    """

    def __init__(self, *operators: MemoryOperator) -> None:
        table: dict[SpecificationOperator, MemoryOperator] = {}
        for operator in operators:
            name = operator.name
            if name.value in LOGICAL_OPERATORS:
                raise InvalidArgumentError(
                    f"'{name.value}' combines specifications and cannot be "
                    f"evaluated against an attribute",
                    argument="operators",
                )
            if name in table:
                raise InvalidArgumentError(
                    f"Operator '{name.value}' is registered twice",
                    argument="operators",
                )
            table[name] = operator
        self._operators = table

    def __contains__(self, name: object) -> bool:
        return name in self._operators

    @property
    def names(self) -> list[str]:
        return sorted(op.value for op in self._operators)

    def resolve(self, name: SpecificationOperator | str) -> MemoryOperator:
        """Return the strategy for *name* or raise ``OperatorNotFoundError``."""
        value = str(getattr(name, "value", name)).lower()
        for operator_name, operator in self._operators.items():
            if operator_name.value == value:
                return operator
        raise OperatorNotFoundError(value, self.names)
