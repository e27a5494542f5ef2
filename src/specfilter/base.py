"""Base specification and the logical combinators AND, OR and NOT."""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar

from .domain.specification import ISpecification
from .exceptions import InvalidArgumentError

T = TypeVar("T", contravariant=True)


class Combinator(str, Enum):
    """Boolean operator joining the two children of a combination."""

    AND = "and"
    OR = "or"


def _require_specification(spec: Any, role: str) -> ISpecification[Any]:
    if spec is None:
        raise InvalidArgumentError(f"{role} specification is required", argument=role)
    if not isinstance(spec, ISpecification):
        raise InvalidArgumentError(
            f"{role} specification must provide is_satisfied_by() and to_dict(), "
            f"got {type(spec).__name__}",
            argument=role,
        )
    return spec


class BaseSpecification(Generic[T], ISpecification[T]):
    """Base class for specifications with logic operator support."""

    def __and__(self, other: ISpecification[T]) -> AndSpecification[T]:
        return AndSpecification(self, other)

    def __or__(self, other: ISpecification[T]) -> OrSpecification[T]:
        return OrSpecification(self, other)

    def __invert__(self) -> NotSpecification[T]:
        return NotSpecification(self)

    def merge(self, other: ISpecification[T]) -> AndSpecification[T]:
        """Merge with another specification using logical AND."""
        return AndSpecification(self, other)


class CombinationSpecification(BaseSpecification[T]):
    """
    Two child specifications joined by a :class:`Combinator`.

    Children are evaluated left to right and evaluation stops as soon as
    the left child decides the result.
    """

    def __init__(
        self,
        left: ISpecification[T],
        right: ISpecification[T],
        combinator: Combinator | str,
    ) -> None:
        self.left = _require_specification(left, "left")
        self.right = _require_specification(right, "right")
        try:
            self.combinator = Combinator(combinator)
        except ValueError as exc:
            raise InvalidArgumentError(
                f"Unknown combinator {combinator!r}, expected 'and' or 'or'",
                argument="combinator",
            ) from exc

    def is_satisfied_by(self, candidate: T) -> bool:
        if self.combinator is Combinator.AND:
            return bool(
                self.left.is_satisfied_by(candidate)
                and self.right.is_satisfied_by(candidate)
            )
        return bool(
            self.left.is_satisfied_by(candidate)
            or self.right.is_satisfied_by(candidate)
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": self.combinator.value,
            "conditions": [self.left.to_dict(), self.right.to_dict()],
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.left!r}, {self.right!r})"


class AndSpecification(CombinationSpecification[T]):
    """Logical AND of two specifications."""

    def __init__(self, left: ISpecification[T], right: ISpecification[T]) -> None:
        super().__init__(left, right, Combinator.AND)


class OrSpecification(CombinationSpecification[T]):
    """Logical OR of two specifications."""

    def __init__(self, left: ISpecification[T], right: ISpecification[T]) -> None:
        super().__init__(left, right, Combinator.OR)


class NotSpecification(BaseSpecification[T]):
    """Logical NOT of a specification."""

    def __init__(self, specification: ISpecification[T]) -> None:
        self.specification = _require_specification(specification, "negated")

    def is_satisfied_by(self, candidate: T) -> bool:
        return not self.specification.is_satisfied_by(candidate)

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "not",
            "conditions": [self.specification.to_dict()],
        }

    def __repr__(self) -> str:
        return f"NotSpecification({self.specification!r})"
