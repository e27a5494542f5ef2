"""Specification pattern primitives."""

from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T", contravariant=True)


@runtime_checkable
class ISpecification(Protocol, Generic[T]):
    """
    Protocol for the Specification pattern.
    Encapsulates a single rule that a candidate either satisfies or not.
    """

    def is_satisfied_by(self, candidate: T) -> bool:
        """
        Check whether *candidate* satisfies the rule.
        Implementations must not mutate the candidate.
        """
        ...

    def to_dict(self) -> dict[str, Any]:
        """
        Return a dictionary representation of the specification.
        Useful for logging and for rebuilding the tree with
        ``SpecificationFactory.from_dict``.
        """
        ...
