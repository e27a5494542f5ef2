"""Leaf specifications that compare one attribute of the candidate."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from .base import BaseSpecification
from .domain.product import Color, Size
from .exceptions import InvalidArgumentError
from .operators import SpecificationOperator
from .operators_memory import build_default_registry

if TYPE_CHECKING:
    from .evaluator import MemoryOperatorRegistry

T = TypeVar("T", contravariant=True)


def _to_plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list | tuple | set | frozenset):
        return [_to_plain(v) for v in value]
    return value


class AttributeSpecification(BaseSpecification[T]):
    """
    Specification that checks a single attribute value.

    The operator is resolved against the injected
    :class:`MemoryOperatorRegistry` on construction, so an unsupported
    operator or an operand it cannot use is rejected up front.
    """

    def __init__(
        self,
        attr: str,
        op: SpecificationOperator | str,
        val: Any,
        *,
        registry: MemoryOperatorRegistry,
    ) -> None:
        if not attr:
            raise InvalidArgumentError("attr is required", argument="attr")
        if registry is None:
            raise InvalidArgumentError(
                "registry parameter is required. "
                "Use build_default_registry() from operators_memory to create one.",
                argument="registry",
            )
        operator = registry.resolve(op)
        if not operator.accepts(val):
            raise InvalidArgumentError(
                f"Operator '{operator.name.value}' cannot compare '{attr}' "
                f"against a {type(val).__name__} value",
                argument="val",
            )
        self.attr = attr
        self.op = operator.name
        self.val = val
        self._operator = operator

    def is_satisfied_by(self, candidate: T) -> bool:
        actual_val = self._resolve_field(candidate, self.attr)
        return self._operator.evaluate(actual_val, self.val)

    @staticmethod
    def _resolve_field(obj: Any, attr_path: str) -> Any:
        """Resolve a dot-separated attribute path (``owner.name``) on *obj*."""
        for part in attr_path.split("."):
            if obj is None:
                return None
            obj = obj.get(part) if isinstance(obj, dict) else getattr(obj, part, None)
        return obj

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": self.op.value,
            "attr": self.attr,
            "val": _to_plain(self.val),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.attr!r} {self.op.value} {self.val!r})"


class _EnumEqualsSpecification(AttributeSpecification[T]):
    """Equality on one enumerated attribute; the value is validated up front."""

    attribute: str
    enum_type: type[Enum]

    def __init__(
        self,
        value: Enum | str,
        *,
        registry: MemoryOperatorRegistry | None = None,
    ) -> None:
        if value is None:
            raise InvalidArgumentError(
                f"{self.attribute} value is required", argument=self.attribute
            )
        try:
            member = self.enum_type(value)
        except ValueError as exc:
            allowed = ", ".join(m.value for m in self.enum_type)
            raise InvalidArgumentError(
                f"Invalid {self.attribute} {value!r}, expected one of: {allowed}",
                argument=self.attribute,
            ) from exc
        super().__init__(
            self.attribute,
            SpecificationOperator.EQ,
            member,
            registry=registry if registry is not None else build_default_registry(),
        )


class ColorSpecification(_EnumEqualsSpecification[T]):
    """Satisfied by candidates whose ``color`` equals the given colour."""

    attribute = "color"
    enum_type = Color


class SizeSpecification(_EnumEqualsSpecification[T]):
    """Satisfied by candidates whose ``size`` equals the given size."""

    attribute = "size"
    enum_type = Size
