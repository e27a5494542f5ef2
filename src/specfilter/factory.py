"""Build specification trees from their dictionary / JSON representation."""

from __future__ import annotations

import json
from functools import reduce
from typing import TYPE_CHECKING, Any

from .attribute import AttributeSpecification
from .base import Combinator, CombinationSpecification, NotSpecification
from .exceptions import OperatorNotFoundError, SpecificationError, ValidationError
from .operators import LOGICAL_OPERATORS, MAX_NESTING_DEPTH, SpecificationOperator
from .operators_memory.membership import MEMBERSHIP_OPERANDS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .domain.specification import ISpecification
    from .evaluator import MemoryOperatorRegistry

_VALID_OPERATORS: frozenset[str] = frozenset(m.value for m in SpecificationOperator)
_MEMBERSHIP_OPERATORS = (
    SpecificationOperator.IN.value,
    SpecificationOperator.NOT_IN.value,
)


class SpecificationFactory:
    """
    Factory for creating specifications from dictionary / JSON representations.

    The accepted shape is the one produced by ``to_dict()``::

        {"op": "and", "conditions": [
            {"op": "=", "attr": "color", "val": "white"},
            {"op": "=", "attr": "size", "val": "huge"},
        ]}

    ``and`` / ``or`` nodes with more than two conditions are folded left
    into nested binary combinations; a single condition is returned as is.
    ``not`` nodes take exactly one condition.
    """

    @staticmethod
    def from_dict(
        data: dict[str, Any],
        *,
        registry: MemoryOperatorRegistry,
        allowed_fields: Sequence[str] | None = None,
    ) -> ISpecification[Any]:
        """
        Create a specification tree from a dictionary.

        Raises on the first structural problem found (fail-fast).
        """
        SpecificationFactory.check_depth(data)
        SpecificationFactory._check(data, "<root>", allowed_fields, errors=None)
        return SpecificationFactory._build(data, registry=registry)

    @staticmethod
    def from_json(
        text: str,
        *,
        registry: MemoryOperatorRegistry,
        allowed_fields: Sequence[str] | None = None,
    ) -> ISpecification[Any]:
        """Parse a JSON string and build a specification tree."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Invalid JSON: {exc}", path="<root>") from exc
        except RecursionError as exc:
            raise ValidationError("JSON is nested too deeply", path="<root>") from exc

        if not isinstance(data, dict):
            raise ValidationError(
                "Top-level JSON value must be an object", path="<root>"
            )
        return SpecificationFactory.from_dict(
            data, registry=registry, allowed_fields=allowed_fields
        )

    @staticmethod
    def validate(
        data: Any,
        *,
        allowed_fields: Sequence[str] | None = None,
    ) -> list[str]:
        """
        Validate a specification dict and return a list of error messages.

        Returns an empty list when the structure is valid.
        """
        errors: list[str] = []
        try:
            SpecificationFactory.check_depth(data)
        except ValidationError as exc:
            return [f"{exc.path}: {exc}"]
        SpecificationFactory._check(data, "<root>", allowed_fields, errors=errors)
        return errors

    @staticmethod
    def check_depth(data: Any) -> None:
        """
        Raise ``ValidationError`` if *data* would build a tree deeper than
        ``MAX_NESTING_DEPTH``.

        An ``and``/``or`` group of *n* conditions folds into *n - 1* nested
        levels. The walk is iterative, so arbitrarily deep input is safe.
        """
        stack: list[tuple[Any, int]] = [(data, 1)]
        while stack:
            node, depth = stack.pop()
            if depth > MAX_NESTING_DEPTH:
                raise ValidationError(
                    f"Specification is nested more than {MAX_NESTING_DEPTH} "
                    f"levels deep",
                    path="<root>",
                )
            conditions = node.get("conditions") if isinstance(node, dict) else None
            if isinstance(conditions, list):
                step = max(len(conditions) - 1, 1)
                stack.extend((child, depth + step) for child in conditions)

    # -- build ---------------------------------------------------------------

    @staticmethod
    def _build(
        data: dict[str, Any],
        *,
        registry: MemoryOperatorRegistry,
    ) -> ISpecification[Any]:
        op_str = data["op"].lower()

        if op_str in (SpecificationOperator.AND.value, SpecificationOperator.OR.value):
            combinator = Combinator(op_str)
            specs = [
                SpecificationFactory._build(c, registry=registry)
                for c in data["conditions"]
            ]
            return reduce(
                lambda left, right: CombinationSpecification(left, right, combinator),
                specs,
            )
        if op_str == SpecificationOperator.NOT.value:
            return NotSpecification(
                SpecificationFactory._build(data["conditions"][0], registry=registry)
            )
        return AttributeSpecification(
            data["attr"], op_str, data.get("val"), registry=registry
        )

    # -- validation ----------------------------------------------------------

    @staticmethod
    def _check(
        data: Any,
        path: str,
        allowed_fields: Sequence[str] | None,
        *,
        errors: list[str] | None,
    ) -> None:
        """
        Walk the tree once.

        With ``errors=None`` the first problem is raised; otherwise every
        problem is appended to *errors* and the walk continues.
        """

        def fail(exc: SpecificationError) -> None:
            if errors is None:
                raise exc
            errors.append(f"{path}: {exc}")

        if not isinstance(data, dict):
            fail(ValidationError(f"Expected a dict, got {type(data).__name__}", path))
            return

        op_str = data.get("op")
        if not op_str or not isinstance(op_str, str):
            fail(ValidationError("Missing or empty 'op' key", path))
            return
        op_lower = op_str.lower()

        if op_lower in LOGICAL_OPERATORS:
            conditions = data.get("conditions")
            if not isinstance(conditions, list) or not conditions:
                fail(
                    ValidationError(
                        f"Logical operator '{op_lower}' requires a non-empty "
                        f"'conditions' list",
                        path,
                    )
                )
                return
            if op_lower == SpecificationOperator.NOT.value and len(conditions) != 1:
                fail(ValidationError("'not' takes exactly one condition", path))
                return
            for idx, child in enumerate(conditions):
                SpecificationFactory._check(
                    child, f"{path}.conditions[{idx}]", allowed_fields, errors=errors
                )
            return

        if op_lower not in _VALID_OPERATORS:
            fail(
                OperatorNotFoundError(
                    op_lower, [m.value for m in SpecificationOperator]
                )
            )
        attr = data.get("attr")
        if not attr or not isinstance(attr, str):
            fail(ValidationError("Leaf specification missing 'attr'", path))
            return
        if allowed_fields is not None and attr not in allowed_fields:
            fail(
                ValidationError(
                    f"Field '{attr}' is not in the allowed fields list", path
                )
            )
        val = data.get("val")
        if op_lower in _MEMBERSHIP_OPERATORS and not isinstance(
            val, MEMBERSHIP_OPERANDS
        ):
            fail(
                ValidationError(
                    f"'{op_lower}' on '{attr}' needs a list of values, "
                    f"got {type(val).__name__}",
                    path,
                )
            )
