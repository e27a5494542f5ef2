"""FilterParser: specification strings -> specification tree."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

from .domain.product import Product
from .exceptions import (
    FieldNotFoundError,
    InvalidArgumentError,
    SpecificationParseError,
)
from .factory import SpecificationFactory
from .syntax import ExpressionSyntax, FilterSyntax

if TYPE_CHECKING:
    from pydantic import BaseModel

    from .domain.specification import ISpecification
    from .evaluator import MemoryOperatorRegistry

logger = logging.getLogger("specfilter.parser")


def cast_enum(enum_type: type[Enum], raw: Any, field: str) -> Enum:
    """
    Cast *raw* to a member of *enum_type*.

    Matches member values first, then member names, both case-insensitively.
    """
    if isinstance(raw, enum_type):
        return raw
    text = str(raw).strip().lower()
    for member in enum_type:
        if str(member.value).lower() == text or member.name.lower() == text:
            return member
    allowed = ", ".join(str(m.value) for m in enum_type)
    raise SpecificationParseError(
        f"Invalid value {raw!r} for '{field}'. Expected one of: {allowed}"
    )


class FilterParser:
    """Parse a specification string against the fields of a model."""

    def __init__(
        self,
        registry: MemoryOperatorRegistry,
        syntax: FilterSyntax | None = None,
        model: type[BaseModel] = Product,
    ) -> None:
        """
        Args:
            registry: MemoryOperatorRegistry injected into every leaf.
            syntax: Text syntax (defaults to :class:`ExpressionSyntax`).
            model: Pydantic model whose fields may be filtered on.
        """
        if registry is None:
            raise InvalidArgumentError(
                "registry parameter is required. "
                "Use build_default_registry() from "
                "specfilter.operators_memory to create one.",
                argument="registry",
            )
        self._registry = registry
        self._syntax = syntax or ExpressionSyntax()
        self._model = model

    @property
    def fields(self) -> list[str]:
        return list(self._model.model_fields)

    def parse(self, raw: Any) -> ISpecification[Any]:
        """Return the specification described by *raw*."""
        data = self._syntax.parse_filter(raw)
        if not data:
            raise SpecificationParseError("Empty specification")
        SpecificationFactory.check_depth(data)
        typed = self._coerce(data)
        logger.debug("Parsed %r into %s", raw, typed)
        return SpecificationFactory.from_dict(
            typed, registry=self._registry, allowed_fields=self.fields
        )

    def _coerce(self, data: Any) -> Any:
        """
        Return a copy of *data* with leaf values cast to the field types.

        Anything that is not a well-formed node is passed through untouched
        so that the factory reports it.
        """
        if not isinstance(data, dict):
            return data
        conditions = data.get("conditions")
        if isinstance(conditions, list):
            return {**data, "conditions": [self._coerce(c) for c in conditions]}
        attr = data.get("attr")
        if not isinstance(attr, str):
            return data

        model_fields = self._model.model_fields
        if attr not in model_fields:
            raise FieldNotFoundError(attr, self._model.__name__, self.fields)
        annotation = model_fields[attr].annotation
        if not (isinstance(annotation, type) and issubclass(annotation, Enum)):
            return data

        val = data.get("val")
        if isinstance(val, list):
            typed_val: Any = [cast_enum(annotation, v, attr) for v in val]
        else:
            typed_val = cast_enum(annotation, val, attr)
        return {**data, "val": typed_val}
