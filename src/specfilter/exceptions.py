"""
Errors raised while building, parsing or applying specifications.

Every error derives from ``SpecificationError``. Each class names a stable
``code`` and the extra ``details()`` it carries; ``to_dict()`` combines the
two for machine-readable output such as ``specfilter --format json``.
Unknown operators and fields carry close-match suggestions.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any, ClassVar


def _unknown_name_message(
    kind: str, name: str, suggestions: list[str], valid: list[str]
) -> str:
    message = f"Unknown {kind} '{name}'."
    if suggestions:
        message += f" Did you mean: {', '.join(suggestions)}?"
    return f"{message} Valid {kind}s: {', '.join(valid)}"


class SpecificationError(Exception):
    """Base for every specfilter error."""

    code: ClassVar[str] = "SPECIFICATION_ERROR"

    def details(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "message": str(self), **self.details()}


class InvalidArgumentError(SpecificationError):
    """A specification or filter was given a missing or unusable argument."""

    code = "INVALID_ARGUMENT"

    def __init__(self, message: str, argument: str | None = None) -> None:
        self.argument = argument
        super().__init__(message)

    def details(self) -> dict[str, Any]:
        return {"argument": self.argument}


class ValidationError(SpecificationError):
    """A specification dict is malformed at ``path`` (``<root>.conditions[1]``)."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)

    def details(self) -> dict[str, Any]:
        return {"path": self.path}


class OperatorNotFoundError(SpecificationError):
    """An operator the registry does not evaluate."""

    code = "OPERATOR_NOT_FOUND"

    def __init__(self, operator: str, valid_operators: list[str]) -> None:
        self.operator = operator
        self.valid_operators = sorted(valid_operators)
        self.suggestions = get_close_matches(
            operator, self.valid_operators, n=3, cutoff=0.6
        )
        super().__init__(
            _unknown_name_message(
                "operator", operator, self.suggestions, self.valid_operators
            )
        )

    def details(self) -> dict[str, Any]:
        return {
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": self.valid_operators,
        }


class FieldNotFoundError(SpecificationError):
    """
    A field the filtered model does not have.

    Example message (one line)::

        Product: Unknown field 'colour'. Did you mean: color?
        Valid fields: color, name, size
    """

    code = "FIELD_NOT_FOUND"

    def __init__(
        self,
        invalid_field: str,
        model_name: str,
        available_fields: list[str],
        cutoff: float = 0.6,
    ) -> None:
        self.invalid_field = invalid_field
        self.model_name = model_name
        self.available_fields = sorted(available_fields)
        self.suggestions = get_close_matches(
            invalid_field, self.available_fields, n=5, cutoff=cutoff
        )
        message = _unknown_name_message(
            "field", invalid_field, self.suggestions, self.available_fields
        )
        super().__init__(f"{model_name}: {message}")

    def details(self) -> dict[str, Any]:
        return {
            "field": self.invalid_field,
            "model": self.model_name,
            "suggestions": self.suggestions,
            "available_fields": self.available_fields,
        }


class SpecificationParseError(SpecificationError):
    """Specification text could not be parsed; ``position`` is a character offset."""

    code = "PARSE_ERROR"

    def __init__(self, message: str, position: int | None = None) -> None:
        self.message = message
        self.position = position
        if position is not None:
            message = f"{message} (at position {position})"
        super().__init__(message)

    def details(self) -> dict[str, Any]:
        return {"message": self.message, "position": self.position}
