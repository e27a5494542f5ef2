"""Composable specifications for filtering in-memory collections."""

from .attribute import AttributeSpecification, ColorSpecification, SizeSpecification
from .base import (
    AndSpecification,
    BaseSpecification,
    CombinationSpecification,
    Combinator,
    NotSpecification,
    OrSpecification,
)
from .domain import Color, ISpecification, Product, Size, ValueObject
from .evaluator import MemoryOperator, MemoryOperatorRegistry
from .exceptions import (
    FieldNotFoundError,
    InvalidArgumentError,
    OperatorNotFoundError,
    SpecificationError,
    SpecificationParseError,
    ValidationError,
)
from .factory import SpecificationFactory
from .filter import ProductFilter, filter_items
from .operators import SpecificationOperator
from .operators_memory import build_default_registry
from .parser import FilterParser
from .syntax import ExpressionSyntax, FilterSyntax, JsonFilterSyntax

__all__ = [
    # Domain
    "Color",
    "ISpecification",
    "Product",
    "Size",
    "ValueObject",
    # Specifications
    "SpecificationOperator",
    "BaseSpecification",
    "AttributeSpecification",
    "ColorSpecification",
    "SizeSpecification",
    "Combinator",
    "CombinationSpecification",
    "AndSpecification",
    "OrSpecification",
    "NotSpecification",
    "SpecificationFactory",
    # Filtering
    "filter_items",
    "ProductFilter",
    # Parsing
    "FilterParser",
    "FilterSyntax",
    "ExpressionSyntax",
    "JsonFilterSyntax",
    # Evaluator / strategy
    "MemoryOperator",
    "MemoryOperatorRegistry",
    "build_default_registry",
    # Exceptions
    "SpecificationError",
    "InvalidArgumentError",
    "ValidationError",
    "OperatorNotFoundError",
    "FieldNotFoundError",
    "SpecificationParseError",
]
