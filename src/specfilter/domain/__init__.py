"""Domain primitives: value objects, products and the specification protocol."""

from .product import Color, Product, Size
from .specification import ISpecification
from .value_object import ValueObject

__all__ = ["Color", "ISpecification", "Product", "Size", "ValueObject"]
