"""
In-memory operator implementations.

Usage::

    from specfilter.operators_memory import build_default_registry

    registry = build_default_registry()
    AttributeSpecification("size", "in", ["large", "huge"], registry=registry)
"""

from __future__ import annotations

from ..evaluator import MemoryOperatorRegistry
from .equality import EqualOperator, NotEqualOperator
from .membership import InOperator, NotInOperator


def build_default_registry() -> MemoryOperatorRegistry:
    """Create a registry with ``=``, ``!=``, ``in`` and ``not_in``."""
    return MemoryOperatorRegistry(
        EqualOperator(),
        NotEqualOperator(),
        InOperator(),
        NotInOperator(),
    )


__all__ = [
    "EqualOperator",
    "InOperator",
    "MemoryOperatorRegistry",
    "NotEqualOperator",
    "NotInOperator",
    "build_default_registry",
]
