"""Shared fixtures for specfilter tests."""

from __future__ import annotations

import pytest

from specfilter import Color, Product, Size
from specfilter.operators_memory import build_default_registry


@pytest.fixture
def registry():
    """Default in-memory operator registry for building specs."""
    return build_default_registry()


@pytest.fixture
def products() -> list[Product]:
    return [
        Product(name="Apple", color=Color.GREEN, size=Size.SMALL),
        Product(name="Tree", color=Color.GREEN, size=Size.LARGE),
        Product(name="House", color=Color.WHITE, size=Size.HUGE),
        Product(name="Truck", color=Color.WHITE, size=Size.HUGE),
    ]
