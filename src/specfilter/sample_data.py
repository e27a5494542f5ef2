"""The fixed catalogue the command line filters."""

from __future__ import annotations

from .domain.product import Color, Product, Size

SAMPLE_PRODUCTS: tuple[Product, ...] = (
    Product(name="Apple", color=Color.GREEN, size=Size.SMALL),
    Product(name="Tree", color=Color.GREEN, size=Size.LARGE),
    Product(name="House", color=Color.WHITE, size=Size.HUGE),
    Product(name="Truck", color=Color.WHITE, size=Size.HUGE),
)
