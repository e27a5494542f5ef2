"""Products and their categorical attributes."""

from __future__ import annotations

from enum import Enum

from .value_object import ValueObject


class Color(str, Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    WHITE = "white"


class Size(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    HUGE = "huge"


class Product(ValueObject):
    """An immutable catalogue item filtered by specifications.

    Usage::

        apple = Product(name="Apple", color=Color.GREEN, size=Size.SMALL)
        apple.color == "green"  # True, enum members compare to their value
    """

    name: str
    color: Color
    size: Size
