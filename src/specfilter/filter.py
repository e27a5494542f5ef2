"""Specification-based filtering of in-memory collections."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .domain.specification import ISpecification

logger = logging.getLogger("specfilter.filter")

T = TypeVar("T")


def _check_arguments(items: Any, spec: Any) -> None:
    if items is None:
        raise InvalidArgumentError("items collection is required", argument="items")
    if spec is None:
        raise InvalidArgumentError("specification is required", argument="spec")


def filter_items(items: Iterable[T], spec: ISpecification[T]) -> list[T]:
    """
    Return the items satisfying *spec*, in their original order.

    The input is read once and never modified; the result is a new list.
    """
    _check_arguments(items, spec)
    matched = [item for item in items if spec.is_satisfied_by(item)]
    logger.debug("%s matched %d item(s)", type(spec).__name__, len(matched))
    return matched


class ProductFilter(Generic[T]):
    """
    Filter that accepts any specification.

    New criteria are new specification classes; the filter itself never
    changes.

    Usage::

        pf = ProductFilter()
        green_and_small = ColorSpecification(Color.GREEN) & SizeSpecification("small")
        pf.filter(products, green_and_small)
    """

    def filter(self, items: Iterable[T], spec: ISpecification[T]) -> list[T]:
        return filter_items(items, spec)

    def iter_filter(self, items: Iterable[T], spec: ISpecification[T]) -> Iterator[T]:
        """Lazy variant of :meth:`filter`; arguments are checked up front."""
        _check_arguments(items, spec)
        return (item for item in items if spec.is_satisfied_by(item))
