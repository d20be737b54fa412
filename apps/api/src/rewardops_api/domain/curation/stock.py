"""Stock level arithmetic for single-item adjustments."""

from __future__ import annotations

from .errors import StockValidationError
from .items import CatalogItem


def adjusted_stock(item: CatalogItem, delta: int) -> int | None:
    """Stock after applying ``delta``, clamped at zero.

    Unlimited stock (``None``) stays unlimited.
    """

    if item.stock_quantity is None:
        return None
    return max(0, item.stock_quantity + delta)


def exact_stock(value: int | None) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise StockValidationError("Stock quantity must be an integer")
    if value < 0:
        raise StockValidationError("Stock quantity cannot be negative")
    return value


__all__ = ["adjusted_stock", "exact_stock"]
