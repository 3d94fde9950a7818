"""Subtotal, total and profit over a set of line items.

Business Rules:
1. Subtotal charges each line at its effective (possibly overridden) price
2. Discount applies to the subtotal as a whole, never per line
3. Total is not clamped; a discount above the subtotal yields a negative total
4. Profit always uses catalog sell and cost prices, never the effective price
"""

from collections.abc import Iterable
from dataclasses import dataclass

from .models import LineItem


@dataclass(frozen=True)
class PriceSummary:
    subtotal: int
    discount: int
    total: int
    profit: int


def subtotal(items: Iterable[LineItem]) -> int:
    return sum(item.effective_price * item.quantity for item in items)


def total(items: Iterable[LineItem], discount: int) -> int:
    return subtotal(items) - discount


def profit(items: Iterable[LineItem]) -> int:
    return sum(
        (item.product.sell_price - item.product.cost_price) * item.quantity
        for item in items
    )


def summarize(items: Iterable[LineItem], discount: int = 0) -> PriceSummary:
    """Compute every figure the checkout panel shows in one pass over items."""
    items = tuple(items)
    sub = subtotal(items)
    return PriceSummary(
        subtotal=sub,
        discount=discount,
        total=sub - discount,
        profit=profit(items),
    )
