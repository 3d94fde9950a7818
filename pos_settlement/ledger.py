"""In-progress cart for one invoice session."""

from collections.abc import Iterator
from typing import Optional

import structlog

from . import pricing
from .models import LineItem, Product
from .validation import require_non_negative_price, require_positive_quantity

logger = structlog.get_logger()


class LineItemLedger:
    """Ordered line items keyed by product id.

    Invariants:
    - at most one line per product id; re-adding merges quantities
    - every stored line has quantity > 0; dropping to zero removes the line
    - insertion order is display order
    """

    def __init__(self) -> None:
        self._lines: dict[str, LineItem] = {}  # product_id -> LineItem

    def add_or_merge(
        self,
        product: Product,
        quantity: int,
        effective_price: Optional[int] = None,
    ) -> LineItem:
        """Add ``quantity`` of ``product``, merging into an existing line.

        The effective price is fixed by the first add. Later adds for the
        same product only increase the quantity.
        """
        require_positive_quantity(quantity)
        if effective_price is not None:
            require_non_negative_price(effective_price)

        line = self._lines.get(product.id)
        if line is not None:
            line = line.with_quantity(line.quantity + quantity)
            self._lines[product.id] = line
            logger.debug("item_merged", product_id=product.id, quantity=line.quantity)
            return line

        line = LineItem(
            product=product,
            quantity=quantity,
            effective_price=product.sell_price if effective_price is None else effective_price,
        )
        self._lines[product.id] = line
        logger.debug("item_added", product_id=product.id, quantity=quantity)
        return line

    def set_quantity(self, line_id: str, quantity: int) -> None:
        """Replace a line's quantity, keeping its position; ``quantity <= 0`` removes it."""
        if quantity <= 0:
            self.remove(line_id)
            return
        line = self._lines.get(line_id)
        if line is None:
            return
        self._lines[line_id] = line.with_quantity(quantity)
        logger.debug("quantity_updated", product_id=line_id, quantity=quantity)

    def remove(self, line_id: str) -> None:
        if self._lines.pop(line_id, None) is not None:
            logger.debug("item_removed", product_id=line_id)

    def clear(self) -> None:
        self._lines.clear()

    def get(self, line_id: str) -> Optional[LineItem]:
        return self._lines.get(line_id)

    def items(self) -> tuple[LineItem, ...]:
        return tuple(self._lines.values())

    def snapshot(self) -> tuple[LineItem, ...]:
        """Current lines, safe to keep after the ledger changes."""
        return tuple(self._lines.values())

    def subtotal(self) -> int:
        return pricing.subtotal(self._lines.values())

    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(tuple(self._lines.values()))

    def __contains__(self, line_id: object) -> bool:
        return line_id in self._lines
