"""Sale aggregate — an immutable record of one checkout.

A Sale owns denormalized copies of the products it sold (``SoldItem``),
so deleting or repricing a product later never changes a past invoice.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from swiftpos.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class SoldItem:
    """Snapshot of a product at sale time."""

    product_id: str
    product_code: str
    name: str
    quantity: Quantity
    price: Money  # unit price locked at sale time

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


@dataclass(frozen=True)
class Sale:
    """Aggregate root for recorded sales.

    Sales are append-only: once recorded they are never edited or
    deleted. The totals are stored as given at record time rather than
    recomputed from the items.
    """

    id: str
    date: datetime
    subtotal: Money
    tax: Money
    total_amount: Money
    sold_items: tuple[SoldItem, ...]

    @property
    def has_items(self) -> bool:
        return len(self.sold_items) > 0

    @property
    def invoice_number(self) -> str:
        """Short, human-friendly number printed on the receipt."""
        if not self.id:
            return "INVOICE"
        if len(self.id) >= 6:
            return self.id[-6:].upper()
        return self.id.upper()
