"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timezone

from swiftpos.domain.model.sale import Sale


@dataclass(frozen=True)
class CartItemSpec:
    """Input: what the cashier rang up (product code + quantity)."""

    product_code: str
    quantity: int


@dataclass(frozen=True)
class SoldItemDTO:
    """Output: a single receipt line as displayed to the user."""

    product_code: str
    name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$4.50"
    line_total: str


@dataclass(frozen=True)
class SaleDTO:
    """Output: a complete sale as displayed to the user."""

    id: str
    invoice_number: str
    date: str
    items: list[SoldItemDTO]
    subtotal: str
    tax: str
    total: str

    @staticmethod
    def from_sale(sale: Sale) -> SaleDTO:
        return SaleDTO(
            id=sale.id,
            invoice_number=sale.invoice_number,
            date=sale.date.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
            items=[
                SoldItemDTO(
                    product_code=item.product_code,
                    name=item.name,
                    quantity=item.quantity.value,
                    unit_price=str(item.price),
                    line_total=str(item.line_total),
                )
                for item in sale.sold_items
            ],
            subtotal=str(sale.subtotal),
            tax=str(sale.tax),
            total=str(sale.total_amount),
        )
