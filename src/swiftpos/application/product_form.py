"""Validation of the product form shared by the add and update use cases.

Raw values arrive as the user typed them. Nothing here touches the
store: a form that fails validation leaves the catalog untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from swiftpos.domain.exceptions import ValidationError
from swiftpos.domain.model.value_objects import Money


@dataclass(frozen=True)
class ProductForm:
    code: str
    name: str
    price: Money
    stock_quantity: int


def parse_product_form(
    code: str, name: str, price: str, stock_quantity: str | int
) -> ProductForm:
    code = (code or "").strip()
    name = (name or "").strip()
    if not code:
        raise ValidationError("Product code is required")
    if not name:
        raise ValidationError("Product name is required")

    try:
        amount = Decimal(str(price).strip())
    except (InvalidOperation, ValueError):
        amount = None
    if amount is None or not amount.is_finite() or amount <= 0:
        raise ValidationError("Price must be a positive number.")

    quantity = parse_whole_number(stock_quantity)
    if quantity is None or quantity < 0:
        raise ValidationError(
            "Stock must be a whole number greater than or equal to 0."
        )

    return ProductForm(
        code=code,
        name=name,
        price=Money(amount),
        stock_quantity=quantity,
    )


def parse_whole_number(raw: str | int) -> int | None:
    """Return ``raw`` as an int, or None if it is not a whole number."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite() or value != value.to_integral_value():
        return None
    return int(value)
