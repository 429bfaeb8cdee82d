"""Product aggregate.

Products live independently of sales. They have their own lifecycle:
prices change, stock goes up and down, products are added and removed
from the catalog. Sales keep their own copy of product data.
"""

from __future__ import annotations

from dataclasses import dataclass

from swiftpos.domain.exceptions import ValidationError
from swiftpos.domain.model.value_objects import Money

# Fields a caller may change through ``Product.apply_updates``.
UPDATABLE_FIELDS = frozenset({"code", "name", "price", "stock_quantity"})


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``stock_quantity`` is a non-negative integer
    - ``price`` is a non-negative Money (enforced by Money itself)
    """

    id: str
    code: str
    name: str
    price: Money
    stock_quantity: int

    def __post_init__(self) -> None:
        _check_stock(self.stock_quantity)

    def apply_updates(self, fields: dict) -> None:
        """Merge the given fields into this product."""
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Unknown product field(s): {', '.join(sorted(unknown))}"
            )
        if "stock_quantity" in fields:
            _check_stock(fields["stock_quantity"])
        if "price" in fields and not isinstance(fields["price"], Money):
            raise ValidationError("Product price must be a Money value")
        for name, value in fields.items():
            setattr(self, name, value)

    def adjust_stock(self, delta: int) -> None:
        """Add ``delta`` to the stock, clamping at zero.

        Deducting more than is on hand is not an error: the quantity
        simply bottoms out at 0.
        """
        self.stock_quantity = max(self.stock_quantity + delta, 0)

    def has_code(self, code: str) -> bool:
        return normalize_code(self.code) == normalize_code(code)


def normalize_code(code: str) -> str:
    """Product codes compare trimmed and case-insensitively."""
    return code.strip().lower()


def _check_stock(value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"Stock quantity must be an integer, got {type(value).__name__}"
        )
    if value < 0:
        raise ValidationError("Stock quantity cannot be negative")
