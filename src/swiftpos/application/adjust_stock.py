"""Application service: Adjust Stock use case.

The cashier-facing form works in whole units with an explicit direction
("add" or "deduct"); the store only ever sees a signed delta.
"""

from __future__ import annotations

from enum import Enum

from swiftpos.application.data_store import DataStore
from swiftpos.application.product_form import parse_whole_number
from swiftpos.domain.exceptions import EntityNotFoundError, ValidationError


class StockMode(Enum):
    ADD = "add"
    DEDUCT = "deduct"


class AdjustStockHandler:

    def __init__(self, store: DataStore) -> None:
        self._store = store

    def handle(self, product_id: str, mode: StockMode | str, amount: str | int) -> int:
        """Apply the adjustment and return the resulting stock quantity.

        Deducting more than is on hand leaves the product at 0.
        """
        if not product_id:
            raise ValidationError("Please select a product to adjust stock.")

        try:
            mode = StockMode(mode)
        except ValueError as exc:
            raise ValidationError(f"Unknown stock mode: {mode!r}") from exc

        units = parse_whole_number(amount)
        if units is None or units <= 0:
            raise ValidationError(
                "Adjustment amount must be a whole number greater than 0."
            )

        product = self._store.get_product(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        delta = units if mode is StockMode.ADD else -units
        self._store.adjust_stock(product_id, delta)
        return product.stock_quantity
