"""Application service: Add Product use case."""

from __future__ import annotations

from swiftpos.application.data_store import DataStore
from swiftpos.application.product_form import parse_product_form
from swiftpos.domain.exceptions import ValidationError
from swiftpos.domain.model.product import Product


class AddProductHandler:

    def __init__(self, store: DataStore) -> None:
        self._store = store

    def handle(
        self, code: str, name: str, price: str, stock_quantity: str | int
    ) -> Product:
        """Add a new product to the catalog."""
        form = parse_product_form(code, name, price, stock_quantity)

        if self._store.find_product_by_code(form.code) is not None:
            raise ValidationError(
                "That product code already exists. Please choose another."
            )

        product_id = self._store.add_product(
            code=form.code,
            name=form.name,
            price=form.price,
            stock_quantity=form.stock_quantity,
        )
        return self._store.get_product(product_id)  # type: ignore[return-value]
