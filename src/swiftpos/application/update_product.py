"""Application service: Update Product use case."""

from __future__ import annotations

from swiftpos.application.data_store import DataStore
from swiftpos.application.product_form import parse_product_form
from swiftpos.domain.exceptions import EntityNotFoundError, ValidationError


class UpdateProductHandler:

    def __init__(self, store: DataStore) -> None:
        self._store = store

    def handle(
        self,
        product_id: str,
        code: str,
        name: str,
        price: str,
        stock_quantity: str | int,
    ) -> None:
        """Replace a product's code, name, price and stock.

        This does NOT affect any recorded sale — sales captured a
        product snapshot at checkout time.
        """
        if self._store.get_product(product_id) is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        form = parse_product_form(code, name, price, stock_quantity)

        clash = self._store.find_product_by_code(form.code)
        if clash is not None and clash.id != product_id:
            raise ValidationError(
                "That product code already exists. Please choose another."
            )

        self._store.update_product(
            product_id,
            code=form.code,
            name=form.name,
            price=form.price,
            stock_quantity=form.stock_quantity,
        )
