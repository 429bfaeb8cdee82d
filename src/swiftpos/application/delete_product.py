"""Application service: Delete Product use case."""

from __future__ import annotations

from swiftpos.application.data_store import DataStore
from swiftpos.domain.exceptions import EntityNotFoundError


class DeleteProductHandler:

    def __init__(self, store: DataStore) -> None:
        self._store = store

    def handle(self, product_id: str) -> str:
        """Delete a product and return its name for the confirmation message."""
        product = self._store.get_product(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        self._store.delete_product(product_id)
        return product.name
