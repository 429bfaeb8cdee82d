"""Application service: List Sales use case (query)."""

from __future__ import annotations

from swiftpos.application.data_store import DataStore
from swiftpos.application.dto import SaleDTO


class ListSalesHandler:

    def __init__(self, store: DataStore) -> None:
        self._store = store

    def handle(self) -> list[SaleDTO]:
        """Every recorded sale, newest first."""
        return [SaleDTO.from_sale(sale) for sale in self._store.sales]
