"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from swiftpos.application.data_store import DataStore
from swiftpos.domain.model.value_objects import Money


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: str
    code: str
    name: str
    price: str
    stock: int


@dataclass(frozen=True)
class InventoryReportDTO:
    lines: list[InventoryLineDTO]
    total_skus: int
    items_on_hand: int
    inventory_value: str  # retail value at current prices


class ShowInventoryHandler:

    def __init__(self, store: DataStore) -> None:
        self._store = store

    def handle(self) -> InventoryReportDTO:
        products = self._store.products

        value = Money.zero()
        for product in products:
            value = value + product.price * product.stock_quantity

        return InventoryReportDTO(
            lines=[
                InventoryLineDTO(
                    product_id=p.id,
                    code=p.code,
                    name=p.name,
                    price=str(p.price),
                    stock=p.stock_quantity,
                )
                for p in products
            ],
            total_skus=len(products),
            items_on_hand=sum(p.stock_quantity for p in products),
            inventory_value=str(value),
        )
