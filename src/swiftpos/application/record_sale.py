"""Application service: Record Sale (checkout) use case.

Turns a cart into a recorded sale:
1. Resolve each product code and check there is enough stock.
2. Snapshot the products into SoldItems at their *current* price.
3. Compute subtotal, tax and total.
4. Deduct stock, then record the sale.

Everything is validated before the first mutation, so a rejected cart
leaves both stock and sales untouched.
"""

from __future__ import annotations

from decimal import Decimal

from swiftpos.application.data_store import DataStore
from swiftpos.application.dto import CartItemSpec, SaleDTO
from swiftpos.domain.exceptions import EntityNotFoundError, ValidationError
from swiftpos.domain.model.product import Product
from swiftpos.domain.model.sale import SoldItem
from swiftpos.domain.model.value_objects import Money, Quantity


class RecordSaleHandler:

    def __init__(self, store: DataStore, tax_rate: Decimal) -> None:
        self._store = store
        self._tax_rate = tax_rate

    def handle(self, cart: list[CartItemSpec]) -> SaleDTO:
        if not cart:
            raise ValidationError("Cart is empty")

        # Phase 1: resolve and validate
        lines = self._merge(cart)
        sold_items: list[SoldItem] = []
        for product, quantity in lines:
            if quantity.value > product.stock_quantity:
                raise ValidationError(
                    f"Insufficient stock for {product.name} "
                    f"(need {quantity.value}, have {product.stock_quantity})"
                )
            sold_items.append(
                SoldItem(
                    product_id=product.id,
                    product_code=product.code,
                    name=product.name,
                    quantity=quantity,
                    price=product.price,  # <-- price snapshot
                )
            )

        subtotal = Money.zero()
        for item in sold_items:
            subtotal = subtotal + item.line_total
        tax = subtotal.apply_rate(self._tax_rate)

        # Phase 2: mutate
        for item in sold_items:
            self._store.adjust_stock(item.product_id, -item.quantity.value)

        sale_id = self._store.record_sale(
            sold_items=sold_items,
            subtotal=subtotal,
            tax=tax,
            total_amount=subtotal + tax,
        )
        return SaleDTO.from_sale(self._store.find_sale(sale_id))  # type: ignore[arg-type]

    def _merge(self, cart: list[CartItemSpec]) -> list[tuple[Product, Quantity]]:
        """Resolve codes to products, adding up repeated codes."""
        merged: dict[str, tuple[Product, int]] = {}
        for spec in cart:
            product = self._store.find_product_by_code(spec.product_code)
            if product is None:
                raise EntityNotFoundError(
                    f"Product not found: '{spec.product_code}'"
                )
            quantity = Quantity(spec.quantity)
            _, previous = merged.get(product.id, (product, 0))
            merged[product.id] = (product, previous + quantity.value)
        return [(product, Quantity(total)) for product, total in merged.values()]
