"""Products a fresh installation starts with."""

from __future__ import annotations

from swiftpos.domain.model.product import Product
from swiftpos.domain.model.value_objects import Money


def default_products() -> list[Product]:
    """Return a new list of the sample products.

    A fresh list every call, so seeding one store never leaks mutations
    into another.
    """
    return [
        Product(
            id="sample-espresso",
            code="ESP-1001",
            name="Espresso Shot",
            price=Money.of("3.00"),
            stock_quantity=30,
        ),
        Product(
            id="sample-cappuccino",
            code="CAP-2002",
            name="Cappuccino",
            price=Money.of("4.50"),
            stock_quantity=24,
        ),
        Product(
            id="sample-bagel",
            code="BG-3003",
            name="Fresh Bagel",
            price=Money.of("2.25"),
            stock_quantity=50,
        ),
    ]
