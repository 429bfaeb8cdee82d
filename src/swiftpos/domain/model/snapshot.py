"""The unit of persistence: every product and every sale, together."""

from __future__ import annotations

from dataclasses import dataclass, field

from swiftpos.domain.model.product import Product
from swiftpos.domain.model.sale import Sale


@dataclass
class PosSnapshot:
    """Full state of the point of sale as written to storage.

    ``sales`` is kept newest first.
    """

    products: list[Product] = field(default_factory=list)
    sales: list[Sale] = field(default_factory=list)
