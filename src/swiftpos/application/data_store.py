"""Application service: the POS data store.

Holds the in-memory products and sales, hydrated once from the snapshot
repository and flushed back as a full snapshot after every mutation.

Persistence is last-writer-wins: there is no versioning and no locking
between processes sharing the same storage. ``record_sale`` is the one
exception: it re-reads storage right before writing so that products
written by another process in the meantime are not thrown away.

Storage failures never propagate out of the store. They are logged and
the store carries on with its in-memory state; a failed write is not
retried.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta, timezone

from swiftpos.domain.exceptions import StorageError, ValidationError
from swiftpos.domain.model.catalog import default_products
from swiftpos.domain.model.product import Product, normalize_code
from swiftpos.domain.model.sale import Sale, SoldItem
from swiftpos.domain.model.snapshot import PosSnapshot
from swiftpos.domain.model.value_objects import Money
from swiftpos.domain.repository.snapshot_repository import SnapshotRepository

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class DataStore:
    """Single owner of the product and sale collections.

    Build one per application run and hand it to whoever needs it.
    Read ``data_ready`` before trusting ``products`` or ``sales``: both
    are empty until ``hydrate()`` has run.
    """

    def __init__(
        self,
        repository: SnapshotRepository,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._repository = repository
        self._clock = clock
        self._id_factory = id_factory
        self._products: list[Product] = []
        self._sales: list[Sale] = []
        self._ready = False
        self._last_sale_at: datetime | None = None

    # --- Hydration -------------------------------------------------------------

    @property
    def data_ready(self) -> bool:
        return self._ready

    def hydrate(self) -> None:
        """Load persisted state once; later calls do nothing.

        Nothing is written here: the first write happens on the first
        mutation after hydration.
        """
        if self._ready:
            return

        try:
            snapshot = self._repository.load()
        except StorageError:
            logger.exception("Failed to parse stored POS data, using defaults")
            snapshot = None

        if snapshot is None:
            logger.info("No stored POS data, seeding default products")
            self._products = default_products()
            self._sales = []
        else:
            self._products = list(snapshot.products) or default_products()
            self._sales = list(snapshot.sales)

        if self._sales:
            self._last_sale_at = max(sale.date for sale in self._sales)

        self._ready = True
        logger.debug(
            "Hydrated %d products and %d sales",
            len(self._products),
            len(self._sales),
        )

    # --- Queries ----------------------------------------------------------------

    @property
    def products(self) -> list[Product]:
        return list(self._products)

    @property
    def sales(self) -> list[Sale]:
        """All sales, newest first."""
        return list(self._sales)

    def get_product(self, product_id: str) -> Product | None:
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    def find_product_by_code(self, code: str) -> Product | None:
        for product in self._products:
            if product.has_code(code):
                return product
        return None

    def find_sale(self, sale_id: str) -> Sale | None:
        for sale in self._sales:
            if sale.id == sale_id:
                return sale
        return None

    # --- Product mutations ------------------------------------------------------

    def add_product(
        self,
        code: str,
        name: str,
        price: Money,
        stock_quantity: int,
    ) -> str:
        """Append a new product and return its freshly assigned id."""
        self._assert_code_free(code)
        product = Product(
            id=self._id_factory(),
            code=code,
            name=name,
            price=price,
            stock_quantity=stock_quantity,
        )
        self._products.append(product)
        self._flush()
        return product.id

    def update_product(self, product_id: str, **fields) -> None:
        """Merge ``fields`` into the matching product.

        Does nothing if no product has ``product_id``.
        """
        product = self.get_product(product_id)
        if product is None:
            return
        if "code" in fields:
            self._assert_code_free(fields["code"], ignore_id=product_id)
        product.apply_updates(fields)
        self._flush()

    def delete_product(self, product_id: str) -> None:
        """Remove the matching product. Recorded sales keep their copies."""
        remaining = [p for p in self._products if p.id != product_id]
        if len(remaining) == len(self._products):
            return
        self._products = remaining
        self._flush()

    def adjust_stock(self, product_id: str, delta: int) -> None:
        """Change stock by ``delta``; the result never goes below zero."""
        product = self.get_product(product_id)
        if product is None:
            return
        product.adjust_stock(delta)
        self._flush()

    # --- Sales ------------------------------------------------------------------

    def record_sale(
        self,
        sold_items: Iterable[SoldItem],
        subtotal: Money,
        tax: Money,
        total_amount: Money,
    ) -> str:
        """Prepend a new sale and persist it straight away.

        Before writing, storage is read again and its product list is
        preferred over the in-memory one when it is non-empty, so a
        concurrent writer's product changes survive this write. The
        in-memory products are left as they are.
        """
        sale = Sale(
            id=self._id_factory(),
            date=self._next_sale_timestamp(),
            subtotal=subtotal,
            tax=tax,
            total_amount=total_amount,
            sold_items=tuple(sold_items),
        )
        self._sales.insert(0, sale)

        if self._ready:
            products = self._products
            try:
                stored = self._repository.load()
            except StorageError:
                logger.warning("Could not re-read stored POS data before saving sale")
                stored = None
            if stored is not None and stored.products:
                products = stored.products
            self._write(PosSnapshot(products=list(products), sales=list(self._sales)))

        return sale.id

    # --- Internal helpers -------------------------------------------------------

    def _assert_code_free(self, code: str, ignore_id: str | None = None) -> None:
        wanted = normalize_code(code)
        for product in self._products:
            if product.id != ignore_id and normalize_code(product.code) == wanted:
                raise ValidationError(
                    "That product code already exists. Please choose another."
                )

    def _next_sale_timestamp(self) -> datetime:
        # Strictly increasing, even when the clock has not moved.
        now = self._clock()
        if self._last_sale_at is not None and now <= self._last_sale_at:
            now = self._last_sale_at + timedelta(microseconds=1)
        self._last_sale_at = now
        return now

    def _flush(self) -> None:
        if not self._ready:
            return
        self._write(PosSnapshot(products=list(self._products), sales=list(self._sales)))

    def _write(self, snapshot: PosSnapshot) -> None:
        try:
            self._repository.save(snapshot)
        except StorageError:
            logger.exception("Failed to save POS data, keeping in-memory state")
