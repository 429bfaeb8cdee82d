"""JSON-file-backed implementation of SnapshotRepository.

The file works like a small key-value store: a JSON object whose keys
are storage keys. The POS document lives under a single key and holds
``{"products": [...], "sales": [...]}``. Other keys in the file are
left untouched.

Only a file that is not JSON, or a document of the wrong shape, is
rejected as a whole. Individual records are read leniently: missing
sale amounts count as zero, a missing sale date reads as now, and a
record that still cannot be read is skipped with a warning.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from swiftpos.domain.exceptions import DomainException, StorageError
from swiftpos.domain.model.product import Product
from swiftpos.domain.model.sale import Sale, SoldItem
from swiftpos.domain.model.snapshot import PosSnapshot
from swiftpos.domain.model.value_objects import Money, Quantity
from swiftpos.domain.repository.snapshot_repository import SnapshotRepository

logger = logging.getLogger(__name__)

STORAGE_KEY = "pos-data-v1"

_RECORD_ERRORS = (
    DomainException, KeyError, TypeError, ValueError, ArithmeticError, AttributeError
)


class JsonSnapshotRepository(SnapshotRepository):

    def __init__(self, file_path: Path, key: str = STORAGE_KEY) -> None:
        self._file_path = file_path
        self._key = key

    # --- SnapshotRepository interface -----------------------------------------

    def load(self) -> PosSnapshot | None:
        document = self._read_all().get(self._key)
        if document is None:
            return None
        if not isinstance(document, dict):
            raise StorageError(f"Stored POS data under '{self._key}' is invalid")
        products = document.get("products") or []
        sales = document.get("sales") or []
        if not isinstance(products, list) or not isinstance(sales, list):
            raise StorageError(f"Stored POS data under '{self._key}' is invalid")
        return PosSnapshot(
            products=_records(products, _product, "product"),
            sales=_records(sales, _sale, "sale"),
        )

    def save(self, snapshot: PosSnapshot) -> None:
        try:
            entries = self._read_all()
        except StorageError:
            # A corrupt file is overwritten, same as a corrupt entry.
            entries = {}
        entries[self._key] = self._to_raw(snapshot)
        self._write_all(entries)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(snapshot: PosSnapshot) -> dict:
        return {
            "products": [
                {
                    "id": p.id,
                    "code": p.code,
                    "name": p.name,
                    "price": str(p.price.amount),
                    "stock_quantity": p.stock_quantity,
                }
                for p in snapshot.products
            ],
            "sales": [
                {
                    "id": s.id,
                    "date": s.date.isoformat(),
                    "subtotal": str(s.subtotal.amount),
                    "tax": str(s.tax.amount),
                    "total_amount": str(s.total_amount.amount),
                    "sold_items": [
                        {
                            "product_id": i.product_id,
                            "product_code": i.product_code,
                            "name": i.name,
                            "quantity": i.quantity.value,
                            "price": str(i.price.amount),
                        }
                        for i in s.sold_items
                    ],
                }
                for s in snapshot.sales
            ],
        }

    # --- File helpers ---------------------------------------------------------

    def _read_all(self) -> dict:
        if not self._file_path.exists():
            return {}
        try:
            entries = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageError(f"Cannot read {self._file_path}") from exc
        if not isinstance(entries, dict):
            raise StorageError(f"{self._file_path} does not hold a JSON object")
        return entries

    def _write_all(self, entries: dict) -> None:
        # Write to a sibling temp file, then swap it in, so readers never
        # see a half-written document.
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=".storage-", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(json.dumps(entries, indent=2) + "\n")
                os.replace(tmp_name, self._file_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Cannot write {self._file_path}") from exc


def _records(raws: list, convert: Callable[[dict], object], kind: str) -> list:
    records = []
    for index, raw in enumerate(raws):
        try:
            records.append(convert(raw))
        except _RECORD_ERRORS as exc:
            logger.warning("Skipping unreadable stored %s #%d: %s", kind, index, exc)
    return records


def _product(raw: dict) -> Product:
    return Product(
        id=_text(raw, "id"),
        code=_text(raw, "code"),
        name=_text(raw, "name"),
        price=_money(raw["price"]),
        stock_quantity=raw["stock_quantity"],
    )


def _sale(raw: dict) -> Sale:
    subtotal = _money_or_zero(raw.get("subtotal"))
    tax = _money_or_zero(raw.get("tax"))
    total = raw.get("total_amount")
    date = raw.get("date")
    return Sale(
        id=_text(raw, "id"),
        date=_timestamp(date) if date else datetime.now(timezone.utc),
        subtotal=subtotal,
        tax=tax,
        total_amount=subtotal + tax if total is None else _money(total),
        sold_items=tuple(_records(raw.get("sold_items") or [], _sold_item, "sold item")),
    )


def _sold_item(raw: dict) -> SoldItem:
    return SoldItem(
        product_id=_text(raw, "product_id"),
        product_code=_text(raw, "product_code"),
        name=_text(raw, "name"),
        quantity=Quantity(raw["quantity"]),
        price=_money(raw["price"]),
    )


def _text(raw: dict, field: str) -> str:
    value = raw[field]
    if value is None or isinstance(value, (dict, list)):
        raise ValueError(f"'{field}' must be text, got {value!r}")
    return str(value)


def _money(value: str | int | float) -> Money:
    # Numbers are accepted as well as the decimal strings we write.
    return Money(Decimal(str(value)))


def _money_or_zero(value: str | int | float | None) -> Money:
    return Money.zero() if value is None else _money(value)


def _timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
