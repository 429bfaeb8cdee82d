"""Plain-text thermal receipts and the spool printer that receives them."""

from __future__ import annotations

import logging
from pathlib import Path

from swiftpos.application.dto import SaleDTO
from swiftpos.domain.exceptions import StorageError
from swiftpos.domain.model.sale import Sale

logger = logging.getLogger(__name__)

RECEIPT_WIDTH = 42
STORE_NAME = "SwiftPOS"


def receipt_lines(dto: SaleDTO) -> list[str]:
    """Lay out one sale as a narrow receipt."""
    w = RECEIPT_WIDTH
    lines = [
        STORE_NAME.center(w),
        f"Invoice #{dto.invoice_number}".center(w),
        dto.date.center(w),
        "-" * w,
        f"{'Code':<9} {'Item':<13} {'Qty':>3} {'Price':>6} {'Total':>6}",
        "-" * w,
    ]
    for item in dto.items:
        lines.append(
            f"{item.product_code[:9]:<9} {item.name[:13]:<13} {item.quantity:>3} "
            f"{item.unit_price:>6} {item.line_total:>6}"
        )
    lines += [
        "-" * w,
        f"{'Subtotal':<20}{dto.subtotal:>{w - 20}}",
        f"{'Tax':<20}{dto.tax:>{w - 20}}",
        f"{'Grand Total':<20}{dto.total:>{w - 20}}",
        "",
        "Thank you for your purchase!".center(w),
    ]
    return lines


class SpoolReceiptPrinter:
    """Writes each printed receipt to ``<spool_dir>/<sale id>.txt``."""

    def __init__(self, spool_dir: Path) -> None:
        self._spool_dir = spool_dir
        self.printed: list[Path] = []

    def __call__(self, sale: Sale) -> None:
        path = self._spool_dir / f"{sale.id}.txt"
        text = "\n".join(receipt_lines(SaleDTO.from_sale(sale))) + "\n"
        try:
            self._spool_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot spool receipt to {path}") from exc
        logger.info("Sent invoice #%s to printer spool %s", sale.invoice_number, path)
        self.printed.append(path)
