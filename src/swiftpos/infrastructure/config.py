"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
from decimal import Decimal, InvalidOperation
from pathlib import Path

from swiftpos.domain.exceptions import ValidationError

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings:
    def _env(self, name: str, default: str) -> str:
        return (os.getenv(name) or "").strip() or default

    def _decimal(self, name: str, default: str) -> Decimal:
        raw = self._env(name, default)
        try:
            value = Decimal(raw)
        except InvalidOperation as exc:
            raise ValidationError(f"{name} must be a number, got {raw!r}") from exc
        if not value.is_finite() or value < 0:
            raise ValidationError(f"{name} must be a non-negative number, got {raw!r}")
        return value

    def __init__(self) -> None:
        self.data_dir = Path(self._env("SWIFTPOS_DATA_DIR", str(_DEFAULT_DATA_DIR)))
        self.storage_file = self.data_dir / self._env("SWIFTPOS_STORAGE_FILE", "storage.json")
        self.storage_key = self._env("SWIFTPOS_STORAGE_KEY", "pos-data-v1")
        self.tax_rate = self._decimal("SWIFTPOS_TAX_RATE", "0.10")
        self.log_level = self._env("SWIFTPOS_LOG_LEVEL", "WARNING").upper()
        # Delays are in seconds.
        self.invoice_retry_delay = float(self._decimal("SWIFTPOS_INVOICE_RETRY_DELAY", "0.2"))
        self.print_delay = float(self._decimal("SWIFTPOS_PRINT_DELAY", "0.5"))
        self.receipt_dir = Path(
            self._env("SWIFTPOS_RECEIPT_DIR", str(self.data_dir / "receipts"))
        )
