"""Application service: Show Invoice use case.

Resolves one sale for its invoice. A miss right after checkout is
usually the store still catching up rather than a truly absent sale,
so the lookup is retried a fixed number of times, with a fixed pause,
before giving up.

A successfully resolved invoice is printed once, shortly after it is
presented. ``close()`` cancels whatever wait is pending: the retry loop
stops and nothing is printed.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from swiftpos.application.data_store import DataStore
from swiftpos.domain.exceptions import StorageError
from swiftpos.domain.model.sale import Sale

logger = logging.getLogger(__name__)

MAX_RETRIES = 3
RETRY_DELAY = 0.2  # seconds, same pause before every retry
PRINT_DELAY = 0.5


class InvoiceState(Enum):
    LOADING = "LOADING"
    NOT_FOUND = "NOT_FOUND"
    MALFORMED = "MALFORMED"
    READY = "READY"


@dataclass(frozen=True)
class InvoiceView:
    state: InvoiceState
    sale_id: str
    sale: Sale | None = None
    retries: int = 0


class InvoicePresenter:

    def __init__(
        self,
        store: DataStore,
        print_action: Callable[[Sale], None] | None = None,
        retry_delay: float = RETRY_DELAY,
        print_delay: float = PRINT_DELAY,
    ) -> None:
        self._store = store
        self._print_action = print_action
        self._retry_delay = retry_delay
        self._print_delay = print_delay
        self._closed = threading.Event()

    def close(self) -> None:
        """Cancel any pending retry or print."""
        self._closed.set()

    def present(self, sale_id: str) -> InvoiceView | None:
        """Resolve ``sale_id`` into a view, or None if closed meanwhile."""
        if not self._store.data_ready:
            return InvoiceView(InvoiceState.LOADING, sale_id)

        retries = 0
        sale = self._store.find_sale(sale_id)
        while sale is None and retries < MAX_RETRIES:
            if self._closed.wait(self._retry_delay):
                return None
            retries += 1
            logger.debug("Sale %s not found, retry %d/%d", sale_id, retries, MAX_RETRIES)
            sale = self._store.find_sale(sale_id)

        if sale is None:
            return InvoiceView(InvoiceState.NOT_FOUND, sale_id, retries=retries)

        if not sale.has_items:
            return InvoiceView(InvoiceState.MALFORMED, sale_id, sale, retries)

        view = InvoiceView(InvoiceState.READY, sale_id, sale, retries)
        self._print_once(sale)
        return view

    def _print_once(self, sale: Sale) -> None:
        if self._print_action is None:
            return
        if self._closed.wait(self._print_delay):
            logger.debug("Print of invoice %s cancelled", sale.invoice_number)
            return
        try:
            self._print_action(sale)
        except StorageError:
            logger.exception("Failed to print invoice %s", sale.invoice_number)
