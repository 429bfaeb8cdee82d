"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dotenv import load_dotenv

from swiftpos.application.data_store import DataStore
from swiftpos.infrastructure.config import Settings
from swiftpos.infrastructure.persistence.json_snapshot_repository import (
    JsonSnapshotRepository,
)
from swiftpos.infrastructure.printing import SpoolReceiptPrinter


def load_settings() -> Settings:
    load_dotenv()
    return Settings()


def snapshot_repository(settings: Settings) -> JsonSnapshotRepository:
    return JsonSnapshotRepository(settings.storage_file, key=settings.storage_key)


def data_store(settings: Settings) -> DataStore:
    """Build and hydrate the one store this run will use."""
    store = DataStore(snapshot_repository(settings))
    store.hydrate()
    return store


def receipt_printer(settings: Settings) -> SpoolReceiptPrinter:
    return SpoolReceiptPrinter(settings.receipt_dir)
