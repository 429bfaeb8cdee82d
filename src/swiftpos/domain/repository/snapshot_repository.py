"""Abstract repository for the persisted POS document.

Defined in the domain layer so the domain never depends on
infrastructure. The whole state is one document: there is no
per-entity save, only full-snapshot reads and writes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from swiftpos.domain.model.snapshot import PosSnapshot


class SnapshotRepository(ABC):

    @abstractmethod
    def load(self) -> PosSnapshot | None:
        """Return the stored snapshot, or None if nothing is stored.

        Raises StorageError if a document exists but cannot be read or
        parsed.
        """

    @abstractmethod
    def save(self, snapshot: PosSnapshot) -> None:
        """Overwrite the stored document with ``snapshot``.

        Raises StorageError if the write fails.
        """
