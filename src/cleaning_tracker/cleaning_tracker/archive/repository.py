from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import ARCHIVE_COLLECTION
from ..database.document_store import SERVER_TIMESTAMP, DocumentStore
from .model import ArchiveEntry


class ArchiveRepository:
    """Insert-only store adapter for ``paymentHistory`` entries."""

    def __init__(self, store: DocumentStore):
        self._store = store

    @staticmethod
    def _to_document(entry: ArchiveEntry) -> dict:
        return {
            "paidBy": entry.paid_by,
            "timestamp": SERVER_TIMESTAMP,
            "logs": entry.logs,
            "totalAmount": entry.total_amount,
            "machineId": entry.machine_id or None,
        }

    def add_archive_entry(self, entry: ArchiveEntry) -> str:
        if entry.id:
            self._store.set_by_id(ARCHIVE_COLLECTION, entry.id, self._to_document(entry))
            return entry.id
        return self._store.insert(ARCHIVE_COLLECTION, self._to_document(entry))

    def get_archive_entry(self, entry_id: str) -> Optional[ArchiveEntry]:
        doc = self._store.get_by_id(ARCHIVE_COLLECTION, entry_id)
        return ArchiveEntry.from_document(doc) if doc else None

    def get_archive_entries(self, machine_id: Optional[str] = None) -> Sequence[ArchiveEntry]:
        filters = {"machineId": machine_id} if machine_id else None
        docs = self._store.get_all(ARCHIVE_COLLECTION, order_by="timestamp", descending=True, filters=filters)
        return [ArchiveEntry.from_document(d) for d in docs]
