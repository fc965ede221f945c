from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import to_datetime
from ..core.constants import CLEANINGS_COLLECTION
from ..database.document_store import SERVER_TIMESTAMP, DocumentStore
from .model import Cleaning, CleaningData, CleaningFilter


class CleaningRepository:
    """Store adapter for the ``cleanings`` log collection."""

    def __init__(self, store: DocumentStore):
        self._store = store

    def add_cleaning(self, data: CleaningData) -> str:
        # Orphan machine/cleaner references are accepted here.
        return self._store.insert(CLEANINGS_COLLECTION, {**data.to_document(), "timestamp": SERVER_TIMESTAMP})

    def get_cleanings(self, filter: Optional[CleaningFilter] = None) -> Sequence[Cleaning]:
        filters: dict[str, str] = {}
        if filter and filter.machine_id:
            filters["machineId"] = filter.machine_id
        if filter and filter.cleaner_id:
            filters["cleanerId"] = filter.cleaner_id

        docs = self._store.get_all(CLEANINGS_COLLECTION, order_by="timestamp", descending=True, filters=filters)
        cleanings = [Cleaning.from_document(d) for d in docs]

        # Date range is applied after retrieval.
        if filter and (filter.start_date or filter.end_date):
            start = to_datetime(filter.start_date)
            end = to_datetime(filter.end_date)
            cleanings = [
                c
                for c in cleanings
                if c.timestamp is not None
                and not (start and c.timestamp < start)
                and not (end and c.timestamp > end)
            ]
        return cleanings

    def get_cleanings_by_machine(self, machine_id: str) -> Sequence[Cleaning]:
        return self.get_cleanings(CleaningFilter(machine_id=machine_id))

    def get_cleanings_by_cleaner(self, cleaner_id: str) -> Sequence[Cleaning]:
        return self.get_cleanings(CleaningFilter(cleaner_id=cleaner_id))

    def mark_archived(self, cleaning_id: str, archive_entry_id: Optional[str]) -> None:
        self._store.update_by_id(CLEANINGS_COLLECTION, cleaning_id, {"archiveEntryId": archive_entry_id})

    def delete_cleaning(self, cleaning_id: str) -> bool:
        return self._store.delete_by_id(CLEANINGS_COLLECTION, cleaning_id)
