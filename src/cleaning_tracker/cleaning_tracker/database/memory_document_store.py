from __future__ import annotations

import copy
import threading
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..common.datetime_utils import now_utc
from ..core.exceptions import NotFoundError
from .document_store import DocumentStore, resolve_server_timestamps, sort_documents


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store for tests and the ``memory`` backend.

    Documents are deep-copied on the way in and out so callers cannot mutate
    stored state by accident.
    """

    def __init__(self, *, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or now_utc
        self._lock = threading.Lock()
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def _col(self, collection: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    def insert(self, collection: str, data: Mapping[str, Any]) -> str:
        doc_id = uuid.uuid4().hex[:20]
        with self._lock:
            self._col(collection)[doc_id] = copy.deepcopy(resolve_server_timestamps(data, self._clock))
        return doc_id

    def get_all(
        self,
        collection: str,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        with self._lock:
            items = list(self._col(collection).items())

        docs: List[Dict[str, Any]] = []
        for doc_id, data in items:
            if filters and any(data.get(k) != v for k, v in filters.items()):
                continue
            docs.append({**copy.deepcopy(data), "id": doc_id})

        if order_by:
            docs = sort_documents(docs, order_by, descending=descending)
        return docs

    def get_by_id(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            data = self._col(collection).get(doc_id)
            if data is None:
                return None
            return {**copy.deepcopy(data), "id": doc_id}

    def set_by_id(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        with self._lock:
            self._col(collection)[doc_id] = copy.deepcopy(resolve_server_timestamps(data, self._clock))

    def update_by_id(self, collection: str, doc_id: str, updates: Mapping[str, Any]) -> None:
        with self._lock:
            current = self._col(collection).get(doc_id)
            if current is None:
                raise NotFoundError(f"{collection}/{doc_id} does not exist")
            current.update(copy.deepcopy(resolve_server_timestamps(updates, self._clock)))

    def delete_by_id(self, collection: str, doc_id: str) -> bool:
        with self._lock:
            return self._col(collection).pop(doc_id, None) is not None

    def count(self, collection: str) -> int:
        with self._lock:
            return len(self._col(collection))
