"""Document store interface.

The record-keeping layer only needs collection-scoped CRUD with equality
filters and ordering, so every backend implements this small protocol.
Documents are plain dicts; reads always carry the generated ``id`` key.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol
from datetime import datetime


class _ServerTimestamp:
    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


# Placeholder replaced by the store's own clock when a document is written.
SERVER_TIMESTAMP = _ServerTimestamp()


def resolve_server_timestamps(data: Mapping[str, Any], clock: Callable[[], datetime]) -> Dict[str, Any]:
    now = None
    out: Dict[str, Any] = {}
    for key, value in data.items():
        if key == "id":
            continue
        if value is SERVER_TIMESTAMP:
            now = now or clock()
            value = now
        out[key] = value
    return out


def sort_documents(docs: List[Dict[str, Any]], order_by: str, *, descending: bool) -> List[Dict[str, Any]]:
    """Order by one field; documents missing the field always go last."""
    present = [d for d in docs if d.get(order_by) is not None]
    missing = [d for d in docs if d.get(order_by) is None]
    present.sort(key=lambda d: d[order_by], reverse=descending)
    return present + missing


class DocumentStore(Protocol):
    def insert(self, collection: str, data: Mapping[str, Any]) -> str:
        raise NotImplementedError

    def get_all(
        self,
        collection: str,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """Equality ``filters`` are ANDed together."""

        raise NotImplementedError

    def get_by_id(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def set_by_id(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        """Create or fully replace a document."""

        raise NotImplementedError

    def update_by_id(self, collection: str, doc_id: str, updates: Mapping[str, Any]) -> None:
        """Merge ``updates`` into an existing document; raises NotFoundError if absent."""

        raise NotImplementedError

    def delete_by_id(self, collection: str, doc_id: str) -> bool:
        raise NotImplementedError
