from __future__ import annotations

import json
import re
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

import mysql.connector

from ..common.datetime_utils import now_utc
from ..core.exceptions import NotFoundError, StoreError
from .connection import DatabaseConnection
from .document_store import DocumentStore, resolve_server_timestamps
from .mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json

_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _json_path(field: str) -> str:
    if not _FIELD_RE.match(field):
        raise ValueError(f"Invalid document field name: {field!r}")
    return f"$.{field}"


class MySQLDocumentStore(DocumentStore):
    """Documents kept as JSON rows in a single ``documents`` table.

    Equality filters and ordering are pushed down with ``JSON_EXTRACT``.
    Timestamps are serialized as UTC ISO strings, which sort chronologically.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, clock: Optional[Callable[[], datetime]] = None):
        self._conn_factory = conn_factory
        self._clock = clock or now_utc

    def insert(self, collection: str, data: Mapping[str, Any]) -> str:
        doc_id = uuid.uuid4().hex[:20]
        self.set_by_id(collection, doc_id, data)
        return doc_id

    def get_all(
        self,
        collection: str,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        sql = "SELECT doc_id, data FROM documents WHERE collection=%s"
        params: list[Any] = [collection]
        for field, value in (filters or {}).items():
            if value is None:
                sql += " AND (JSON_EXTRACT(data, %s) IS NULL OR JSON_TYPE(JSON_EXTRACT(data, %s))='NULL')"
                params.extend([_json_path(field), _json_path(field)])
            else:
                sql += " AND JSON_EXTRACT(data, %s) = CAST(%s AS JSON)"
                params.extend([_json_path(field), json.dumps(value)])
        if order_by:
            # Missing fields sort last regardless of direction.
            direction = "DESC" if descending else "ASC"
            sql += f" ORDER BY JSON_EXTRACT(data, %s) IS NULL, JSON_UNQUOTE(JSON_EXTRACT(data, %s)) {direction}"
            params.extend([_json_path(order_by), _json_path(order_by)])

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(sql, tuple(params))
                rows = fetchall(cur)
        except mysql.connector.Error as e:
            raise StoreError(f"Failed to read {collection}: {e}") from e

        return [{**load_json(r["data"]), "id": r["doc_id"]} for r in rows]

    def get_by_id(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT doc_id, data FROM documents WHERE collection=%s AND doc_id=%s",
                    (collection, doc_id),
                )
                row = fetchone(cur)
        except mysql.connector.Error as e:
            raise StoreError(f"Failed to read {collection}/{doc_id}: {e}") from e

        if not row:
            return None
        return {**load_json(row["data"]), "id": row["doc_id"]}

    def set_by_id(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        payload = dump_json(resolve_server_timestamps(data, self._clock))
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO documents(collection, doc_id, data, created_at)
                    VALUES(%s,%s,%s,UTC_TIMESTAMP(6))
                    ON DUPLICATE KEY UPDATE data=VALUES(data)
                    """,
                    (collection, doc_id, payload),
                )
        except mysql.connector.Error as e:
            raise StoreError(f"Failed to write {collection}/{doc_id}: {e}") from e

    def update_by_id(self, collection: str, doc_id: str, updates: Mapping[str, Any]) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT data FROM documents WHERE collection=%s AND doc_id=%s FOR UPDATE",
                    (collection, doc_id),
                )
                row = fetchone(cur)
                if not row:
                    raise NotFoundError(f"{collection}/{doc_id} does not exist")
                merged = load_json(row["data"])
                merged.update(resolve_server_timestamps(updates, self._clock))
                cur.execute(
                    "UPDATE documents SET data=%s WHERE collection=%s AND doc_id=%s",
                    (dump_json(merged), collection, doc_id),
                )
        except mysql.connector.Error as e:
            raise StoreError(f"Failed to update {collection}/{doc_id}: {e}") from e

    def delete_by_id(self, collection: str, doc_id: str) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM documents WHERE collection=%s AND doc_id=%s", (collection, doc_id))
                return cur.rowcount > 0
        except mysql.connector.Error as e:
            raise StoreError(f"Failed to delete {collection}/{doc_id}: {e}") from e
