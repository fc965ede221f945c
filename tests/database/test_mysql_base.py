from __future__ import annotations

from datetime import datetime, timezone

from src.cleaning_tracker.cleaning_tracker.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use
from src.cleaning_tracker.cleaning_tracker.database.mysql_base import dump_json, load_json


def test_timestamps_serialize_as_utc_iso_strings():
    payload = dump_json({"timestamp": datetime(2026, 2, 1, 8, 30, tzinfo=timezone.utc), "name": "Städning"})

    assert load_json(payload) == {"timestamp": "2026-02-01T08:30:00+00:00", "name": "Städning"}


def test_load_json_accepts_bytes():
    assert load_json(b'{"rate": 100}') == {"rate": 100}


def test_schema_splitter_ignores_semicolons_in_quotes():
    sql = "CREATE DATABASE x;\nUSE x;\nINSERT INTO t VALUES ('a;b');\nSELECT 1;"

    stmts = list(_iter_sql_statements(_strip_create_db_and_use(sql)))

    assert stmts == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]
