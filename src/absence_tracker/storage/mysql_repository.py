from __future__ import annotations

import json
from typing import Any, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, decode_json_column, fetchone
from .repository import SETTINGS_KEY, TrackerRepository, entries_key


class MySQLTrackerRepository(TrackerRepository):
    """One JSON document per list (and one for settings) in ``tracker_documents``."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load(self, key: str) -> Optional[Any]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT payload FROM tracker_documents WHERE doc_key=%s", (key,))
            r = fetchone(cur)
            if not r:
                return None
            return decode_json_column(r.get("payload"))

    def _save(self, key: str, payload: Any) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tracker_documents(doc_key, payload)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE payload=VALUES(payload)
                """,
                (key, json.dumps(payload)),
            )

    def load_entries(self, list_name: str) -> Optional[Any]:
        return self._load(entries_key(list_name))

    def save_entries(self, list_name: str, entries: list[dict]) -> None:
        self._save(entries_key(list_name), entries)

    def load_settings(self) -> Optional[Any]:
        return self._load(SETTINGS_KEY)

    def save_settings(self, settings: dict) -> None:
        self._save(SETTINGS_KEY, settings)
