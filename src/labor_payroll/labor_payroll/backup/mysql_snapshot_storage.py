from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchone, load_json
from .repository import SnapshotStorage


class MySQLSnapshotStorage(SnapshotStorage):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, data: dict) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO app_storage(data, updated_at) VALUES(%s, NOW())", (dump_json(data),))

    def latest(self) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT data FROM app_storage ORDER BY updated_at DESC, id DESC LIMIT 1")
            row = fetchone(cur)
            return load_json(row["data"]) if row else None
