from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ActivityLog
from .repository import ActivityLogRepository


def _to_log(r: dict) -> ActivityLog:
    return ActivityLog(
        log_id=str(r["log_id"]),
        user_id=str(r["user_id"]),
        user_name=r["user_name"],
        action=r["action"],
        details=r.get("details") or "",
        timestamp=r["created_at"],
    )


class MySQLActivityLogRepository(ActivityLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, log: ActivityLog) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO activity_logs(log_id, user_id, user_name, action, details, created_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (log.log_id, log.user_id, log.user_name, log.action, log.details[:500], log.timestamp),
            )

    def list_recent(self, limit: int) -> Sequence[ActivityLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT log_id, user_id, user_name, action, details, created_at
                FROM activity_logs
                ORDER BY created_at DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_to_log(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[ActivityLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT log_id, user_id, user_name, action, details, created_at FROM activity_logs ORDER BY created_at DESC"
            )
            return [_to_log(r) for r in fetchall(cur)]

    def replace_all(self, logs: Sequence[ActivityLog]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM activity_logs")
            if logs:
                cur.executemany(
                    """
                    INSERT INTO activity_logs(log_id, user_id, user_name, action, details, created_at)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    [(l.log_id, l.user_id, l.user_name, l.action, l.details[:500], l.timestamp) for l in logs],
                )
