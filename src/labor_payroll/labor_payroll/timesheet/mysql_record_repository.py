from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_date, to_float
from .model import TimeRecord
from .repository import TimeRecordRepository

_COLUMNS = "record_id, worker_id, project_id, work_date, shifts, rate_used, note"

_INSERT = f"""
    INSERT INTO time_records({_COLUMNS})
    VALUES(%s,%s,%s,%s,%s,%s,%s)
"""


def _to_record(r: dict) -> TimeRecord:
    return TimeRecord(
        record_id=str(r["record_id"]),
        worker_id=str(r["worker_id"]),
        project_id=str(r["project_id"]),
        work_date=to_date(r["work_date"]),
        shifts=to_float(r["shifts"]),
        rate_used=int(r["rate_used"]),
        note=r.get("note"),
    )


def _params(rec: TimeRecord) -> tuple:
    return (rec.record_id, rec.worker_id, rec.project_id, rec.work_date, rec.shifts, rec.rate_used, rec.note)


class MySQLTimeRecordRepository(TimeRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: str) -> Optional[TimeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM time_records WHERE record_id=%s", (record_id,))
            row = fetchone(cur)
            return _to_record(row) if row else None

    def list_range(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        worker_id: Optional[str] = None,
        project_id: Optional[str] = None,
    ) -> Sequence[TimeRecord]:
        where = ["1=1"]
        params: list = []

        if start_date is not None:
            where.append("work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            where.append("work_date <= %s")
            params.append(end_date)
        if worker_id:
            where.append("worker_id = %s")
            params.append(worker_id)
        if project_id:
            where.append("project_id = %s")
            params.append(project_id)

        sql = f"""
            SELECT {_COLUMNS}
            FROM time_records
            WHERE {' AND '.join(where)}
            ORDER BY work_date, worker_id
        """

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_record(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM time_records")
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def add_many(self, records: Sequence[TimeRecord]) -> None:
        if not records:
            return
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(_INSERT, [_params(r) for r in records])

    def update(self, record: TimeRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_records
                SET shifts=%s, rate_used=%s, note=%s
                WHERE record_id=%s
                """,
                (record.shifts, record.rate_used, record.note, record.record_id),
            )
            return cur.rowcount > 0

    def delete(self, record_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM time_records WHERE record_id=%s", (record_id,))
            return cur.rowcount > 0

    def replace_all(self, records: Sequence[TimeRecord]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM time_records")
            if records:
                cur.executemany(_INSERT, [_params(r) for r in records])
