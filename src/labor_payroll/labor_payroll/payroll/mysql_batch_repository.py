from __future__ import annotations

from collections import defaultdict
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import BatchItem, PayrollBatch
from .repository import PayrollBatchRepository

_BATCH_COLUMNS = "batch_id, name, month, year, created_at"

_ITEM_COLUMNS = "batch_id, worker_id, project_id, project_name, basic_amount, extra_amount, total_amount, note, position"

_UPSERT_BATCH = """
    INSERT INTO payroll_batches(batch_id, name, month, year, created_at)
    VALUES(%s,%s,%s,%s,%s)
    ON DUPLICATE KEY UPDATE name=VALUES(name), month=VALUES(month), year=VALUES(year)
"""

_INSERT_ITEM = f"INSERT INTO payroll_batch_items({_ITEM_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)"


def _to_item(r: dict) -> BatchItem:
    return BatchItem(
        worker_id=str(r["worker_id"]),
        project_id=str(r.get("project_id") or ""),
        project_name=r.get("project_name") or "",
        basic_amount=int(r.get("basic_amount") or 0),
        extra_amount=int(r.get("extra_amount") or 0),
        note=r.get("note") or "",
    )


def _item_params(batch_id: str, position: int, i: BatchItem) -> tuple:
    return (
        batch_id,
        i.worker_id,
        i.project_id,
        i.project_name,
        i.basic_amount,
        i.extra_amount,
        i.total_amount,
        i.note,
        position,
    )


class MySQLPayrollBatchRepository(PayrollBatchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load(self, cur, rows: list[dict]) -> list[PayrollBatch]:
        if not rows:
            return []
        ids = [r["batch_id"] for r in rows]
        placeholders = ",".join(["%s"] * len(ids))
        cur.execute(
            f"SELECT {_ITEM_COLUMNS} FROM payroll_batch_items WHERE batch_id IN ({placeholders}) ORDER BY position",
            tuple(ids),
        )
        items: dict[str, list[BatchItem]] = defaultdict(list)
        for r in fetchall(cur):
            items[str(r["batch_id"])].append(_to_item(r))

        return [
            PayrollBatch(
                batch_id=str(r["batch_id"]),
                name=r["name"],
                month=int(r["month"]),
                year=int(r["year"]),
                created_at=r["created_at"],
                items=tuple(items[str(r["batch_id"])]),
            )
            for r in rows
        ]

    def get_by_id(self, batch_id: str) -> Optional[PayrollBatch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_BATCH_COLUMNS} FROM payroll_batches WHERE batch_id=%s", (batch_id,))
            row = fetchone(cur)
            found = self._load(cur, [row] if row else [])
            return found[0] if found else None

    def list_by_month(self, year: int, month: int) -> Sequence[PayrollBatch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_BATCH_COLUMNS} FROM payroll_batches WHERE year=%s AND month=%s ORDER BY created_at",
                (year, month),
            )
            return self._load(cur, fetchall(cur))

    def list_all(self) -> Sequence[PayrollBatch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_BATCH_COLUMNS} FROM payroll_batches ORDER BY created_at")
            return self._load(cur, fetchall(cur))

    def _write(self, cur, batch: PayrollBatch) -> None:
        cur.execute(_UPSERT_BATCH, (batch.batch_id, batch.name, batch.month, batch.year, batch.created_at))
        cur.execute("DELETE FROM payroll_batch_items WHERE batch_id=%s", (batch.batch_id,))
        if batch.items:
            cur.executemany(
                _INSERT_ITEM,
                [_item_params(batch.batch_id, pos, i) for pos, i in enumerate(batch.items)],
            )

    def save(self, batch: PayrollBatch) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            self._write(cur, batch)

    def delete(self, batch_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payroll_batches WHERE batch_id=%s", (batch_id,))
            return cur.rowcount > 0

    def replace_all(self, batches: Sequence[PayrollBatch]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payroll_batch_items")
            cur.execute("DELETE FROM payroll_batches")
            for batch in batches:
                self._write(cur, batch)
