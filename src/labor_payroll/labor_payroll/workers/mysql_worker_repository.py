from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_int
from .model import Worker
from .repository import WorkerRepository

_COLUMNS = (
    "worker_id, name, role, daily_rate, rate_1_cong, rate_2_cong, current_project_id, "
    "identity_card_number, phone, bank_account, bank_name"
)

_UPSERT = f"""
    INSERT INTO workers({_COLUMNS})
    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
    ON DUPLICATE KEY UPDATE
        name=VALUES(name), role=VALUES(role), daily_rate=VALUES(daily_rate),
        rate_1_cong=VALUES(rate_1_cong), rate_2_cong=VALUES(rate_2_cong),
        current_project_id=VALUES(current_project_id),
        identity_card_number=VALUES(identity_card_number), phone=VALUES(phone),
        bank_account=VALUES(bank_account), bank_name=VALUES(bank_name)
"""


def _to_worker(r: dict) -> Worker:
    return Worker(
        worker_id=str(r["worker_id"]),
        name=r["name"],
        role=r.get("role") or "Công nhật",
        daily_rate=int(r.get("daily_rate") or 0),
        rate_1_cong=to_int(r.get("rate_1_cong")),
        rate_2_cong=to_int(r.get("rate_2_cong")),
        current_project_id=r.get("current_project_id"),
        identity_card_number=r.get("identity_card_number"),
        phone=r.get("phone"),
        bank_account=r.get("bank_account"),
        bank_name=r.get("bank_name"),
    )


def _params(w: Worker) -> tuple:
    return (
        w.worker_id,
        w.name,
        w.role,
        w.daily_rate,
        w.rate_1_cong,
        w.rate_2_cong,
        w.current_project_id,
        w.identity_card_number,
        w.phone,
        w.bank_account,
        w.bank_name,
    )


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workers WHERE worker_id=%s", (worker_id,))
            row = fetchone(cur)
            return _to_worker(row) if row else None

    def list_all(self) -> Sequence[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workers ORDER BY name")
            return [_to_worker(r) for r in fetchall(cur)]

    def save(self, worker: Worker) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_UPSERT, _params(worker))

    def delete(self, worker_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM workers WHERE worker_id=%s", (worker_id,))
            return cur.rowcount > 0

    def replace_all(self, workers: Sequence[Worker]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM workers")
            if workers:
                cur.executemany(_UPSERT, [_params(w) for w in workers])
