from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import TransactionType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, to_date
from .model import Transaction
from .repository import TransactionRepository

_COLUMNS = "transaction_id, worker_id, tx_type, amount, tx_date, note"

_INSERT = f"INSERT INTO transactions({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s)"


def _to_tx(r: dict) -> Transaction:
    return Transaction(
        transaction_id=str(r["transaction_id"]),
        worker_id=str(r["worker_id"]),
        tx_type=TransactionType(r["tx_type"]),
        amount=int(r["amount"]),
        tx_date=to_date(r["tx_date"]),
        note=r.get("note"),
    )


def _params(t: Transaction) -> tuple:
    return (t.transaction_id, t.worker_id, t.tx_type.value, t.amount, t.tx_date, t.note)


class MySQLTransactionRepository(TransactionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, tx: Transaction) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_INSERT, _params(tx))

    def list_all(self, *, worker_id: Optional[str] = None) -> Sequence[Transaction]:
        sql = f"SELECT {_COLUMNS} FROM transactions"
        params: tuple = ()
        if worker_id:
            sql += " WHERE worker_id=%s"
            params = (worker_id,)
        sql += " ORDER BY tx_date DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_tx(r) for r in fetchall(cur)]

    def replace_all(self, transactions: Sequence[Transaction]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM transactions")
            if transactions:
                cur.executemany(_INSERT, [_params(t) for t in transactions])
