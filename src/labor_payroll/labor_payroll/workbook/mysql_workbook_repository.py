from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import Personnel, Workbook
from .repository import PersonnelRepository, WorkbookRepository

_PERSONNEL_COLUMNS = "personnel_id, name, account_no, bank_name, company"

_UPSERT_PERSONNEL = """
    INSERT INTO personnel(personnel_id, name, account_no, bank_name, company, position)
    VALUES(%s,%s,%s,%s,%s,%s)
    ON DUPLICATE KEY UPDATE
        name=VALUES(name), account_no=VALUES(account_no),
        bank_name=VALUES(bank_name), company=VALUES(company)
"""


def _to_person(r: dict) -> Personnel:
    return Personnel(
        personnel_id=str(r["personnel_id"]),
        name=r.get("name") or "",
        account_no=r.get("account_no") or "",
        bank_name=r.get("bank_name") or "",
        company=r.get("company") or "",
    )


class MySQLWorkbookRepository(WorkbookRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, year: int, month: int) -> Optional[Workbook]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT data FROM workbooks WHERE year=%s AND month=%s", (year, month))
            row = fetchone(cur)
            if not row:
                return None
            data = load_json(row["data"]) or {}
            return Workbook.from_dict({**data, "year": year, "month": month})

    def save(self, workbook: Workbook) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO workbooks(year, month, data) VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE data=VALUES(data)
                """,
                (workbook.year, workbook.month, dump_json(workbook.to_dict())),
            )


class MySQLPersonnelRepository(PersonnelRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, personnel_id: str) -> Optional[Personnel]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_PERSONNEL_COLUMNS} FROM personnel WHERE personnel_id=%s", (personnel_id,))
            row = fetchone(cur)
            return _to_person(row) if row else None

    def list_all(self) -> Sequence[Personnel]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_PERSONNEL_COLUMNS} FROM personnel ORDER BY position, personnel_id")
            return [_to_person(r) for r in fetchall(cur)]

    def _next_position(self, cur) -> int:
        cur.execute("SELECT COALESCE(MAX(position), -1) + 1 AS next_pos FROM personnel")
        return int(fetchone(cur)["next_pos"])

    def save(self, person: Personnel) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            position = self._next_position(cur)
            cur.execute(
                _UPSERT_PERSONNEL,
                (person.personnel_id, person.name, person.account_no, person.bank_name, person.company, position),
            )

    def add_many(self, people: Sequence[Personnel]) -> None:
        if not people:
            return
        with db_cursor(self._conn_factory) as (_, cur):
            start = self._next_position(cur)
            cur.executemany(
                _UPSERT_PERSONNEL,
                [
                    (p.personnel_id, p.name, p.account_no, p.bank_name, p.company, start + i)
                    for i, p in enumerate(people)
                ],
            )

    def delete(self, personnel_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM personnel WHERE personnel_id=%s", (personnel_id,))
            return cur.rowcount > 0
