from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ProjectStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_int
from .model import Project
from .repository import ProjectRepository

_COLUMNS = "project_id, name, address, status, standard_rate, double_rate"

_UPSERT = """
    INSERT INTO projects(project_id, name, address, status, standard_rate, double_rate)
    VALUES(%s,%s,%s,%s,%s,%s)
    ON DUPLICATE KEY UPDATE
        name=VALUES(name), address=VALUES(address), status=VALUES(status),
        standard_rate=VALUES(standard_rate), double_rate=VALUES(double_rate)
"""


def _to_project(r: dict) -> Project:
    return Project(
        project_id=str(r["project_id"]),
        name=r["name"],
        address=r.get("address") or "",
        status=ProjectStatus(r["status"]),
        standard_rate=to_int(r.get("standard_rate")),
        double_rate=to_int(r.get("double_rate")),
    )


def _params(p: Project) -> tuple:
    return (p.project_id, p.name, p.address, p.status.value, p.standard_rate, p.double_rate)


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, project_id: str) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM projects WHERE project_id=%s", (project_id,))
            row = fetchone(cur)
            return _to_project(row) if row else None

    def list_all(self, *, status: Optional[ProjectStatus] = None) -> Sequence[Project]:
        sql = f"SELECT {_COLUMNS} FROM projects"
        params: list = []
        if status is not None:
            sql += " WHERE status=%s"
            params.append(status.value)
        sql += " ORDER BY name"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_project(r) for r in fetchall(cur)]

    def save(self, project: Project) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_UPSERT, _params(project))

    def delete(self, project_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM projects WHERE project_id=%s", (project_id,))
            return cur.rowcount > 0

    def replace_all(self, projects: Sequence[Project]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM projects")
            if projects:
                cur.executemany(_UPSERT, [_params(p) for p in projects])
