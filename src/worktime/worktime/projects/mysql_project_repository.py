from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_datetime, build_update, db_cursor, fetchall, fetchone
from .model import Project
from .repository import ProjectRepository

_UPDATABLE = {"name", "is_active"}


def _row_to_project(row: Dict[str, Any]) -> Project:
    return Project(
        project_id=str(row["id"]),
        name=row["name"],
        is_active=bool(row.get("is_active", True)),
        created_at=as_datetime(row["created_at"]),
    )


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, is_active, created_at FROM projects ORDER BY created_at ASC")
            return [_row_to_project(r) for r in fetchall(cur)]

    def get_by_id(self, project_id: str) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, is_active, created_at FROM projects WHERE id=%s", (project_id,))
            row = fetchone(cur)
            return _row_to_project(row) if row else None

    def create_project(self, *, name: str, is_active: bool = True) -> Project:
        project = Project(project_id=new_id("proj"), name=name, is_active=is_active, created_at=now_local())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO projects(id, name, is_active, created_at) VALUES(%s,%s,%s,%s)",
                (project.project_id, project.name, 1 if is_active else 0, project.created_at),
            )
        return project

    def update_project(self, project_id: str, changes: Mapping[str, Any]) -> Optional[Project]:
        columns = {k: v for k, v in changes.items() if k in _UPDATABLE}
        if columns:
            sql, params = build_update("projects", "id", columns, project_id)
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(sql, params)
        return self.get_by_id(project_id)

    def set_active(self, project_id: str, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE projects SET is_active=%s WHERE id=%s", (1 if is_active else 0, project_id))
            return cur.rowcount > 0
