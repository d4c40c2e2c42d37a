from __future__ import annotations

from datetime import date
from typing import Any, Dict, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, as_datetime, as_float, build_update, db_cursor, fetchall, fetchone
from .model import TimeEntry
from .repository import TimeEntryRepository

_SELECT = """
    SELECT id, user_id, work_date, start_time, end_time, hours_worked, project_id, description, created_at
    FROM time_entries
"""

# domain field -> column
_COLUMN_FOR = {
    "user_id": "user_id",
    "date": "work_date",
    "start_time": "start_time",
    "end_time": "end_time",
    "hours_worked": "hours_worked",
    "project_id": "project_id",
    "description": "description",
}


def _row_to_entry(row: Dict[str, Any]) -> TimeEntry:
    return TimeEntry(
        entry_id=str(row["id"]),
        user_id=str(row["user_id"]),
        date=as_date(row["work_date"]),
        start_time=str(row["start_time"])[:5],
        end_time=str(row["end_time"])[:5],
        hours_worked=as_float(row["hours_worked"]),
        project_id=str(row["project_id"]),
        description=row.get("description"),
        created_at=as_datetime(row["created_at"]),
    )


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY work_date DESC, created_at DESC")
            return [_row_to_entry(r) for r in fetchall(cur)]

    def get_by_id(self, entry_id: str) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (entry_id,))
            row = fetchone(cur)
            return _row_to_entry(row) if row else None

    def create_entry(
        self,
        *,
        user_id: str,
        work_date: date,
        start_time: str,
        end_time: str,
        hours_worked: float,
        project_id: str,
        description: Optional[str] = None,
    ) -> TimeEntry:
        entry = TimeEntry(
            entry_id=new_id("time"),
            user_id=user_id,
            date=work_date,
            start_time=start_time,
            end_time=end_time,
            hours_worked=float(hours_worked),
            project_id=project_id,
            description=description,
            created_at=now_local(),
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries
                    (id, user_id, work_date, start_time, end_time, hours_worked, project_id, description, created_at)
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    entry.entry_id,
                    entry.user_id,
                    entry.date,
                    entry.start_time,
                    entry.end_time,
                    entry.hours_worked,
                    entry.project_id,
                    entry.description,
                    entry.created_at,
                ),
            )
        return entry

    def update_entry(self, entry_id: str, changes: Mapping[str, Any]) -> Optional[TimeEntry]:
        columns = {_COLUMN_FOR[k]: v for k, v in changes.items() if k in _COLUMN_FOR}
        if columns:
            sql, params = build_update("time_entries", "id", columns, entry_id)
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(sql, params)
        return self.get_by_id(entry_id)

    def delete_by_id(self, entry_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM time_entries WHERE id=%s", (entry_id,))
            return cur.rowcount > 0
