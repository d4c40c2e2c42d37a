from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Sequence

from ..common.datetime_utils import as_date, now_local
from ..common.ids import new_id
from ..storage.local_store import TIME_ENTRIES_KEY, LocalStore
from .model import TimeEntry
from .repository import TimeEntryRepository

_KEY_FOR = {
    "user_id": "userId",
    "date": "date",
    "start_time": "startTime",
    "end_time": "endTime",
    "hours_worked": "hoursWorked",
    "project_id": "projectId",
    "description": "description",
}


def _to_entry(record: Dict[str, Any]) -> TimeEntry:
    return TimeEntry(
        entry_id=str(record["id"]),
        user_id=str(record.get("userId", "")),
        date=as_date(record["date"]),
        start_time=record.get("startTime", ""),
        end_time=record.get("endTime", ""),
        hours_worked=float(record.get("hoursWorked") or 0),
        project_id=str(record.get("projectId", "")),
        description=record.get("description"),
        created_at=datetime.fromisoformat(record["createdAt"]),
    )


def _to_stored(field: str, value: Any) -> Any:
    if field == "date" and isinstance(value, date):
        return value.isoformat()
    return value


class LocalTimeEntryRepository(TimeEntryRepository):
    def __init__(self, store: LocalStore):
        self._store = store

    def list_all(self) -> Sequence[TimeEntry]:
        entries = [_to_entry(r) for r in self._store.read_list(TIME_ENTRIES_KEY)]
        return sorted(entries, key=lambda e: e.date, reverse=True)

    def get_by_id(self, entry_id: str) -> Optional[TimeEntry]:
        for r in self._store.read_list(TIME_ENTRIES_KEY):
            if r.get("id") == entry_id:
                return _to_entry(r)
        return None

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
        records = self._store.read_list(TIME_ENTRIES_KEY)
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
        records.append(
            {
                "id": entry.entry_id,
                "userId": entry.user_id,
                "date": entry.date.isoformat(),
                "startTime": entry.start_time,
                "endTime": entry.end_time,
                "hoursWorked": entry.hours_worked,
                "projectId": entry.project_id,
                "description": entry.description,
                "createdAt": entry.created_at.isoformat(),
            }
        )
        self._store.write(TIME_ENTRIES_KEY, records)
        return entry

    def update_entry(self, entry_id: str, changes: Mapping[str, Any]) -> Optional[TimeEntry]:
        records = self._store.read_list(TIME_ENTRIES_KEY)
        target = next((r for r in records if r.get("id") == entry_id), None)
        if target is None:
            return None
        for field, value in changes.items():
            if field in _KEY_FOR:
                target[_KEY_FOR[field]] = _to_stored(field, value)
        self._store.write(TIME_ENTRIES_KEY, records)
        return _to_entry(target)

    def delete_by_id(self, entry_id: str) -> bool:
        records = self._store.read_list(TIME_ENTRIES_KEY)
        kept = [r for r in records if r.get("id") != entry_id]
        if len(kept) == len(records):
            return False
        self._store.write(TIME_ENTRIES_KEY, kept)
        return True
