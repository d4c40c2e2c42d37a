from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import TimeEntry


class TimeEntryRepository(Protocol):
    def list_all(self) -> Sequence[TimeEntry]:
        """All entries ordered by date descending."""
        raise NotImplementedError

    def get_by_id(self, entry_id: str) -> Optional[TimeEntry]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update_entry(self, entry_id: str, changes: Mapping[str, Any]) -> Optional[TimeEntry]:
        raise NotImplementedError

    def delete_by_id(self, entry_id: str) -> bool:
        raise NotImplementedError
