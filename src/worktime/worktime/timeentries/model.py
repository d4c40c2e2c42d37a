from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import ClassVar, Optional

from ..core.enums import DeletionPolicy


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one logged work session."""

    DELETION_POLICY: ClassVar[DeletionPolicy] = DeletionPolicy.HARD_DELETE

    entry_id: str
    user_id: str
    date: date
    start_time: str
    end_time: str
    hours_worked: float
    project_id: str
    description: Optional[str]
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "userId": self.user_id,
            "date": self.date.isoformat(),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "hoursWorked": self.hours_worked,
            "projectId": self.project_id,
            "description": self.description,
            "createdAt": self.created_at.isoformat(),
        }
