from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from ..core.enums import DeletionPolicy


@dataclass(frozen=True)
class Project:
    DELETION_POLICY: ClassVar[DeletionPolicy] = DeletionPolicy.SOFT_DELETE

    project_id: str
    name: str
    is_active: bool
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.project_id,
            "name": self.name,
            "isActive": self.is_active,
            "createdAt": self.created_at.isoformat(),
        }
