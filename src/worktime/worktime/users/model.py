from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from ..core.enums import DeletionPolicy, Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object, no storage access here.
    """

    DELETION_POLICY: ClassVar[DeletionPolicy] = DeletionPolicy.SOFT_DELETE

    user_id: str
    first_name: str
    last_name: str
    email: str
    password_hash: str
    role: Role
    hourly_rate: float
    monthly_deductions: float
    is_active: bool
    created_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_public_dict(self) -> dict:
        return {
            "id": self.user_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "role": self.role.value,
            "hourlyRate": self.hourly_rate,
            "monthlyDeductions": self.monthly_deductions,
            "isActive": self.is_active,
            "createdAt": self.created_at.isoformat(),
        }
