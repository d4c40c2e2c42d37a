from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class PeriodKind(str, Enum):
    MONTH = "month"
    YEAR = "year"
    CUSTOM = "custom"


class DeletionPolicy(str, Enum):
    """How a repository removes a record.

    SOFT_DELETE keeps the row and flips ``is_active``; HARD_DELETE removes it.
    """

    SOFT_DELETE = "soft_delete"
    HARD_DELETE = "hard_delete"
