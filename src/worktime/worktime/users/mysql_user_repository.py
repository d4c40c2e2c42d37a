from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..core.enums import Role
from ..core.exceptions import DuplicateEmailError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_datetime, as_float, build_update, db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "id, first_name, last_name, email, password_hash, role, hourly_rate, monthly_deductions, is_active, created_at"

_UPDATABLE = {
    "first_name",
    "last_name",
    "email",
    "password_hash",
    "role",
    "hourly_rate",
    "monthly_deductions",
    "is_active",
}


def _row_to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=str(row["id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        hourly_rate=as_float(row.get("hourly_rate")),
        monthly_deductions=as_float(row.get("monthly_deductions")),
        is_active=bool(row.get("is_active", True)),
        created_at=as_datetime(row["created_at"]),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY created_at ASC")
            return [_row_to_user(r) for r in fetchall(cur)]

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE LOWER(email)=LOWER(%s)", (email,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        role: Role,
        hourly_rate: float,
        monthly_deductions: float,
    ) -> User:
        user = User(
            user_id=new_id("user"),
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=password_hash,
            role=role,
            hourly_rate=float(hourly_rate),
            monthly_deductions=float(monthly_deductions),
            is_active=True,
            created_at=now_local(),
        )
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"INSERT INTO users({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,1,%s)",
                    (
                        user.user_id,
                        user.first_name,
                        user.last_name,
                        user.email,
                        user.password_hash,
                        user.role.value,
                        user.hourly_rate,
                        user.monthly_deductions,
                        user.created_at,
                    ),
                )
        except mysql.connector.IntegrityError as e:
            raise DuplicateEmailError("Uživatel s tímto emailem již existuje") from e
        return user

    def update_user(self, user_id: str, changes: Mapping[str, Any]) -> Optional[User]:
        columns = {k: v for k, v in changes.items() if k in _UPDATABLE}
        if "role" in columns and isinstance(columns["role"], Role):
            columns["role"] = columns["role"].value
        if columns:
            sql, params = build_update("users", "id", columns, user_id)
            try:
                with db_cursor(self._conn_factory) as (_, cur):
                    cur.execute(sql, params)
            except mysql.connector.IntegrityError as e:
                raise DuplicateEmailError("Uživatel s tímto emailem již existuje") from e
        return self.get_by_id(user_id)

    def set_active(self, user_id: str, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET is_active=%s WHERE id=%s", (1 if is_active else 0, user_id))
            return cur.rowcount > 0
