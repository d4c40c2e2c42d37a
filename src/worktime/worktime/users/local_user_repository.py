from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..core.enums import Role
from ..core.exceptions import DuplicateEmailError
from ..storage.local_store import USERS_KEY, LocalStore
from ..storage.seed import DEFAULT_ADMIN_ID
from .model import User
from .repository import UserRepository

# domain field -> stored key
_KEY_FOR = {
    "first_name": "firstName",
    "last_name": "lastName",
    "email": "email",
    "password_hash": "passwordHash",
    "role": "role",
    "hourly_rate": "hourlyRate",
    "monthly_deductions": "monthlyDeductions",
    "is_active": "isActive",
}


def _to_user(record: Dict[str, Any]) -> User:
    # The built-in admin can never be locked out of the offline store.
    is_active = bool(record.get("isActive", True)) or record.get("id") == DEFAULT_ADMIN_ID
    return User(
        user_id=str(record["id"]),
        first_name=record.get("firstName", ""),
        last_name=record.get("lastName", ""),
        email=record.get("email", ""),
        password_hash=record.get("passwordHash", ""),
        role=Role(record.get("role", Role.EMPLOYEE.value)),
        hourly_rate=float(record.get("hourlyRate") or 0),
        monthly_deductions=float(record.get("monthlyDeductions") or 0),
        is_active=is_active,
        created_at=datetime.fromisoformat(record["createdAt"]),
    )


def _to_record(user: User) -> Dict[str, Any]:
    return {
        "id": user.user_id,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "email": user.email,
        "passwordHash": user.password_hash,
        "role": user.role.value,
        "hourlyRate": user.hourly_rate,
        "monthlyDeductions": user.monthly_deductions,
        "isActive": user.is_active,
        "createdAt": user.created_at.isoformat(),
    }


class LocalUserRepository(UserRepository):
    def __init__(self, store: LocalStore):
        self._store = store

    def list_all(self) -> Sequence[User]:
        users = [_to_user(r) for r in self._store.read_list(USERS_KEY)]
        return sorted(users, key=lambda u: u.created_at)

    def get_by_id(self, user_id: str) -> Optional[User]:
        for r in self._store.read_list(USERS_KEY):
            if r.get("id") == user_id:
                return _to_user(r)
        return None

    def get_by_email(self, email: str) -> Optional[User]:
        wanted = (email or "").strip().lower()
        for r in self._store.read_list(USERS_KEY):
            if str(r.get("email", "")).lower() == wanted:
                return _to_user(r)
        return None

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
        records = self._store.read_list(USERS_KEY)
        if any(str(r.get("email", "")).lower() == email.lower() for r in records):
            raise DuplicateEmailError("Uživatel s tímto emailem již existuje")

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
        records.append(_to_record(user))
        self._store.write(USERS_KEY, records)
        return user

    def update_user(self, user_id: str, changes: Mapping[str, Any]) -> Optional[User]:
        records = self._store.read_list(USERS_KEY)
        target = next((r for r in records if r.get("id") == user_id), None)
        if target is None:
            return None

        new_email = changes.get("email")
        if new_email and any(
            r.get("id") != user_id and str(r.get("email", "")).lower() == str(new_email).lower() for r in records
        ):
            raise DuplicateEmailError("Uživatel s tímto emailem již existuje")

        for field, value in changes.items():
            key = _KEY_FOR.get(field)
            if key is None:
                continue
            target[key] = value.value if isinstance(value, Role) else value
        self._store.write(USERS_KEY, records)
        return _to_user(target)

    def set_active(self, user_id: str, *, is_active: bool) -> bool:
        return self.update_user(user_id, {"is_active": is_active}) is not None
