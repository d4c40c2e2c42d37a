from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.deletion import remove_record
from ..common.resilience import read_or_empty
from ..common.validators import (
    as_text,
    collect_errors,
    require_email,
    require_min_length,
    require_non_empty,
    require_non_negative,
    require_number,
)
from ..core.constants import DEFAULT_HOURLY_RATE, DEFAULT_MONTHLY_DEDUCTIONS, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Neplatné přihlašovací údaje"


def _require_password(password: Optional[str], *, field: str = "password") -> str:
    require_non_empty(password, "Heslo", field=field)
    return require_min_length(password, "Heslo", MIN_PASSWORD_LENGTH, field=field)


def _require_positive_rate(value: Any) -> float:
    rate = require_number(value, "Hodinová sazba", field="hourlyRate")
    if rate <= 0:
        raise ValidationError(
            "Hodinová sazba musí být větší než 0", errors={"hourlyRate": "Hodinová sazba musí být větší než 0"}
        )
    return rate


def _require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise PermissionDeniedError("Nemáte oprávnění")


class AuthService:
    """Use case: sign in, self-registration and session lookup."""

    def __init__(self, users: UserRepository):
        self._users = users

    def login(self, email: str, password: str) -> User:
        def check_email() -> None:
            value = require_non_empty(email, "Email", field="email")
            if "@" not in value:
                raise ValidationError("Neplatný email", errors={"email": "Neplatný email"})

        collect_errors(check_email, lambda: require_non_empty(password, "Heslo", field="password"))

        user = self._users.get_by_email(as_text(email))
        if not user or not user.is_active:
            raise AuthenticationError(INVALID_CREDENTIALS)

        try:
            ok = check_password_hash(user.password_hash, str(password))
        except ValueError:
            # unknown hash method stored for this account
            ok = False
        if not ok:
            raise AuthenticationError(INVALID_CREDENTIALS)

        logger.info("User %s signed in", user.user_id)
        return user

    def register(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        password_confirm: str,
    ) -> User:
        """New accounts are always employees with the default rate and deductions."""

        def check_confirm() -> None:
            if password != password_confirm:
                raise ValidationError("Hesla se neshodují", errors={"confirmPassword": "Hesla se neshodují"})

        collect_errors(
            lambda: require_non_empty(first_name, "Jméno", field="firstName"),
            lambda: require_non_empty(last_name, "Příjmení", field="lastName"),
            lambda: require_email(email),
            lambda: _require_password(password),
            check_confirm,
        )

        user = self._users.create_user(
            first_name=as_text(first_name),
            last_name=as_text(last_name),
            email=as_text(email),
            password_hash=generate_password_hash(str(password)),
            role=Role.EMPLOYEE,
            hourly_rate=DEFAULT_HOURLY_RATE,
            monthly_deductions=DEFAULT_MONTHLY_DEDUCTIONS,
        )
        logger.info("Registered user %s", user.user_id)
        return user

    def current_user(self, user_id: Optional[str]) -> Optional[User]:
        """The signed-in user, or None when unknown or deactivated."""
        if not user_id:
            return None
        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            return None
        return user


class UserService:
    """Use case: manage employees (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> List[User]:
        return read_or_empty(self._users.list_all, what="users")

    def list_active_employees(self) -> List[User]:
        return [u for u in self.list_users() if u.role == Role.EMPLOYEE and u.is_active]

    def create_employee(
        self,
        *,
        current_role: Role,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        hourly_rate: Any,
        monthly_deductions: Any,
        role: Any = Role.EMPLOYEE,
    ) -> List[User]:
        _require_admin(current_role)
        collect_errors(
            lambda: _parse_role(role),
            lambda: require_non_empty(first_name, "Jméno", field="firstName"),
            lambda: require_non_empty(last_name, "Příjmení", field="lastName"),
            lambda: require_email(email),
            lambda: _require_password(password),
            lambda: _require_positive_rate(hourly_rate),
            lambda: require_non_negative(monthly_deductions, "Měsíční srážky", field="monthlyDeductions"),
        )

        self._users.create_user(
            first_name=as_text(first_name),
            last_name=as_text(last_name),
            email=as_text(email),
            password_hash=generate_password_hash(str(password)),
            role=_parse_role(role),
            hourly_rate=float(hourly_rate),
            monthly_deductions=float(monthly_deductions),
        )
        return self.list_users()

    def update_employee(self, *, current_role: Role, user_id: str, changes: Mapping[str, Any]) -> List[User]:
        """Partial update. A blank password keeps the current one."""
        _require_admin(current_role)
        if not self._users.get_by_id(user_id):
            raise NotFoundError("Zaměstnanec nenalezen")

        clean: dict = {}
        errors: dict = {}
        for field, value in changes.items():
            rule = _UPDATE_RULES.get(field)
            if rule is None or (field == "password" and not value):
                continue
            target, validate = rule
            try:
                clean[target] = validate(value)
            except ValidationError as e:
                errors.update(e.errors)
        if errors:
            raise ValidationError(next(iter(errors.values())), errors=errors)

        self._users.update_user(user_id, clean)
        return self.list_users()

    def deactivate_employee(self, *, current_role: Role, current_user_id: str, user_id: str) -> List[User]:
        _require_admin(current_role)
        if user_id == current_user_id:
            raise ValidationError("Nelze deaktivovat vlastní účet")
        if not remove_record(self._users, User.DELETION_POLICY, user_id):
            raise NotFoundError("Zaměstnanec nenalezen")
        return self.list_users()

    def toggle_active(self, *, current_role: Role, current_user_id: str, user_id: str) -> List[User]:
        _require_admin(current_role)
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Zaměstnanec nenalezen")
        if user_id == current_user_id and user.is_active:
            raise ValidationError("Nelze deaktivovat vlastní účet")
        self._users.set_active(user_id, is_active=not user.is_active)
        return self.list_users()


def _parse_role(value: Any) -> Role:
    try:
        return value if isinstance(value, Role) else Role(str(value))
    except ValueError:
        raise ValidationError("Neplatná role", errors={"role": "Neplatná role"})


# field -> (stored field, validator)
_UPDATE_RULES = {
    "first_name": ("first_name", lambda v: require_non_empty(v, "Jméno", field="firstName")),
    "last_name": ("last_name", lambda v: require_non_empty(v, "Příjmení", field="lastName")),
    "email": ("email", require_email),
    "password": ("password_hash", lambda v: generate_password_hash(_require_password(v))),
    "hourly_rate": ("hourly_rate", _require_positive_rate),
    "monthly_deductions": (
        "monthly_deductions",
        lambda v: require_non_negative(v, "Měsíční srážky", field="monthlyDeductions"),
    ),
    "role": ("role", _parse_role),
    "is_active": ("is_active", bool),
}
