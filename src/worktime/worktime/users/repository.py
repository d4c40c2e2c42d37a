from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, never on a concrete store.
    """

    def list_all(self) -> Sequence[User]:
        """All users ordered by created_at ascending."""
        raise NotImplementedError

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

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
        """Raises DuplicateEmailError when the email is taken."""
        raise NotImplementedError

    def update_user(self, user_id: str, changes: Mapping[str, Any]) -> Optional[User]:
        """Partial merge; returns None when the user does not exist."""
        raise NotImplementedError

    def set_active(self, user_id: str, *, is_active: bool) -> bool:
        raise NotImplementedError
