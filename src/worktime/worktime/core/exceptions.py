from __future__ import annotations

from typing import Mapping, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``errors`` maps form field names to messages so callers can render them inline.
    """

    def __init__(self, message: str, *, errors: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.errors = dict(errors or {})


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class PermissionDeniedError(DomainError):
    """Raised when a user lacks permission for an action."""


class DuplicateEmailError(DomainError):
    """Raised when an account with the same email already exists."""


class NotFoundError(DomainError):
    """Raised when an update/delete target does not exist."""


class TransientIOError(DomainError):
    """Raised when the record store is unreachable or fails mid-operation."""
