from __future__ import annotations

from typing import Protocol

from ..core.enums import DeletionPolicy


class RemovableRepository(Protocol):
    def set_active(self, record_id: str, *, is_active: bool) -> bool:
        raise NotImplementedError

    def delete_by_id(self, record_id: str) -> bool:
        raise NotImplementedError


def remove_record(repo: RemovableRepository, policy: DeletionPolicy, record_id: str) -> bool:
    """Remove a record the way its entity allows.

    Soft-deleted rows stay referenced by time entries, so they are only deactivated.
    """
    if policy == DeletionPolicy.SOFT_DELETE:
        return repo.set_active(record_id, is_active=False)
    return repo.delete_by_id(record_id)
