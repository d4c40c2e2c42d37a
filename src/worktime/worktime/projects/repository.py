from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Project


class ProjectRepository(Protocol):
    def list_all(self) -> Sequence[Project]:
        raise NotImplementedError

    def get_by_id(self, project_id: str) -> Optional[Project]:
        raise NotImplementedError

    def create_project(self, *, name: str, is_active: bool = True) -> Project:
        raise NotImplementedError

    def update_project(self, project_id: str, changes: Mapping[str, Any]) -> Optional[Project]:
        raise NotImplementedError

    def set_active(self, project_id: str, *, is_active: bool) -> bool:
        """Archive (False) or restore (True) a project."""
        raise NotImplementedError
