from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..storage.local_store import PROJECTS_KEY, LocalStore
from .model import Project
from .repository import ProjectRepository

_KEY_FOR = {"name": "name", "is_active": "isActive"}


def _to_project(record: Dict[str, Any]) -> Project:
    return Project(
        project_id=str(record["id"]),
        name=record.get("name", ""),
        is_active=bool(record.get("isActive", True)),
        created_at=datetime.fromisoformat(record["createdAt"]),
    )


class LocalProjectRepository(ProjectRepository):
    def __init__(self, store: LocalStore):
        self._store = store

    def list_all(self) -> Sequence[Project]:
        return [_to_project(r) for r in self._store.read_list(PROJECTS_KEY)]

    def get_by_id(self, project_id: str) -> Optional[Project]:
        for r in self._store.read_list(PROJECTS_KEY):
            if r.get("id") == project_id:
                return _to_project(r)
        return None

    def create_project(self, *, name: str, is_active: bool = True) -> Project:
        records = self._store.read_list(PROJECTS_KEY)
        project = Project(project_id=new_id("proj"), name=name, is_active=is_active, created_at=now_local())
        records.append(
            {
                "id": project.project_id,
                "name": project.name,
                "isActive": project.is_active,
                "createdAt": project.created_at.isoformat(),
            }
        )
        self._store.write(PROJECTS_KEY, records)
        return project

    def update_project(self, project_id: str, changes: Mapping[str, Any]) -> Optional[Project]:
        records = self._store.read_list(PROJECTS_KEY)
        target = next((r for r in records if r.get("id") == project_id), None)
        if target is None:
            return None
        for field, value in changes.items():
            if field in _KEY_FOR:
                target[_KEY_FOR[field]] = value
        self._store.write(PROJECTS_KEY, records)
        return _to_project(target)

    def set_active(self, project_id: str, *, is_active: bool) -> bool:
        return self.update_project(project_id, {"is_active": is_active}) is not None
