from __future__ import annotations

from typing import List

from ..common.deletion import remove_record
from ..common.resilience import read_or_empty
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PROJECT_NAME_LENGTH
from ..core.enums import Role
from ..core.exceptions import NotFoundError, PermissionDeniedError
from .model import Project
from .repository import ProjectRepository


def _clean_name(name: str) -> str:
    value = require_non_empty(name, "Název projektu", field="name")
    return require_min_length(value, "Název projektu", MIN_PROJECT_NAME_LENGTH, field="name")


class ProjectService:
    """Use case: maintain the project list. Projects are archived, never deleted."""

    def __init__(self, projects: ProjectRepository):
        self._projects = projects

    def list_projects(self) -> List[Project]:
        return read_or_empty(self._projects.list_all, what="projects")

    def list_active(self) -> List[Project]:
        return [p for p in self.list_projects() if p.is_active]

    def list_archived(self) -> List[Project]:
        return [p for p in self.list_projects() if not p.is_active]

    def create_project(self, *, current_role: Role, name: str) -> List[Project]:
        _require_admin(current_role)
        self._projects.create_project(name=_clean_name(name), is_active=True)
        return self.list_projects()

    def rename_project(self, *, current_role: Role, project_id: str, name: str) -> List[Project]:
        _require_admin(current_role)
        clean = _clean_name(name)
        if self._projects.update_project(project_id, {"name": clean}) is None:
            raise NotFoundError("Projekt nenalezen")
        return self.list_projects()

    def set_status(self, *, current_role: Role, project_id: str, is_active: bool) -> List[Project]:
        _require_admin(current_role)
        if not self._projects.set_active(project_id, is_active=bool(is_active)):
            raise NotFoundError("Projekt nenalezen")
        return self.list_projects()

    def archive_project(self, *, current_role: Role, project_id: str) -> List[Project]:
        _require_admin(current_role)
        if not remove_record(self._projects, Project.DELETION_POLICY, project_id):
            raise NotFoundError("Projekt nenalezen")
        return self.list_projects()


def _require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise PermissionDeniedError("Nemáte oprávnění")
