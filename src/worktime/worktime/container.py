from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .projects.local_project_repository import LocalProjectRepository
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.repository import ProjectRepository
from .projects.service import ProjectService
from .reports.service import ReportService
from .settings.local_settings_repository import LocalSettingsRepository
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService
from .storage.backends import InMemoryBackend, JsonFileBackend, KeyValueBackend
from .storage.local_store import LocalStore
from .timeentries.local_time_entry_repository import LocalTimeEntryRepository
from .timeentries.mysql_time_entry_repository import MySQLTimeEntryRepository
from .timeentries.repository import TimeEntryRepository
from .timeentries.service import TimeEntryService
from .users.local_user_repository import LocalUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService

MYSQL = "mysql"
LOCAL = "local"


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    projects_repo: ProjectRepository
    entries_repo: TimeEntryRepository
    settings_repo: SettingsRepository

    auth_service: AuthService
    user_service: UserService
    project_service: ProjectService
    time_entry_service: TimeEntryService
    settings_service: SettingsService
    dashboard_service: DashboardService
    report_service: ReportService


def _wire(
    users_repo: UserRepository,
    projects_repo: ProjectRepository,
    entries_repo: TimeEntryRepository,
    settings_repo: SettingsRepository,
) -> Container:
    settings_service = SettingsService(settings_repo)
    return Container(
        users_repo=users_repo,
        projects_repo=projects_repo,
        entries_repo=entries_repo,
        settings_repo=settings_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        project_service=ProjectService(projects_repo),
        time_entry_service=TimeEntryService(entries_repo),
        settings_service=settings_service,
        dashboard_service=DashboardService(entries_repo, users_repo, settings_service),
        report_service=ReportService(entries_repo, users_repo, projects_repo, settings_service),
    )


def build_local_container(backend: KeyValueBackend, *, seed: bool = True) -> Container:
    store = LocalStore(backend, seed=seed)
    return _wire(
        LocalUserRepository(store),
        LocalProjectRepository(store),
        LocalTimeEntryRepository(store),
        LocalSettingsRepository(store),
    )


def build_mysql_container(db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return _wire(
        MySQLUserRepository(conn),
        MySQLProjectRepository(conn),
        MySQLTimeEntryRepository(conn),
        MySQLSettingsRepository(conn),
    )


def build_container(
    *,
    storage_backend: str = MYSQL,
    db_config: Optional[dict] = None,
    local_store_path: Optional[str | Path] = None,
) -> Container:
    """Remote MySQL store, or the local store (JSON file, in memory without a path)."""
    if storage_backend == LOCAL:
        backend = JsonFileBackend(local_store_path) if local_store_path else InMemoryBackend()
        return build_local_container(backend)
    if storage_backend != MYSQL:
        raise ValueError(f"Unknown STORAGE_BACKEND: {storage_backend}")
    return build_mysql_container(db_config or {})
