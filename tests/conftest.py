from __future__ import annotations

from datetime import date
from typing import Any, Optional

import pytest

from src.worktime.worktime.container import Container, build_local_container
from src.worktime.worktime.core.exceptions import TransientIOError
from src.worktime.worktime.storage.backends import InMemoryBackend

TODAY = date(2024, 12, 15)


class FlakyBackend(InMemoryBackend):
    """In-memory backend that can be switched to fail like an unreachable store."""

    def __init__(self):
        super().__init__()
        self.fail_reads = False
        self.fail_writes = False

    def read(self, key: str) -> Optional[Any]:
        if self.fail_reads:
            raise TransientIOError("store offline")
        return super().read(key)

    def write(self, key: str, value: Any) -> None:
        if self.fail_writes:
            raise TransientIOError("store offline")
        super().write(key, value)


@pytest.fixture
def backend() -> FlakyBackend:
    return FlakyBackend()


@pytest.fixture
def container(backend) -> Container:
    c = build_local_container(backend)
    # touch every collection so the demo data is stored before a test breaks the backend
    c.users_repo.list_all()
    c.projects_repo.list_all()
    c.entries_repo.list_all()
    c.settings_repo.get()
    return c


@pytest.fixture
def admin(container):
    return container.users_repo.get_by_id("admin-1")


@pytest.fixture
def jan(container):
    return container.users_repo.get_by_id("emp-1")


@pytest.fixture
def marie(container):
    return container.users_repo.get_by_id("emp-2")


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.worktime.worktime.main import create_app

    flask_app = create_app(container)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, email: str, password: str):
    return client.post("/api/auth/login", json={"email": email, "password": password})
