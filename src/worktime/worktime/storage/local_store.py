from __future__ import annotations

import logging
from typing import Any, Dict, List

from werkzeug.security import generate_password_hash

from ..settings.model import Settings
from .backends import KeyValueBackend
from .seed import DEMO_PROJECTS, DEMO_TIME_ENTRIES, DEMO_USERS

logger = logging.getLogger(__name__)

USERS_KEY = "users"
PROJECTS_KEY = "projects"
TIME_ENTRIES_KEY = "timeEntries"
SETTINGS_KEY = "settings"


def _seed_users() -> List[Dict[str, Any]]:
    out = []
    for u in DEMO_USERS:
        record = {k: v for k, v in u.items() if k != "password"}
        record["passwordHash"] = generate_password_hash(u["password"])
        out.append(record)
    return out


def _seed_settings() -> Dict[str, Any]:
    return Settings().to_dict()


class LocalStore:
    """Offline record store: one JSON-compatible list per collection.

    Collections are seeded with demo records the first time they are read.
    """

    def __init__(self, backend: KeyValueBackend, *, seed: bool = True):
        self._backend = backend
        self._seed = seed

    def _default(self, key: str) -> Any:
        if not self._seed:
            return None if key == SETTINGS_KEY else []
        if key == USERS_KEY:
            return _seed_users()
        if key == PROJECTS_KEY:
            return [dict(p) for p in DEMO_PROJECTS]
        if key == TIME_ENTRIES_KEY:
            return [dict(e) for e in DEMO_TIME_ENTRIES]
        return _seed_settings()

    def read(self, key: str) -> Any:
        value = self._backend.read(key)
        if value is None:
            value = self._default(key)
            if value is not None:
                logger.info("Seeding local store key %s", key)
                self._backend.write(key, value)
        return value

    def read_list(self, key: str) -> List[Dict[str, Any]]:
        return list(self.read(key) or [])

    def write(self, key: str, value: Any) -> None:
        self._backend.write(key, value)
