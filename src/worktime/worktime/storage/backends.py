"""Key-value backends for the local record store."""
from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from ..core.exceptions import TransientIOError

logger = logging.getLogger(__name__)


class KeyValueBackend(Protocol):
    def read(self, key: str) -> Optional[Any]:
        """Stored value, or None when the key was never written."""
        raise NotImplementedError

    def write(self, key: str, value: Any) -> None:
        raise NotImplementedError


class InMemoryBackend(KeyValueBackend):
    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial or {})

    def read(self, key: str) -> Optional[Any]:
        return copy.deepcopy(self._data.get(key))

    def write(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)


class JsonFileBackend(KeyValueBackend):
    """All keys live in one JSON document on disk; every write rewrites it."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            raise TransientIOError(f"Cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise TransientIOError(f"Unexpected content in {self._path}")
        return data

    def read(self, key: str) -> Optional[Any]:
        return self._load().get(key)

    def write(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=str(self._path.parent), suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path)
        except OSError as e:
            raise TransientIOError(f"Cannot write {self._path}: {e}") from e
        logger.debug("Wrote key %s to %s", key, self._path)
