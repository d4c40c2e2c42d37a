from __future__ import annotations

from typing import Optional, Protocol

from .model import Settings


class SettingsRepository(Protocol):
    def get(self) -> Optional[Settings]:
        """Stored settings, or None when never saved."""
        raise NotImplementedError

    def save(self, settings: Settings) -> Settings:
        raise NotImplementedError
