from __future__ import annotations

import uuid


def new_id(prefix: str) -> str:
    """String key like ``emp-3f2a9c0d1b7e``."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"
