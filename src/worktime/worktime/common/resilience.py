from __future__ import annotations

import logging
from typing import Callable, List, TypeVar

from ..core.exceptions import TransientIOError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def read_or_empty(load: Callable[[], "list[T] | tuple[T, ...]"], *, what: str) -> List[T]:
    """Run a list-loading call; a store outage degrades to an empty list.

    Only ``TransientIOError`` is absorbed. Every other error propagates.
    """
    try:
        return list(load())
    except TransientIOError as e:
        logger.warning("Could not load %s, showing no records: %s", what, e)
        return []
