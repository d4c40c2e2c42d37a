from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive totals (report rounding)."""
    return int(math.floor(value + 0.5))


