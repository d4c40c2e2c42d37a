from __future__ import annotations

from datetime import datetime

from ..core.exceptions import ValidationError

MINUTES_PER_DAY = 24 * 60


def parse_clock(value: str) -> int:
    """Minutes since midnight for an ``HH:MM`` string."""
    v = (value or "").strip()
    try:
        t = datetime.strptime(v, "%H:%M").time()
    except ValueError:
        raise ValidationError("Čas není platný (HH:MM)", errors={"time": "Čas není platný (HH:MM)"})
    return t.hour * 60 + t.minute


def hours_between(start_time: str, end_time: str) -> float:
    """Decimal hours from start to end, rounded to 2 places.

    An end time before the start time crosses midnight. No upper clamp here;
    the 24 hour cap is enforced by entry validation.
    """
    start = parse_clock(start_time)
    end = parse_clock(end_time)
    if end < start:
        end += MINUTES_PER_DAY
    return max(round((end - start) / 60, 2), 0.0)
