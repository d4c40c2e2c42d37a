from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Optional, Union

from ..core.exceptions import ValidationError

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_optional_date(value: Optional[str], field_name: str = "date") -> Optional[date]:
    v = (value or "").strip()
    if not v:
        return None
    try:
        return parse_iso_date(v)
    except ValueError:
        raise ValidationError("Neplatné datum (YYYY-MM-DD)", errors={field_name: "Neplatné datum"})


def as_date(value: Union[date, datetime, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(str(value)[:10])


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_key(value: date) -> str:
    return value.strftime("%Y-%m")


def parse_month_key(value: str) -> date:
    """Parse YYYY-MM into the first day of that month."""
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError:
        raise ValidationError("Neplatný měsíc (YYYY-MM)", errors={"month": "Neplatný měsíc"})


def start_of_month(value: date) -> date:
    return value.replace(day=1)


def end_of_month(value: date) -> date:
    return value.replace(day=calendar.monthrange(value.year, value.month)[1])


def start_of_year(value: date) -> date:
    return date(value.year, 1, 1)


def end_of_year(value: date) -> date:
    return date(value.year, 12, 31)


def start_of_week(value: date) -> date:
    # weeks start on Monday
    return value - timedelta(days=value.weekday())


def end_of_week(value: date) -> date:
    return start_of_week(value) + timedelta(days=6)


def add_months(value: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length."""
    index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(index, 12)
    last_day = calendar.monthrange(year, month + 1)[1]
    return date(year, month + 1, min(value.day, last_day))


def add_years(value: date, years: int) -> date:
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        # 29 Feb -> 28 Feb
        return value.replace(year=value.year + years, day=28)


def format_cz_date(value: date) -> str:
    return value.strftime("%d.%m.%Y")


def format_month_label(value: date) -> str:
    """English 'MMM yyyy' label, independent of the process locale."""
    return f"{MONTH_ABBR[value.month - 1]} {value.year}"
