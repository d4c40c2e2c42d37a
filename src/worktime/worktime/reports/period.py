from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Tuple

from ..common.datetime_utils import (
    add_months,
    add_years,
    end_of_month,
    end_of_year,
    format_cz_date,
    month_key,
    start_of_month,
    start_of_year,
)
from ..core.constants import ALL
from ..core.enums import PeriodKind
from ..core.exceptions import ValidationError
from ..timeentries.model import TimeEntry

Bounds = Tuple[date, date]


@dataclass(frozen=True)
class PeriodSpec:
    """A month, a year, or an explicit date range."""

    kind: PeriodKind
    reference_date: Optional[date] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @classmethod
    def month(cls, reference_date: date) -> "PeriodSpec":
        return cls(kind=PeriodKind.MONTH, reference_date=reference_date)

    @classmethod
    def year(cls, reference_date: date) -> "PeriodSpec":
        return cls(kind=PeriodKind.YEAR, reference_date=reference_date)

    @classmethod
    def custom(cls, start_date: Optional[date], end_date: Optional[date]) -> "PeriodSpec":
        return cls(kind=PeriodKind.CUSTOM, start_date=start_date, end_date=end_date)

    @classmethod
    def parse(
        cls,
        kind: Optional[str],
        *,
        reference_date: date,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> "PeriodSpec":
        try:
            k = PeriodKind((kind or PeriodKind.MONTH.value).strip().lower())
        except ValueError:
            raise ValidationError("Neplatný typ období", errors={"filterType": "Neplatný typ období"})
        if k == PeriodKind.CUSTOM:
            return cls.custom(start_date, end_date)
        return cls(kind=k, reference_date=reference_date)


def resolve_bounds(period: PeriodSpec) -> Optional[Bounds]:
    """Inclusive [start, end] of the period; None when a custom bound is missing."""
    if period.kind == PeriodKind.CUSTOM:
        if period.start_date is None or period.end_date is None:
            return None
        return period.start_date, period.end_date

    ref = period.reference_date or date.today()
    if period.kind == PeriodKind.YEAR:
        return start_of_year(ref), end_of_year(ref)
    return start_of_month(ref), end_of_month(ref)


def shift_period(period: PeriodSpec, direction: int) -> PeriodSpec:
    """Move a month/year period back (-1) or forward (+1). Custom ranges stay put."""
    if period.kind == PeriodKind.CUSTOM:
        return period
    ref = period.reference_date or date.today()
    if period.kind == PeriodKind.YEAR:
        return PeriodSpec.year(add_years(ref, direction))
    return PeriodSpec.month(add_months(ref, direction))


def period_label(period: PeriodSpec) -> str:
    if period.kind == PeriodKind.CUSTOM:
        if period.start_date and period.end_date:
            return f"{format_cz_date(period.start_date)} - {format_cz_date(period.end_date)}"
        return "Vlastní období"
    ref = period.reference_date or date.today()
    if period.kind == PeriodKind.YEAR:
        return str(ref.year)
    return month_key(ref)


def sort_newest_first(entries: Iterable[TimeEntry]) -> List[TimeEntry]:
    return sorted(entries, key=lambda e: e.date, reverse=True)


def _matches(value: str, wanted: Optional[str]) -> bool:
    return wanted is None or wanted == ALL or value == wanted


def filter_entries(
    entries: Iterable[TimeEntry],
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
    user_id: Optional[str] = None,
    project_id: Optional[str] = None,
) -> List[TimeEntry]:
    """AND-composed filters; an absent bound leaves that side of the range open."""
    out = [
        e
        for e in entries
        if (start is None or e.date >= start)
        and (end is None or e.date <= end)
        and _matches(e.user_id, user_id)
        and _matches(e.project_id, project_id)
    ]
    return sort_newest_first(out)


def select_period(
    entries: Iterable[TimeEntry],
    period: PeriodSpec,
    *,
    user_id: Optional[str] = None,
    project_id: Optional[str] = None,
) -> List[TimeEntry]:
    bounds = resolve_bounds(period)
    if bounds is None:
        return []
    start, end = bounds
    return filter_entries(entries, start=start, end=end, user_id=user_id, project_id=project_id)


def select_month(
    entries: Iterable[TimeEntry],
    month: str,
    *,
    user_id: Optional[str] = None,
) -> List[TimeEntry]:
    """Entries whose date falls in the ``yyyy-MM`` month."""
    return sort_newest_first(e for e in entries if month_key(e.date) == month and _matches(e.user_id, user_id))
