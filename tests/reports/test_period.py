from datetime import date, datetime

from src.worktime.worktime.core.enums import PeriodKind
from src.worktime.worktime.reports.period import (
    PeriodSpec,
    filter_entries,
    period_label,
    resolve_bounds,
    select_month,
    select_period,
    shift_period,
)
from src.worktime.worktime.timeentries.model import TimeEntry


def _entry(entry_id, day, user_id="u1", project_id="p1", hours=1.0):
    return TimeEntry(
        entry_id=entry_id,
        user_id=user_id,
        date=day,
        start_time="09:00",
        end_time="10:00",
        hours_worked=hours,
        project_id=project_id,
        description=None,
        created_at=datetime(2024, 1, 1),
    )


ENTRIES = [
    _entry("a", date(2024, 1, 31)),
    _entry("b", date(2024, 2, 1), user_id="u2"),
    _entry("c", date(2024, 2, 29), project_id="p2"),
    _entry("d", date(2024, 2, 29), user_id="u2"),
    _entry("e", date(2024, 3, 1)),
]


def test_month_bounds_handle_leap_year():
    assert resolve_bounds(PeriodSpec.month(date(2024, 2, 10))) == (date(2024, 2, 1), date(2024, 2, 29))


def test_year_bounds():
    assert resolve_bounds(PeriodSpec.year(date(2024, 6, 1))) == (date(2024, 1, 1), date(2024, 12, 31))


def test_custom_bounds_are_literal():
    period = PeriodSpec.custom(date(2024, 1, 31), date(2024, 2, 1))
    assert [e.entry_id for e in select_period(ENTRIES, period)] == ["b", "a"]


def test_incomplete_custom_range_selects_nothing():
    period = PeriodSpec.custom(date(2024, 1, 1), None)
    assert resolve_bounds(period) is None
    assert select_period(ENTRIES, period) == []


def test_month_selection_sorted_newest_first_and_stable():
    ids = [e.entry_id for e in select_period(ENTRIES, PeriodSpec.month(date(2024, 2, 5)))]
    assert ids == ["c", "d", "b"]


def test_user_and_project_filters_compose():
    assert [e.entry_id for e in filter_entries(ENTRIES, user_id="u2")] == ["d", "b"]
    assert [e.entry_id for e in filter_entries(ENTRIES, user_id="all", project_id="p2")] == ["c"]


def test_open_ended_range():
    assert [e.entry_id for e in filter_entries(ENTRIES, start=date(2024, 2, 29))] == ["e", "c", "d"]
    assert [e.entry_id for e in filter_entries(ENTRIES, end=date(2024, 1, 31))] == ["a"]


def test_select_month_key():
    assert [e.entry_id for e in select_month(ENTRIES, "2024-02", user_id="u1")] == ["c"]


def test_parse_falls_back_to_month():
    period = PeriodSpec.parse(None, reference_date=date(2024, 5, 5))
    assert period.kind == PeriodKind.MONTH


def test_shift_period_moves_month_or_year():
    nxt = shift_period(PeriodSpec.month(date(2024, 1, 31)), 1)
    assert nxt.reference_date == date(2024, 2, 29)
    prev = shift_period(PeriodSpec.year(date(2024, 2, 29)), -1)
    assert prev.reference_date == date(2023, 2, 28)


def test_period_labels():
    assert period_label(PeriodSpec.month(date(2024, 12, 3))) == "2024-12"
    assert period_label(PeriodSpec.year(date(2024, 12, 3))) == "2024"
    assert period_label(PeriodSpec.custom(date(2024, 1, 2), date(2024, 3, 4))) == "02.01.2024 - 04.03.2024"
    assert period_label(PeriodSpec.custom(None, None)) == "Vlastní období"


def test_month_filter_excludes_neighbouring_days():
    entries = [
        _entry("nov", date(2024, 11, 30)),
        _entry("first", date(2024, 12, 1)),
        _entry("last", date(2024, 12, 31)),
        _entry("jan", date(2025, 1, 1)),
    ]
    selected = select_period(entries, PeriodSpec.month(date(2024, 12, 15)))
    assert [e.entry_id for e in selected] == ["last", "first"]
