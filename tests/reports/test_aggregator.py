from datetime import date, datetime

import pytest

from src.worktime.worktime.core.enums import Role
from src.worktime.worktime.payroll.calculator.base_rate_calculator import BaseRateCalculator
from src.worktime.worktime.payroll.calculator.employer_calculator import EmployerCostCalculator
from src.worktime.worktime.projects.model import Project
from src.worktime.worktime.reports.aggregator import (
    employee_breakdown,
    monthly_breakdown,
    project_breakdown,
    summarize,
)
from src.worktime.worktime.timeentries.model import TimeEntry
from src.worktime.worktime.users.model import User


def _user(user_id, rate, role=Role.EMPLOYEE, first="A"):
    return User(
        user_id=user_id,
        first_name=first,
        last_name="B",
        email=f"{user_id}@x.cz",
        password_hash="x",
        role=role,
        hourly_rate=rate,
        monthly_deductions=0,
        is_active=True,
        created_at=datetime(2024, 1, 1),
    )


def _entry(entry_id, user_id, hours, day=date(2024, 12, 1), project_id="p1"):
    return TimeEntry(
        entry_id=entry_id,
        user_id=user_id,
        date=day,
        start_time="08:00",
        end_time="16:00",
        hours_worked=hours,
        project_id=project_id,
        description=None,
        created_at=datetime(2024, 12, 1),
    )


USERS = [_user("u1", 100, first="Eva"), _user("u2", 200, first="Petr"), _user("adm", 0, role=Role.ADMIN)]


def test_summary_of_empty_input():
    s = summarize([], USERS, EmployerCostCalculator())
    assert s.total_hours == 0
    assert s.total_cost == 0
    assert s.entry_count == 0
    assert s.average_hours_per_entry == 0


def test_summary_totals_and_distinct_counts():
    entries = [_entry("1", "u1", 2), _entry("2", "u1", 3, project_id="p2"), _entry("3", "u2", 1)]
    s = summarize(entries, USERS, BaseRateCalculator())
    assert s.total_hours == 6
    assert s.total_cost == pytest.approx(2 * 100 + 3 * 100 + 1 * 200)
    assert s.unique_employees == 2
    assert s.unique_projects == 2
    assert s.average_hours_per_entry == pytest.approx(2)


def test_unknown_user_adds_hours_but_no_cost():
    s = summarize([_entry("1", "ghost", 5)], USERS, BaseRateCalculator())
    assert s.total_hours == 5
    assert s.total_cost == 0


def test_monthly_breakdown_labels_and_rounding():
    entries = [_entry("1", "u1", 1.5, day=date(2024, 11, 3)), _entry("2", "u2", 1, day=date(2024, 12, 2))]
    rows = monthly_breakdown(entries, USERS, EmployerCostCalculator(), today=date(2024, 12, 15), months=3)
    assert [r.month for r in rows] == ["Oct 2024", "Nov 2024", "Dec 2024"]
    assert rows[0].entries == 0
    assert rows[1].cost == 201  # 150 * 1.338 = 200.7
    assert rows[2].hours == 1


def test_employee_breakdown_skips_admins_and_sorts_by_cost():
    entries = [_entry("1", "u1", 10), _entry("2", "u2", 1)]
    rows = employee_breakdown(entries, USERS, BaseRateCalculator())
    assert [r.first_name for r in rows] == ["Eva", "Petr"]
    assert rows[0].cost == 1000


def test_project_breakdown_names_unknown_projects():
    projects = [Project(project_id="p1", name="Web", is_active=True, created_at=datetime(2024, 1, 1))]
    entries = [_entry("1", "u1", 1), _entry("2", "u2", 4, project_id="gone"), _entry("3", "ghost", 9)]
    rows = project_breakdown(entries, USERS, projects, BaseRateCalculator(), unknown_name="?")
    assert [(r.name, r.hours, r.entries) for r in rows] == [("?", 4, 1), ("Web", 1, 1)]
