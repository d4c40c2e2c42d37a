from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..common.datetime_utils import add_months, end_of_month, format_month_label, start_of_month
from ..common.numbers import round_half_up
from ..core.enums import Role
from ..payroll.calculator.base import PayrollCalculator
from ..projects.model import Project
from ..timeentries.model import TimeEntry
from ..users.model import User
from .period import filter_entries


@dataclass(frozen=True)
class EntrySummary:
    total_hours: float
    total_cost: float
    unique_employees: int
    unique_projects: int
    entry_count: int

    @property
    def average_hours_per_entry(self) -> float:
        if self.entry_count == 0:
            return 0.0
        return self.total_hours / self.entry_count

    def to_dict(self) -> dict:
        return {
            "totalHours": self.total_hours,
            "totalCost": self.total_cost,
            "uniqueEmployees": self.unique_employees,
            "uniqueProjects": self.unique_projects,
            "entryCount": self.entry_count,
            "averageHoursPerEntry": self.average_hours_per_entry,
        }


def index_by_id(users: Iterable[User]) -> Dict[str, User]:
    return {u.user_id: u for u in users}


def entry_cost(entry: TimeEntry, users: Mapping[str, User], calculator: PayrollCalculator) -> float:
    user = users.get(entry.user_id)
    if not user:
        return 0.0
    return calculator.cost(entry.hours_worked, user.hourly_rate)


def summarize(
    entries: Sequence[TimeEntry],
    users: Iterable[User],
    calculator: PayrollCalculator,
) -> EntrySummary:
    by_id = index_by_id(users)
    total_hours = 0.0
    total_cost = 0.0
    for e in entries:
        total_hours += e.hours_worked
        total_cost += entry_cost(e, by_id, calculator)

    return EntrySummary(
        total_hours=total_hours,
        total_cost=total_cost,
        unique_employees=len({e.user_id for e in entries}),
        unique_projects=len({e.project_id for e in entries}),
        entry_count=len(entries),
    )


@dataclass(frozen=True)
class MonthRow:
    month: str
    hours: float
    cost: int
    entries: int


@dataclass(frozen=True)
class EmployeeRow:
    first_name: str
    last_name: str
    hours: float
    cost: int
    hourly_rate: float
    entries: int


@dataclass(frozen=True)
class ProjectRow:
    name: str
    hours: float
    cost: int
    entries: int


def monthly_breakdown(
    entries: Sequence[TimeEntry],
    users: Iterable[User],
    calculator: PayrollCalculator,
    *,
    today: date,
    months: int,
) -> List[MonthRow]:
    """One row per calendar month, oldest first, ending with today's month."""
    by_id = index_by_id(users)
    rows: List[MonthRow] = []
    for offset in range(months - 1, -1, -1):
        month = start_of_month(add_months(today, -offset))
        month_entries = filter_entries(entries, start=month, end=end_of_month(month))
        cost = sum(entry_cost(e, by_id, calculator) for e in month_entries)
        rows.append(
            MonthRow(
                month=format_month_label(month),
                hours=sum(e.hours_worked for e in month_entries),
                cost=round_half_up(cost),
                entries=len(month_entries),
            )
        )
    return rows


def employee_breakdown(
    entries: Sequence[TimeEntry],
    users: Iterable[User],
    calculator: PayrollCalculator,
) -> List[EmployeeRow]:
    rows: List[EmployeeRow] = []
    for employee in users:
        if employee.role != Role.EMPLOYEE:
            continue
        own = [e for e in entries if e.user_id == employee.user_id]
        hours = sum(e.hours_worked for e in own)
        rows.append(
            EmployeeRow(
                first_name=employee.first_name,
                last_name=employee.last_name,
                hours=hours,
                cost=round_half_up(calculator.cost(hours, employee.hourly_rate)),
                hourly_rate=employee.hourly_rate,
                entries=len(own),
            )
        )
    rows.sort(key=lambda r: r.cost, reverse=True)
    return rows


def project_breakdown(
    entries: Sequence[TimeEntry],
    users: Iterable[User],
    projects: Iterable[Project],
    calculator: PayrollCalculator,
    *,
    unknown_name: str,
) -> List[ProjectRow]:
    by_id = index_by_id(users)
    names = {p.project_id: p.name for p in projects}
    totals: Dict[str, Dict[str, float]] = {}
    for e in entries:
        if e.user_id not in by_id:
            continue
        t = totals.setdefault(e.project_id, {"hours": 0.0, "cost": 0.0, "entries": 0})
        t["hours"] += e.hours_worked
        t["cost"] += entry_cost(e, by_id, calculator)
        t["entries"] += 1

    rows = [
        ProjectRow(
            name=names.get(project_id, unknown_name),
            hours=t["hours"],
            cost=round_half_up(t["cost"]),
            entries=int(t["entries"]),
        )
        for project_id, t in totals.items()
    ]
    rows.sort(key=lambda r: r.cost, reverse=True)
    return rows


def find_user(users: Iterable[User], user_id: Optional[str]) -> Optional[User]:
    if not user_id:
        return None
    return index_by_id(users).get(user_id)
