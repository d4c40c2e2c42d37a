from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Optional

from ..common.datetime_utils import format_cz_date, now_local, parse_month_key
from ..common.numbers import round_half_up
from ..common.resilience import read_or_empty
from ..core.constants import (
    ALL,
    COMPANY_REPORT_MONTHS,
    DEFAULT_COMPANY_REPORT_PERIOD,
    UNKNOWN_EMPLOYEE,
    UNKNOWN_PROJECT,
)
from ..core.enums import Role
from ..core.exceptions import PermissionDeniedError, ValidationError
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.base_rate_calculator import BaseRateCalculator
from ..payroll.calculator.employer_calculator import EmployerCostCalculator
from ..payroll.salary import EmployerContributions, employer_contributions
from ..projects.model import Project
from ..projects.repository import ProjectRepository
from ..settings.service import SettingsService
from ..timeentries.model import TimeEntry
from ..timeentries.repository import TimeEntryRepository
from ..users.model import User
from ..users.repository import UserRepository
from .aggregator import (
    EmployeeRow,
    EntrySummary,
    MonthRow,
    ProjectRow,
    employee_breakdown,
    entry_cost,
    index_by_id,
    monthly_breakdown,
    project_breakdown,
    summarize,
)
from .csv_export import (
    CsvDownload,
    company_report_filename,
    export_csv,
    format_number,
    history_filename,
    report_filename,
    timesheet_filename,
)
from .period import filter_entries, select_month


@dataclass(frozen=True)
class ReportLine:
    """A time entry joined with its employee and project."""

    entry: TimeEntry
    employee_name: str
    email: str
    project_name: str
    hourly_rate: float
    cost: float
    has_employee: bool = True

    def to_dict(self) -> dict:
        d = self.entry.to_dict()
        d.update(
            {
                "employeeName": self.employee_name,
                "email": self.email,
                "projectName": self.project_name,
                "hourlyRate": self.hourly_rate,
                "cost": self.cost,
            }
        )
        return d


@dataclass(frozen=True)
class EntryReport:
    lines: List[ReportLine]
    summary: EntrySummary
    contributions: Optional[EmployerContributions] = None

    def to_dict(self) -> dict:
        out = {
            "entries": [line.to_dict() for line in self.lines],
            "summary": self.summary.to_dict(),
        }
        if self.contributions is not None:
            c = self.contributions
            out["contributions"] = {
                "socialRate": c.social_rate,
                "socialAmount": c.social_amount,
                "healthRate": c.health_rate,
                "healthAmount": c.health_amount,
                "totalRate": c.total_rate,
                "totalAmount": c.total_amount,
                "fixedAmount": c.fixed_amount,
            }
        return out


@dataclass(frozen=True)
class CompanyReport:
    period: str
    currency: str
    total_hours: float
    total_cost: int
    total_entries: int
    active_projects: int
    months: List[MonthRow] = field(default_factory=list)
    employees: List[EmployeeRow] = field(default_factory=list)
    projects: List[ProjectRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "period": self.period,
            "currency": self.currency,
            "totalHours": self.total_hours,
            "totalCost": self.total_cost,
            "totalEntries": self.total_entries,
            "activeProjects": self.active_projects,
            "months": [
                {"month": m.month, "hours": m.hours, "cost": m.cost, "entries": m.entries} for m in self.months
            ],
            "employees": [
                {
                    "firstName": e.first_name,
                    "lastName": e.last_name,
                    "hours": e.hours,
                    "cost": e.cost,
                    "hourlyRate": e.hourly_rate,
                    "entries": e.entries,
                }
                for e in self.employees
            ],
            "projects": [
                {"name": p.name, "hours": p.hours, "cost": p.cost, "entries": p.entries} for p in self.projects
            ],
        }


class ReportService:
    """Admin reports, time history, timesheet and company report, with CSV exports.

    Admin and company reports price hours with employer contributions on top;
    history and timesheet use the plain hourly rate.
    """

    def __init__(
        self,
        entries: TimeEntryRepository,
        users: UserRepository,
        projects: ProjectRepository,
        settings: SettingsService,
        *,
        employer_calculator: Optional[PayrollCalculator] = None,
        base_calculator: Optional[PayrollCalculator] = None,
        clock: Callable = now_local,
    ):
        self._entries = entries
        self._users = users
        self._projects = projects
        self._settings = settings
        self._employer = employer_calculator or EmployerCostCalculator()
        self._base = base_calculator or BaseRateCalculator()
        self._clock = clock

    def _load(self):
        entries = read_or_empty(self._entries.list_all, what="time entries")
        users = read_or_empty(self._users.list_all, what="users")
        projects = read_or_empty(self._projects.list_all, what="projects")
        return entries, users, projects

    def _lines(
        self,
        entries: List[TimeEntry],
        users: List[User],
        projects: List[Project],
        calculator: PayrollCalculator,
    ) -> List[ReportLine]:
        by_id = index_by_id(users)
        names: Dict[str, str] = {p.project_id: p.name for p in projects}
        lines = []
        for e in entries:
            user = by_id.get(e.user_id)
            lines.append(
                ReportLine(
                    entry=e,
                    employee_name=user.full_name if user else UNKNOWN_EMPLOYEE,
                    email=user.email if user else "",
                    project_name=names.get(e.project_id, UNKNOWN_PROJECT),
                    hourly_rate=user.hourly_rate if user else 0,
                    cost=entry_cost(e, by_id, calculator),
                    has_employee=user is not None,
                )
            )
        return lines

    # -- admin report ---------------------------------------------------------

    def admin_report(
        self,
        *,
        current_role: Role,
        employee_id: Optional[str] = ALL,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> EntryReport:
        """Entries filtered by employee and an open-ended date range, newest first."""
        _require_admin(current_role)
        entries, users, projects = self._load()
        selected = filter_entries(entries, start=start_date, end=end_date, user_id=employee_id or ALL)
        summary = summarize(selected, users, self._employer)
        return EntryReport(
            lines=self._lines(selected, users, projects, self._employer),
            summary=summary,
            contributions=employer_contributions(summary.total_cost, self._settings.get()),
        )

    def admin_report_csv(
        self,
        *,
        current_role: Role,
        employee_id: Optional[str] = ALL,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Optional[CsvDownload]:
        report = self.admin_report(
            current_role=current_role, employee_id=employee_id, start_date=start_date, end_date=end_date
        )
        records = [
            {
                "Datum": format_cz_date(line.entry.date),
                "Zaměstnanec": line.employee_name,
                "Email": line.email,
                "Projekt": line.project_name,
                "Hodiny": line.entry.hours_worked,
                "Hodinová sazba": line.hourly_rate,
                "Celková cena": line.cost,
                "Popis": line.entry.description or "",
            }
            for line in report.lines
        ]
        return export_csv(records, report_filename(start_date, end_date))

    # -- time history and timesheet -------------------------------------------

    def _month_entries(self, *, actor: User, month: str, employee_id: Optional[str], entries: List[TimeEntry]):
        parse_month_key(month)
        if actor.is_admin:
            return select_month(entries, month, user_id=employee_id or ALL)
        return select_month(entries, month, user_id=actor.user_id)

    def time_history(self, *, actor: User, month: str, employee_id: Optional[str] = ALL) -> EntryReport:
        """One month of entries. Employees only ever see their own."""
        entries, users, projects = self._load()
        selected = self._month_entries(actor=actor, month=month, employee_id=employee_id, entries=entries)
        return EntryReport(
            lines=self._lines(selected, users, projects, self._base),
            summary=summarize(selected, users, self._base),
        )

    def time_history_csv(self, *, actor: User, month: str, employee_id: Optional[str] = ALL) -> Optional[CsvDownload]:
        report = self.time_history(actor=actor, month=month, employee_id=employee_id)
        records = [
            {
                "Datum": format_cz_date(line.entry.date),
                "Zaměstnanec": line.employee_name,
                "Email": line.email,
                "Projekt": line.project_name,
                "Začátek": line.entry.start_time,
                "Konec": line.entry.end_time,
                "Hodiny": line.entry.hours_worked,
                "Hodinová sazba": line.hourly_rate,
                "Celková cena": line.cost,
                "Popis": line.entry.description or "",
            }
            for line in report.lines
        ]

        first_name = None
        if actor.is_admin and employee_id and employee_id != ALL:
            selected = index_by_id(read_or_empty(self._users.list_all, what="users")).get(employee_id)
            first_name = selected.first_name if selected else "employee"
        return export_csv(records, history_filename(month, first_name))

    def timesheet_csv(self, *, actor: User, month: str, employee_id: Optional[str] = ALL) -> Optional[CsvDownload]:
        report = self.time_history(actor=actor, month=month, employee_id=employee_id)
        records = [
            {
                "Date": line.entry.date.isoformat(),
                "Employee": line.employee_name if line.has_employee else "Unknown",
                "Start Time": line.entry.start_time,
                "End Time": line.entry.end_time,
                "Hours Worked": line.entry.hours_worked,
                "Project": line.project_name,
                "Description": line.entry.description or "",
                "Hourly Rate": line.hourly_rate,
                "Total Cost": line.cost,
            }
            for line in report.lines
        ]
        return export_csv(records, timesheet_filename(month))

    # -- company report -------------------------------------------------------

    def company_report(
        self,
        *,
        current_role: Role,
        period: Optional[str] = DEFAULT_COMPANY_REPORT_PERIOD,
        today: Optional[date] = None,
    ) -> CompanyReport:
        """Totals over every entry plus monthly, employee and project breakdowns."""
        _require_admin(current_role)
        key = period or DEFAULT_COMPANY_REPORT_PERIOD
        if key not in COMPANY_REPORT_MONTHS:
            raise ValidationError("Neplatné období", errors={"period": "Neplatné období"})

        today = today or self._clock().date()
        entries, users, projects = self._load()
        summary = summarize(entries, users, self._employer)
        return CompanyReport(
            period=key,
            currency=self._settings.get().currency,
            total_hours=summary.total_hours,
            total_cost=round_half_up(summary.total_cost),
            total_entries=summary.entry_count,
            active_projects=summary.unique_projects,
            months=monthly_breakdown(entries, users, self._employer, today=today, months=COMPANY_REPORT_MONTHS[key]),
            employees=employee_breakdown(entries, users, self._employer),
            projects=project_breakdown(entries, users, projects, self._employer, unknown_name=UNKNOWN_PROJECT),
        )

    def company_report_csv(
        self,
        *,
        current_role: Role,
        period: Optional[str] = DEFAULT_COMPANY_REPORT_PERIOD,
        today: Optional[date] = None,
    ) -> Optional[CsvDownload]:
        """Sections in one file separated by blank rows.

        The header comes from the first summary row, so later sections only
        fill the Type and Name columns.
        """
        today = today or self._clock().date()
        report = self.company_report(current_role=current_role, period=period, today=today)
        cur = report.currency
        blank = {"Type": "", "Name": "", "Value": ""}

        records: List[dict] = [
            {"Type": "Summary", "Name": "Total Hours", "Value": report.total_hours},
            {"Type": "Summary", "Name": "Total Cost", "Value": f"{report.total_cost} {cur}"},
            {"Type": "Summary", "Name": "Total Entries", "Value": report.total_entries},
            {"Type": "Summary", "Name": "Active Projects", "Value": report.active_projects},
            blank,
        ]
        records += [
            {"Type": "Monthly", "Name": m.month, "Hours": m.hours, "Cost": f"{m.cost} {cur}", "Entries": m.entries}
            for m in report.months
        ]
        records.append(blank)
        records += [
            {
                "Type": "Employee",
                "Name": f"{e.first_name} {e.last_name}",
                "Hours": e.hours,
                "Cost": f"{e.cost} {cur}",
                "Hourly Rate": f"{format_number(e.hourly_rate)} {cur}",
                "Entries": e.entries,
            }
            for e in report.employees
        ]
        records.append(blank)
        records += [
            {"Type": "Project", "Name": p.name, "Hours": p.hours, "Cost": f"{p.cost} {cur}", "Entries": p.entries}
            for p in report.projects
        ]
        return export_csv(records, company_report_filename(today))


def _require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise PermissionDeniedError("Nemáte oprávnění")
