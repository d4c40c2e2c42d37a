from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional

from ..common.datetime_utils import end_of_month, end_of_week, now_local, start_of_month, start_of_week
from ..common.resilience import read_or_empty
from ..core.constants import DEFAULT_RECENT_ENTRIES
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.employer_calculator import EmployerCostCalculator
from ..payroll.salary import Earnings, PayslipBreakdown, calculate_gross_salary, earnings_from_hours, payslip_breakdown
from ..reports.aggregator import summarize
from ..reports.period import PeriodSpec, filter_entries, period_label, resolve_bounds, select_period
from ..settings.service import SettingsService
from ..timeentries.model import TimeEntry
from ..timeentries.repository import TimeEntryRepository
from ..users.model import User
from ..users.repository import UserRepository


@dataclass(frozen=True)
class EmployeeOverview:
    period_label: str
    start_date: date
    end_date: date
    earnings: Earnings
    entries_count: int
    recent_entries: List[TimeEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "periodLabel": self.period_label,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "totalHours": self.earnings.total_hours,
            "netSalary": self.earnings.net_salary,
            "grossSalary": self.earnings.gross_salary,
            "deductions": self.earnings.deductions,
            "entriesCount": self.entries_count,
            "recentEntries": [e.to_dict() for e in self.recent_entries],
        }


@dataclass(frozen=True)
class AdminOverview:
    period_label: str
    total_hours: float
    total_cost: float
    active_employees: int
    active_projects: int
    entries_count: int

    def to_dict(self) -> dict:
        return {
            "periodLabel": self.period_label,
            "totalHours": self.total_hours,
            "totalCost": self.total_cost,
            "activeEmployees": self.active_employees,
            "activeProjects": self.active_projects,
            "entriesCount": self.entries_count,
        }


@dataclass(frozen=True)
class Performance:
    weekly_hours: float
    monthly_hours: float
    total_projects: int
    payslip: PayslipBreakdown

    def to_dict(self) -> dict:
        return {
            "weeklyHours": self.weekly_hours,
            "monthlyHours": self.monthly_hours,
            "totalProjects": self.total_projects,
            "grossSalary": self.payslip.gross_salary,
            "tax": self.payslip.tax,
            "socialInsurance": self.payslip.social_insurance,
            "healthInsurance": self.payslip.health_insurance,
            "otherDeductions": self.payslip.other_deductions,
            "netSalary": self.payslip.net_salary,
        }


class DashboardService:
    """Figures for the employee and admin landing pages."""

    def __init__(
        self,
        entries: TimeEntryRepository,
        users: UserRepository,
        settings: SettingsService,
        *,
        calculator: Optional[PayrollCalculator] = None,
        clock: Callable = now_local,
    ):
        self._entries = entries
        self._users = users
        self._settings = settings
        self._calculator = calculator or EmployerCostCalculator()
        self._clock = clock

    def _all_entries(self) -> List[TimeEntry]:
        return read_or_empty(self._entries.list_all, what="time entries")

    def employee_overview(self, user: User, period: PeriodSpec) -> Optional[EmployeeOverview]:
        """Net is hours x rate and gross adds the monthly deductions on top.

        Returns None for a custom period with a missing bound.
        """
        bounds = resolve_bounds(period)
        if bounds is None:
            return None
        selected = select_period(self._all_entries(), period, user_id=user.user_id)
        hours = sum(e.hours_worked for e in selected)
        return EmployeeOverview(
            period_label=period_label(period),
            start_date=bounds[0],
            end_date=bounds[1],
            earnings=earnings_from_hours(hours, user.hourly_rate, user.monthly_deductions),
            entries_count=len(selected),
            recent_entries=selected[:DEFAULT_RECENT_ENTRIES],
        )

    def admin_overview(self, reference_date: Optional[date] = None) -> AdminOverview:
        period = PeriodSpec.month(reference_date or self._clock().date())
        selected = select_period(self._all_entries(), period)
        users = read_or_empty(self._users.list_all, what="users")
        summary = summarize(selected, users, self._calculator)
        return AdminOverview(
            period_label=period_label(period),
            total_hours=summary.total_hours,
            total_cost=summary.total_cost,
            active_employees=summary.unique_employees,
            active_projects=summary.unique_projects,
            entries_count=summary.entry_count,
        )

    def performance(self, user: User, reference_date: Optional[date] = None) -> Performance:
        """Week and month hours, then tax and insurance from the settings taken off the gross."""
        today = reference_date or self._clock().date()
        own = [e for e in self._all_entries() if e.user_id == user.user_id]

        month = filter_entries(own, start=start_of_month(today), end=end_of_month(today))
        week = filter_entries(own, start=start_of_week(today), end=end_of_week(today))
        monthly_hours = sum(e.hours_worked for e in month)
        gross = calculate_gross_salary(monthly_hours, user.hourly_rate)

        return Performance(
            weekly_hours=sum(e.hours_worked for e in week),
            monthly_hours=monthly_hours,
            total_projects=len({e.project_id for e in own}),
            payslip=payslip_breakdown(gross, self._settings.get(), user.monthly_deductions),
        )
