from datetime import date

import pytest

from src.worktime.worktime.reports.period import PeriodSpec


def test_employee_overview_for_month(container, jan):
    overview = container.dashboard_service.employee_overview(jan, PeriodSpec.month(date(2024, 12, 20)))
    assert overview.period_label == "2024-12"
    assert overview.earnings.total_hours == 15.5
    assert overview.earnings.net_salary == pytest.approx(6975)
    assert overview.earnings.gross_salary == pytest.approx(15475)
    assert overview.earnings.deductions == 8500
    assert [e.entry_id for e in overview.recent_entries] == ["time-2", "time-1"]


def test_employee_overview_for_empty_month(container, jan):
    overview = container.dashboard_service.employee_overview(jan, PeriodSpec.month(date(2024, 11, 1)))
    assert overview.entries_count == 0
    assert overview.earnings.net_salary == 0
    assert overview.earnings.gross_salary == 8500


def test_incomplete_custom_period_has_no_overview(container, jan):
    assert container.dashboard_service.employee_overview(jan, PeriodSpec.custom(date(2024, 12, 1), None)) is None


def test_recent_entries_capped_at_five(container, jan):
    for day in range(3, 10):
        container.time_entry_service.create_entry(
            actor=jan,
            data={
                "date": f"2024-12-{day:02d}",
                "start_time": "08:00",
                "end_time": "09:00",
                "project_id": "proj-1",
            },
        )
    overview = container.dashboard_service.employee_overview(jan, PeriodSpec.year(date(2024, 1, 1)))
    assert overview.entries_count == 9
    assert len(overview.recent_entries) == 5
    assert overview.recent_entries[0].date == date(2024, 12, 9)


def test_admin_overview(container):
    overview = container.dashboard_service.admin_overview(date(2024, 12, 1))
    assert overview.total_hours == 24
    assert overview.active_employees == 2
    assert overview.active_projects == 2
    assert overview.entries_count == 3
    assert overview.total_cost == pytest.approx((15.5 * 450 + 8.5 * 520) * 1.338)


def test_performance_uses_settings_deductions(container, jan):
    perf = container.dashboard_service.performance(jan, date(2024, 12, 2))
    gross = 15.5 * 450 * 1.338
    assert perf.weekly_hours == 7.5
    assert perf.monthly_hours == 15.5
    assert perf.total_projects == 1
    assert perf.payslip.gross_salary == pytest.approx(gross)
    assert perf.payslip.net_salary == pytest.approx(gross * (1 - 0.26) - 8500)
