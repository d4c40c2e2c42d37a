import pytest

from src.worktime.worktime.payroll.calculator.base_rate_calculator import BaseRateCalculator
from src.worktime.worktime.payroll.calculator.employer_calculator import EmployerCostCalculator
from src.worktime.worktime.payroll.salary import (
    calculate_gross_salary,
    calculate_net_salary,
    earnings_from_hours,
    employer_contributions,
    payslip_breakdown,
)
from src.worktime.worktime.settings.model import Settings


def test_gross_from_hours_adds_employer_contributions():
    assert calculate_gross_salary(8, 450) == pytest.approx(4816.8)
    assert calculate_gross_salary(0, 450) == 0


def test_net_salary_is_hours_times_rate():
    assert calculate_net_salary(7.5, 520) == pytest.approx(3900)


def test_calculators_share_the_same_interface():
    assert EmployerCostCalculator(contribution_rate=0.5).cost(2, 100) == pytest.approx(300)
    assert BaseRateCalculator().cost(2, 100) == pytest.approx(200)


def test_net_then_deductions_for_employee_overview():
    e = earnings_from_hours(10, 400, 8500)
    assert e.total_hours == 10
    assert e.net_salary == pytest.approx(4000)
    assert e.gross_salary == pytest.approx(12500)
    assert e.deductions == 8500


def test_payslip_breakdown_uses_settings_rates():
    p = payslip_breakdown(10000, Settings(), deductions=500)
    assert p.tax == pytest.approx(1500)
    assert p.social_insurance == pytest.approx(650)
    assert p.health_insurance == pytest.approx(450)
    assert p.net_salary == pytest.approx(10000 - 1500 - 650 - 450 - 500)


def test_payslip_can_go_negative_with_large_deductions():
    p = payslip_breakdown(1000, Settings(), deductions=8500)
    assert p.net_salary < 0


def test_employer_contributions_breakdown():
    c = employer_contributions(20000, Settings())
    assert c.social_amount == pytest.approx(1300)
    assert c.health_amount == pytest.approx(900)
    assert c.total_amount == pytest.approx(2200)
    assert c.total_rate == "11.0"


def test_net_then_deductions_for_one_day():
    e = earnings_from_hours(8, 450, 8500)
    assert e.net_salary == 3600
    assert e.gross_salary == 12100
    assert e.deductions == 8500
