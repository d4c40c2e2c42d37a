"""Salary formulas.

Three formula sets are in use and each belongs to one screen:

- gross-from-hours (``calculate_gross_salary``): admin reports and dashboards,
- net-then-deductions (``earnings_from_hours``): the employee overview,
- settings deductions (``payslip_breakdown``): the employee performance card.

They disagree on what "gross" and "net" mean. Keep them separate.
"""
from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import EMPLOYER_CONTRIBUTION_RATE
from ..settings.model import Settings
from .calculator.base_rate_calculator import BaseRateCalculator
from .calculator.employer_calculator import EmployerCostCalculator

_employer = EmployerCostCalculator()
_base_rate = BaseRateCalculator()


def calculate_gross_salary(hours: float, hourly_rate: float) -> float:
    return _employer.cost(hours, hourly_rate)


def calculate_net_salary(hours: float, hourly_rate: float) -> float:
    return _base_rate.cost(hours, hourly_rate)


@dataclass(frozen=True)
class Earnings:
    """Employee overview figures. Here net is the base pay and gross adds the
    flat monthly deductions amount on top."""

    total_hours: float
    net_salary: float
    gross_salary: float
    deductions: float


def earnings_from_hours(hours: float, hourly_rate: float, monthly_deductions: float) -> Earnings:
    net = calculate_net_salary(hours, hourly_rate)
    return Earnings(
        total_hours=hours,
        net_salary=net,
        gross_salary=net + monthly_deductions,
        deductions=monthly_deductions,
    )


@dataclass(frozen=True)
class PayslipBreakdown:
    gross_salary: float
    tax: float
    social_insurance: float
    health_insurance: float
    other_deductions: float
    net_salary: float


def payslip_breakdown(gross_salary: float, settings: Settings, deductions: float = 0) -> PayslipBreakdown:
    tax = gross_salary * settings.tax_rate / 100
    social = gross_salary * settings.social_insurance_rate / 100
    health = gross_salary * settings.health_insurance_rate / 100
    return PayslipBreakdown(
        gross_salary=gross_salary,
        tax=tax,
        social_insurance=social,
        health_insurance=health,
        other_deductions=deductions,
        net_salary=gross_salary - tax - social - health - deductions,
    )


@dataclass(frozen=True)
class EmployerContributions:
    social_rate: float
    social_amount: float
    health_rate: float
    health_amount: float
    total_rate: str
    total_amount: float
    # flat 33.8 % summary shown next to the settings-based breakdown
    fixed_amount: float = 0.0


def employer_contributions(total_cost: float, settings: Settings) -> EmployerContributions:
    combined = settings.social_insurance_rate + settings.health_insurance_rate
    return EmployerContributions(
        social_rate=settings.social_insurance_rate,
        social_amount=total_cost * settings.social_insurance_rate / 100,
        health_rate=settings.health_insurance_rate,
        health_amount=total_cost * settings.health_insurance_rate / 100,
        total_rate=f"{combined:.1f}",
        total_amount=total_cost * combined / 100,
        fixed_amount=total_cost * EMPLOYER_CONTRIBUTION_RATE,
    )
