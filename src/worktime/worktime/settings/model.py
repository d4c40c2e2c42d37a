from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """Company-wide payroll settings (singleton row)."""

    settings_id: str = "settings-1"
    company_name: str = "Moje Firma"
    tax_rate: float = 15
    social_insurance_rate: float = 6.5
    health_insurance_rate: float = 4.5
    currency: str = "CZK"
    working_hours_per_day: float = 8
    working_days_per_week: int = 5

    def to_dict(self) -> dict:
        return {
            "id": self.settings_id,
            "companyName": self.company_name,
            "taxRate": self.tax_rate,
            "socialInsuranceRate": self.social_insurance_rate,
            "healthInsuranceRate": self.health_insurance_rate,
            "currency": self.currency,
            "workingHoursPerDay": self.working_hours_per_day,
            "workingDaysPerWeek": self.working_days_per_week,
        }
