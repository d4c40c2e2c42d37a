from __future__ import annotations

import logging
from typing import Any, Mapping

from ..common.validators import collect_errors, require_non_empty, require_range
from ..core.enums import Role
from ..core.exceptions import PermissionDeniedError, TransientIOError
from .model import Settings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)

# field -> (label, low, high, form field)
_RANGES = {
    "tax_rate": ("Daňová sazba", 0, 50, "taxRate"),
    "social_insurance_rate": ("Sociální pojištění", 0, 20, "socialInsuranceRate"),
    "health_insurance_rate": ("Zdravotní pojištění", 0, 20, "healthInsuranceRate"),
    "working_hours_per_day": ("Pracovní hodiny denně", 1, 24, "workingHoursPerDay"),
    "working_days_per_week": ("Pracovní dny v týdnu", 1, 7, "workingDaysPerWeek"),
}


class SettingsService:
    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def get(self) -> Settings:
        """Stored settings; defaults when nothing is stored or the store is down."""
        try:
            stored = self._settings.get()
        except TransientIOError as e:
            logger.warning("Could not load settings, using defaults: %s", e)
            return Settings()
        return stored or Settings()

    def save(self, *, current_role: Role, data: Mapping[str, Any]) -> Settings:
        if current_role != Role.ADMIN:
            raise PermissionDeniedError("Nemáte oprávnění")

        current = self.get()
        values = {
            "company_name": data.get("company_name", current.company_name),
            "currency": data.get("currency", current.currency) or current.currency,
        }
        for field in _RANGES:
            values[field] = data.get(field, getattr(current, field))

        checks = [lambda: require_non_empty(values["company_name"], "Název firmy", field="companyName")]
        for field, (label, low, high, key) in _RANGES.items():
            checks.append(lambda f=field, lbl=label, lo=low, hi=high, k=key: require_range(values[f], lbl, lo, hi, field=k))
        collect_errors(*checks)

        settings = Settings(
            settings_id=current.settings_id,
            company_name=str(values["company_name"]).strip(),
            tax_rate=float(values["tax_rate"]),
            social_insurance_rate=float(values["social_insurance_rate"]),
            health_insurance_rate=float(values["health_insurance_rate"]),
            currency=str(values["currency"]).strip(),
            working_hours_per_day=float(values["working_hours_per_day"]),
            working_days_per_week=int(float(values["working_days_per_week"])),
        )
        self._settings.save(settings)
        logger.info("Settings saved")
        return self.get()
