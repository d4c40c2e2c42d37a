from __future__ import annotations

from typing import Optional

from ..storage.local_store import SETTINGS_KEY, LocalStore
from .model import Settings
from .repository import SettingsRepository


class LocalSettingsRepository(SettingsRepository):
    def __init__(self, store: LocalStore):
        self._store = store

    def get(self) -> Optional[Settings]:
        r = self._store.read(SETTINGS_KEY)
        if not r:
            return None
        defaults = Settings()
        return Settings(
            settings_id=r.get("id", defaults.settings_id),
            company_name=r.get("companyName", defaults.company_name),
            tax_rate=float(r.get("taxRate", defaults.tax_rate)),
            social_insurance_rate=float(r.get("socialInsuranceRate", defaults.social_insurance_rate)),
            health_insurance_rate=float(r.get("healthInsuranceRate", defaults.health_insurance_rate)),
            currency=r.get("currency", defaults.currency),
            working_hours_per_day=float(r.get("workingHoursPerDay", defaults.working_hours_per_day)),
            working_days_per_week=int(r.get("workingDaysPerWeek", defaults.working_days_per_week)),
        )

    def save(self, settings: Settings) -> Settings:
        self._store.write(SETTINGS_KEY, settings.to_dict())
        return settings
