from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchone
from .model import Settings
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    """Single-row settings table keyed by ``settings_id``."""

    def __init__(self, conn_factory: DatabaseConnection, settings_id: str = "settings-1"):
        self._conn_factory = conn_factory
        self._settings_id = settings_id

    def get(self) -> Optional[Settings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, company_name, tax_rate, social_insurance_rate, health_insurance_rate,
                       currency, working_hours_per_day, working_days_per_week
                FROM settings
                WHERE id=%s
                """,
                (self._settings_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Settings(
                settings_id=str(row["id"]),
                company_name=row["company_name"],
                tax_rate=as_float(row["tax_rate"]),
                social_insurance_rate=as_float(row["social_insurance_rate"]),
                health_insurance_rate=as_float(row["health_insurance_rate"]),
                currency=row["currency"],
                working_hours_per_day=as_float(row["working_hours_per_day"]),
                working_days_per_week=int(row["working_days_per_week"]),
            )

    def save(self, settings: Settings) -> Settings:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO settings
                    (id, company_name, tax_rate, social_insurance_rate, health_insurance_rate,
                     currency, working_hours_per_day, working_days_per_week)
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    company_name=VALUES(company_name),
                    tax_rate=VALUES(tax_rate),
                    social_insurance_rate=VALUES(social_insurance_rate),
                    health_insurance_rate=VALUES(health_insurance_rate),
                    currency=VALUES(currency),
                    working_hours_per_day=VALUES(working_hours_per_day),
                    working_days_per_week=VALUES(working_days_per_week)
                """,
                (
                    self._settings_id,
                    settings.company_name,
                    settings.tax_rate,
                    settings.social_insurance_rate,
                    settings.health_insurance_rate,
                    settings.currency,
                    settings.working_hours_per_day,
                    settings.working_days_per_week,
                ),
            )
        return settings
