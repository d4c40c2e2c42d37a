from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, current_role, login_required, request_data, run_action
from ..container import Container

_SETTINGS_FIELDS = {
    "companyName": "company_name",
    "taxRate": "tax_rate",
    "socialInsuranceRate": "social_insurance_rate",
    "healthInsuranceRate": "health_insurance_rate",
    "currency": "currency",
    "workingHoursPerDay": "working_hours_per_day",
    "workingDaysPerWeek": "working_days_per_week",
}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings", methods=["GET"], endpoint="get_settings")
    @login_required
    def get_settings():
        return run_action(app, lambda: container.settings_service.get().to_dict())

    @app.route("/api/settings", methods=["PUT"], endpoint="save_settings")
    @admin_required
    def save_settings():
        data = request_data()
        values = {_SETTINGS_FIELDS[k]: v for k, v in data.items() if k in _SETTINGS_FIELDS}
        return run_action(
            app,
            lambda: container.settings_service.save(current_role=current_role(), data=values).to_dict(),
            failure="Chyba při ukládání nastavení",
        )
