from __future__ import annotations

from flask import Flask, request, session

from ..common.datetime_utils import month_key, now_local, parse_optional_date
from ..common.web import admin_required, csv_response, current_role, error, login_required, run_action
from ..container import Container
from ..core.constants import ALL, DEFAULT_COMPANY_REPORT_PERIOD


def register(app: Flask, container: Container) -> None:
    def _actor():
        return container.auth_service.current_user(session.get("user_id"))

    def _month() -> str:
        return request.args.get("month") or month_key(now_local().date())

    def _report_args() -> dict:
        return dict(
            current_role=current_role(),
            employee_id=request.args.get("employeeId") or ALL,
            start_date=parse_optional_date(request.args.get("startDate"), "startDate"),
            end_date=parse_optional_date(request.args.get("endDate"), "endDate"),
        )

    @app.route("/api/history", methods=["GET"], endpoint="time_history")
    @login_required
    def time_history():
        actor = _actor()
        if not actor:
            return error("Pro pokračování se přihlaste", 401)
        return run_action(
            app,
            lambda: container.report_service.time_history(
                actor=actor, month=_month(), employee_id=request.args.get("employeeId") or ALL
            ).to_dict(),
        )

    @app.route("/api/history.csv", methods=["GET"], endpoint="time_history_csv")
    @login_required
    def time_history_csv():
        actor = _actor()
        if not actor:
            return error("Pro pokračování se přihlaste", 401)
        return csv_response(
            app,
            lambda: container.report_service.time_history_csv(
                actor=actor, month=_month(), employee_id=request.args.get("employeeId") or ALL
            ),
        )

    @app.route("/api/timesheet.csv", methods=["GET"], endpoint="timesheet_csv")
    @login_required
    def timesheet_csv():
        actor = _actor()
        if not actor:
            return error("Pro pokračování se přihlaste", 401)
        return csv_response(
            app,
            lambda: container.report_service.timesheet_csv(
                actor=actor, month=_month(), employee_id=request.args.get("employeeId") or ALL
            ),
        )

    @app.route("/api/reports", methods=["GET"], endpoint="admin_report")
    @admin_required
    def admin_report():
        return run_action(app, lambda: container.report_service.admin_report(**_report_args()).to_dict())

    @app.route("/api/reports.csv", methods=["GET"], endpoint="admin_report_csv")
    @admin_required
    def admin_report_csv():
        return csv_response(app, lambda: container.report_service.admin_report_csv(**_report_args()))

    @app.route("/api/reports/company", methods=["GET"], endpoint="company_report")
    @admin_required
    def company_report():
        return run_action(
            app,
            lambda: container.report_service.company_report(
                current_role=current_role(), period=request.args.get("period") or DEFAULT_COMPANY_REPORT_PERIOD
            ).to_dict(),
        )

    @app.route("/api/reports/company.csv", methods=["GET"], endpoint="company_report_csv")
    @admin_required
    def company_report_csv():
        return csv_response(
            app,
            lambda: container.report_service.company_report_csv(
                current_role=current_role(), period=request.args.get("period") or DEFAULT_COMPANY_REPORT_PERIOD
            ),
        )
