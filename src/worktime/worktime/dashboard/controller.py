from __future__ import annotations

from flask import Flask, request, session

from ..common.datetime_utils import now_local, parse_optional_date
from ..common.web import error, login_required, run_action
from ..container import Container
from ..reports.period import PeriodSpec, shift_period


def _period_from_args() -> PeriodSpec:
    reference = parse_optional_date(request.args.get("date"), "date") or now_local().date()
    period = PeriodSpec.parse(
        request.args.get("filterType"),
        reference_date=reference,
        start_date=parse_optional_date(request.args.get("startDate"), "startDate"),
        end_date=parse_optional_date(request.args.get("endDate"), "endDate"),
    )
    navigate = (request.args.get("navigate") or "").lower()
    if navigate == "prev":
        return shift_period(period, -1)
    if navigate == "next":
        return shift_period(period, 1)
    return period


def register(app: Flask, container: Container) -> None:
    def _actor():
        return container.auth_service.current_user(session.get("user_id"))

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard():
        actor = _actor()
        if not actor:
            return error("Pro pokračování se přihlaste", 401)

        def action():
            period = _period_from_args()
            if actor.is_admin:
                return container.dashboard_service.admin_overview(period.reference_date).to_dict()
            overview = container.dashboard_service.employee_overview(actor, period)
            data = overview.to_dict() if overview else None
            if period.reference_date is not None:
                return {
                    "overview": data,
                    "previousDate": shift_period(period, -1).reference_date.isoformat(),
                    "nextDate": shift_period(period, 1).reference_date.isoformat(),
                }
            return {"overview": data}

        return run_action(app, action)

    @app.route("/api/dashboard/performance", methods=["GET"], endpoint="performance")
    @login_required
    def performance():
        actor = _actor()
        if not actor:
            return error("Pro pokračování se přihlaste", 401)

        def action():
            reference = parse_optional_date(request.args.get("date"), "date")
            return container.dashboard_service.performance(actor, reference).to_dict()

        return run_action(app, action)
