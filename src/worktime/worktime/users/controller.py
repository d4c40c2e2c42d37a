from __future__ import annotations

from datetime import timedelta

from flask import Flask, session

from ..common.web import admin_required, current_role, error, login_required, request_data, run_action
from ..container import Container
from ..core.enums import Role
from .model import User

# request field -> service field
_EMPLOYEE_FIELDS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "password": "password",
    "hourlyRate": "hourly_rate",
    "monthlyDeductions": "monthly_deductions",
    "role": "role",
    "isActive": "is_active",
}


def _start_session(app: Flask, user: User, *, remember: bool) -> None:
    session.clear()
    session.permanent = remember
    app.permanent_session_lifetime = timedelta(days=7)
    session["user_id"] = user.user_id
    session["name"] = user.full_name
    session["role"] = user.role.value


def _users_payload(users):
    return [u.to_public_dict() for u in users]


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = request_data()

        def action():
            user = container.auth_service.login(data.get("email", ""), data.get("password", ""))
            _start_session(app, user, remember=bool(data.get("rememberMe")))
            return user.to_public_dict()

        return run_action(app, action, failure="Chyba systému při přihlášení")

    @app.route("/api/auth/register", methods=["POST"], endpoint="register")
    def register_account():
        data = request_data()

        def action():
            user = container.auth_service.register(
                first_name=data.get("firstName", ""),
                last_name=data.get("lastName", ""),
                email=data.get("email", ""),
                password=data.get("password", ""),
                password_confirm=data.get("confirmPassword", ""),
            )
            _start_session(app, user, remember=False)
            return user.to_public_dict()

        return run_action(app, action, status=201, failure="Chyba systému při registraci")

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return run_action(app, lambda: None)

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        user = container.auth_service.current_user(session.get("user_id"))
        if not user:
            session.clear()
            return error("Pro pokračování se přihlaste", 401)
        return run_action(app, user.to_public_dict)

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @admin_required
    def list_employees():
        return run_action(app, lambda: _users_payload(container.user_service.list_users()))

    @app.route("/api/employees/active", methods=["GET"], endpoint="list_active_employees")
    @login_required
    def list_active_employees():
        return run_action(app, lambda: _users_payload(container.user_service.list_active_employees()))

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @admin_required
    def create_employee():
        data = request_data()

        def action():
            users = container.user_service.create_employee(
                current_role=current_role(),
                first_name=data.get("firstName", ""),
                last_name=data.get("lastName", ""),
                email=data.get("email", ""),
                password=data.get("password", ""),
                hourly_rate=data.get("hourlyRate"),
                monthly_deductions=data.get("monthlyDeductions", 0),
                role=data.get("role") or Role.EMPLOYEE.value,
            )
            return _users_payload(users)

        return run_action(app, action, status=201, failure="Chyba systému při vytváření zaměstnance")

    @app.route("/api/employees/<user_id>", methods=["PATCH"], endpoint="update_employee")
    @admin_required
    def update_employee(user_id: str):
        data = request_data()
        changes = {_EMPLOYEE_FIELDS[k]: v for k, v in data.items() if k in _EMPLOYEE_FIELDS}
        return run_action(
            app,
            lambda: _users_payload(
                container.user_service.update_employee(current_role=current_role(), user_id=user_id, changes=changes)
            ),
            failure="Chyba systému při úpravě zaměstnance",
        )

    @app.route("/api/employees/<user_id>", methods=["DELETE"], endpoint="delete_employee")
    @admin_required
    def delete_employee(user_id: str):
        return run_action(
            app,
            lambda: _users_payload(
                container.user_service.deactivate_employee(
                    current_role=current_role(), current_user_id=session["user_id"], user_id=user_id
                )
            ),
            failure="Chyba systému při odstraňování zaměstnance",
        )

    @app.route("/api/employees/<user_id>/toggle", methods=["POST"], endpoint="toggle_employee")
    @admin_required
    def toggle_employee(user_id: str):
        return run_action(
            app,
            lambda: _users_payload(
                container.user_service.toggle_active(
                    current_role=current_role(), current_user_id=session["user_id"], user_id=user_id
                )
            ),
        )
