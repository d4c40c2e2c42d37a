from __future__ import annotations

from flask import Flask, request

from ..common.web import admin_required, current_role, login_required, request_data, run_action
from ..container import Container


def _payload(projects):
    return [p.to_dict() for p in projects]


def register(app: Flask, container: Container) -> None:
    @app.route("/api/projects", methods=["GET"], endpoint="list_projects")
    @login_required
    def list_projects():
        status = (request.args.get("status") or "all").lower()
        svc = container.project_service
        if status == "active":
            return run_action(app, lambda: _payload(svc.list_active()))
        if status == "archived":
            return run_action(app, lambda: _payload(svc.list_archived()))
        return run_action(app, lambda: _payload(svc.list_projects()))

    @app.route("/api/projects", methods=["POST"], endpoint="create_project")
    @admin_required
    def create_project():
        data = request_data()
        return run_action(
            app,
            lambda: _payload(container.project_service.create_project(current_role=current_role(), name=data.get("name", ""))),
            status=201,
            failure="Chyba systému při vytváření projektu",
        )

    @app.route("/api/projects/<project_id>", methods=["PATCH"], endpoint="rename_project")
    @admin_required
    def rename_project(project_id: str):
        data = request_data()
        return run_action(
            app,
            lambda: _payload(
                container.project_service.rename_project(
                    current_role=current_role(), project_id=project_id, name=data.get("name", "")
                )
            ),
        )

    @app.route("/api/projects/<project_id>/status", methods=["POST"], endpoint="set_project_status")
    @admin_required
    def set_project_status(project_id: str):
        data = request_data()
        is_active = data.get("isActive", True)
        if isinstance(is_active, str):
            is_active = is_active.strip().lower() in {"1", "true", "yes", "on"}
        return run_action(
            app,
            lambda: _payload(
                container.project_service.set_status(
                    current_role=current_role(), project_id=project_id, is_active=bool(is_active)
                )
            ),
        )
