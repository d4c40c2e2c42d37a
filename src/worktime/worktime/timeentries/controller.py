from __future__ import annotations

from flask import Flask, session

from ..common.web import error, login_required, request_data, run_action
from ..container import Container

# request field -> service field
_ENTRY_FIELDS = {
    "userId": "user_id",
    "date": "date",
    "startTime": "start_time",
    "endTime": "end_time",
    "hoursWorked": "hours_worked",
    "projectId": "project_id",
    "description": "description",
}


def _payload(entries):
    return [e.to_dict() for e in entries]


def register(app: Flask, container: Container) -> None:
    def _actor():
        return container.auth_service.current_user(session.get("user_id"))

    @app.route("/api/time-entries", methods=["GET"], endpoint="list_time_entries")
    @login_required
    def list_time_entries():
        actor = _actor()
        if not actor:
            return error("Pro pokračování se přihlaste", 401)
        return run_action(app, lambda: _payload(container.time_entry_service.list_for(actor)))

    @app.route("/api/time-entries", methods=["POST"], endpoint="create_time_entry")
    @login_required
    def create_time_entry():
        actor = _actor()
        if not actor:
            return error("Pro pokračování se přihlaste", 401)
        data = request_data()
        fields = {_ENTRY_FIELDS[k]: v for k, v in data.items() if k in _ENTRY_FIELDS}
        return run_action(
            app,
            lambda: _payload(container.time_entry_service.create_entry(actor=actor, data=fields)),
            status=201,
            failure="Chyba při ukládání záznamu",
        )

    @app.route("/api/time-entries/<entry_id>", methods=["PATCH"], endpoint="update_time_entry")
    @login_required
    def update_time_entry(entry_id: str):
        actor = _actor()
        if not actor:
            return error("Pro pokračování se přihlaste", 401)
        data = request_data()
        changes = {_ENTRY_FIELDS[k]: v for k, v in data.items() if k in _ENTRY_FIELDS}
        return run_action(
            app,
            lambda: _payload(container.time_entry_service.update_entry(actor=actor, entry_id=entry_id, changes=changes)),
            failure="Chyba při ukládání záznamu",
        )

    @app.route("/api/time-entries/<entry_id>", methods=["DELETE"], endpoint="delete_time_entry")
    @login_required
    def delete_time_entry(entry_id: str):
        actor = _actor()
        if not actor:
            return error("Pro pokračování se přihlaste", 401)
        return run_action(
            app,
            lambda: _payload(container.time_entry_service.delete_entry(actor=actor, entry_id=entry_id)),
            failure="Chyba při mazání záznamu",
        )
