"""Helpers shared by the Flask controllers."""
from __future__ import annotations

import io
import logging
from functools import wraps
from typing import Any, Callable, Optional

from flask import Flask, jsonify, request, send_file, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    DuplicateEmailError,
    NotFoundError,
    PermissionDeniedError,
    TransientIOError,
    ValidationError,
)
from ..reports.csv_export import CsvDownload

logger = logging.getLogger(__name__)

STORE_UNAVAILABLE = "Úložiště je dočasně nedostupné, zkuste to prosím znovu"


def error(message: str, status: int, **extra: Any):
    return jsonify(success=False, message=message, **extra), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error("Pro pokračování se přihlaste", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error("Pro pokračování se přihlaste", 401)
        if session.get("role") != Role.ADMIN.value:
            return error("Nemáte oprávnění", 403)
        return view(*args, **kwargs)

    return wrapper


def request_data() -> dict:
    """JSON body, or form fields for plain form posts."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def current_role() -> Role:
    return Role(session.get("role", Role.EMPLOYEE.value))


def run_action(app: Flask, action: Callable[[], Any], *, status: int = 200, failure: str = "Chyba systému"):
    """Run a use case and turn its outcome into a JSON response.

    Domain errors map to 4xx, a store outage to 503 and anything else to 500.
    """
    try:
        result = action()
    except ValidationError as e:
        return error(str(e), 400, errors=e.errors)
    except AuthenticationError as e:
        return error(str(e), 401)
    except PermissionDeniedError as e:
        return error(str(e), 403)
    except NotFoundError as e:
        return error(str(e), 404)
    except DuplicateEmailError as e:
        return error(str(e), 409)
    except TransientIOError as e:
        logger.warning("Store unavailable during %s %s: %s", request.method, request.path, e)
        return error(STORE_UNAVAILABLE, 503)
    except Exception as e:
        logger.exception("Unhandled error in %s %s", request.method, request.path)
        if bool(app.config.get("DEBUG", False)):
            return error(f"{failure}: {e}", 500)
        return error(failure, 500)
    return jsonify(success=True, data=result), status


def csv_response(app: Flask, build: Callable[[], Optional[CsvDownload]]):
    """Attachment response for a CSV export; 404 when there is nothing to export."""
    download: Optional[CsvDownload] = None

    def action():
        nonlocal download
        download = build()

    failed = run_action(app, action, failure="Export se nezdařil")
    if download is None:
        if failed[1] != 200:
            return failed
        return error("Žádná data k exportu", 404)
    return send_file(
        io.BytesIO(download.content),
        mimetype=download.mimetype,
        as_attachment=True,
        download_name=download.filename,
    )
