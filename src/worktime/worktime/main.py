from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import LOCAL, MYSQL, Container, build_container
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, list_tables, seed_demo_data
from .projects.controller import register as register_projects
from .reports.controller import register as register_reports
from .settings.controller import register as register_settings
from .timeentries.controller import register as register_time_entries
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory. Pass a prebuilt container to skip store setup."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        container = _build_from_settings(settings, settings_module)

    register_users(app, container)
    register_projects(app, container)
    register_time_entries(app, container)
    register_reports(app, container)
    register_dashboard(app, container)
    register_settings(app, container)

    return app


def _build_from_settings(settings, settings_module: str) -> Container:
    backend = str(getattr(settings, "STORAGE_BACKEND", MYSQL)).lower()
    if backend == LOCAL:
        path = getattr(settings, "LOCAL_STORE_PATH", None)
        logger.info("Using local record store (settings=%s, path=%s)", settings_module, path or "memory")
        return build_container(storage_backend=LOCAL, local_store_path=path)

    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "Using MySQL record store (settings=%s, db=%s@%s:%s/%s)",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        seed_demo_data(db_config)
        logger.info("Demo data ready")

    return build_container(storage_backend=MYSQL, db_config=db_config)
