from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .database.bootstrap import apply_schema, ensure_demo_users, list_tables
from .database.connection import DBConfig

from .container import build_container
from .attendance.controller import register as register_attendance
from .leaves.controller import register as register_leaves
from .payroll.controller import register as register_payroll
from .projects.controller import register as register_projects
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _settings_dict(settings) -> dict:
    return {name: getattr(settings, name) for name in dir(settings) if name.isupper()}


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = _settings_dict(importlib.import_module(settings_module))

    logging.basicConfig(
        level=settings.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = settings["SECRET_KEY"]
    db_config = settings["DB_CONFIG"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))

    logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

    if settings.get("AUTO_INIT_DB"):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
    if settings.get("AUTO_SEED_DB"):
        ensure_demo_users(db_config)

    container = build_container(db_config=db_config, settings=settings)
    app.extensions["hr_attendance"] = container

    register_users(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_payroll(app, container)
    register_reports(app, container)
    register_projects(app, container)

    @app.route("/api/health", endpoint="health")
    def health():
        return jsonify({"success": True, "status": "ok"})

    return app
