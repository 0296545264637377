from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .alerts.controller import register as register_alerts
from .attendance.controller import register as register_attendance
from .cancellations.controller import register as register_cancellations
from .container import AlertOptions, Container, build_container
from .common.http import error_response
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig
from .reports.controller import register as register_reports
from .servants.controller import register as register_servants
from .settings.controller import register as register_settings
from .students.controller import register as register_students

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def register_routes(app: Flask, container: Container) -> None:
    register_students(app, container)
    register_servants(app, container)
    register_attendance(app, container)
    register_cancellations(app, container)
    register_settings(app, container)
    register_alerts(app, container)
    register_reports(app, container)

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return error_response(e)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"success": False, "message": e.description}), e.code
        logger.exception("unhandled error")
        return jsonify({"success": False, "message": "Internal server error"}), 500


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        if app.config["DEBUG"]:
            logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            logger.info("demo seed ready")

        container = build_container(db_config=db_config, options=AlertOptions.from_settings(settings))

    register_routes(app, container)
    app.extensions["youth_ministry"] = container
    return app
