from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .core.exceptions import AlreadyClockedOut, DomainError, DuplicateClockIn, NotFound
from .database.bootstrap import apply_schema, list_tables, seed_config_defaults
from .database.connection import DatabaseConnection, DBConfig

from .container import Container, build_container
from .activity.controller import register as register_activity
from .attendance.controller import register as register_attendance
from .payroll.controller import register as register_payroll
from .settings.controller import register as register_settings

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _status_for(err: DomainError) -> int:
    if isinstance(err, NotFound):
        return 404
    if isinstance(err, (DuplicateClockIn, AlreadyClockedOut)):
        return 409
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(err: DomainError):
        status = _status_for(err)
        logger.info("%s %s: %s", status, err.code, err)
        return jsonify({"success": False, "error": str(err), "code": err.code}), status


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            conn = DatabaseConnection(DBConfig.from_dict(db_config))
            apply_schema(conn, schema_path=SCHEMA_PATH)
            seeded = seed_config_defaults(conn)
            logger.info("schema ready (tables=%d, config defaults added=%d)", len(list_tables(conn)), seeded)
        container = build_container(db_config=db_config)

    register_error_handlers(app)
    register_attendance(app, container)
    register_payroll(app, container)
    register_settings(app, container)
    register_activity(app, container)

    return app
