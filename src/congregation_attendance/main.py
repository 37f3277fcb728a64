from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .auth.tokens import TokenSettings
from .common.http import register_error_handlers
from .common.logging import configure_logging, get_logger
from .core.constants import ROLL_CALL_SCAN_LIMIT
from .database.bootstrap import apply_schema, list_tables

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .imports.controller import register as register_imports
from .people.controller import register as register_people
from .reports.controller import register as register_reports

logger = get_logger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def token_settings_from(settings) -> TokenSettings:
    return TokenSettings(
        key=getattr(settings, "AUTH_JWT_KEY"),
        algorithms=tuple(getattr(settings, "AUTH_JWT_ALGORITHMS", ("HS256",))),
        audience=getattr(settings, "AUTH_JWT_AUDIENCE", None),
        issuer=getattr(settings, "AUTH_JWT_ISSUER", None),
    )


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    Passing a ready `container` skips database bootstrap; tests use this to
    run the API over in-memory repositories.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"), db_config.get("host"),
            db_config.get("port", 3306), db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            token_settings=token_settings_from(settings),
            roll_call_scan_limit=int(getattr(settings, "ROLL_CALL_SCAN_LIMIT", ROLL_CALL_SCAN_LIMIT)),
        )

    register_error_handlers(app)
    register_people(app, container)
    register_attendance(app, container)
    register_reports(app, container)
    register_imports(app, container)

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    return app
