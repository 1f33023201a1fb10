from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .categories.controller import register as register_categories
from .container import Container, build_container
from .core.constants import DEFAULT_APP_NAME
from .core.logging_config import configure_logging, get_logger
from .database.bootstrap import apply_schema, list_tables
from .payments.controller import register as register_payments
from .reports.controller import register as register_reports
from .workers.controller import register as register_workers

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"

logger = get_logger("app")


def create_app(*, container: Optional[Container] = None) -> Flask:
    """Flask app factory. Pass ``container`` to run on pre-built (e.g. in-memory) repositories."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["APP_NAME"] = getattr(settings, "APP_NAME", DEFAULT_APP_NAME) or DEFAULT_APP_NAME

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

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
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(db_config=db_config)

    register_workers(app, container)
    register_categories(app, container)
    register_attendance(app, container)
    register_payments(app, container)
    register_reports(app, container)

    return app
