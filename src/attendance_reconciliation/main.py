from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_MAX_WORKERS, DEFAULT_TIMEZONE
from .core.logging import configure_logging, get_logger
from .database.bootstrap import apply_schema, list_tables
from .reconciliation.controller import register as register_reconciliation

logger = get_logger("main")


def create_app(container: Container | None = None) -> Flask:
    """Build the Flask app. Pass ``container`` to run against injected stores."""

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
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[2] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            timezone_name=getattr(settings, "ENGINE_TIMEZONE", DEFAULT_TIMEZONE),
            max_workers=int(getattr(settings, "RECONCILE_MAX_WORKERS", DEFAULT_MAX_WORKERS)),
        )

    register_reconciliation(app, container)
    return app
