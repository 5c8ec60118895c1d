from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import BACKEND_MYSQL, Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .notifications.signals import connect_audit_log
from .payroll.controller import register as register_payroll
from .punches.controller import register as register_punches
from .status.controller import register as register_status
from .timesheets.controller import register as register_timesheets

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    db_config = getattr(settings, "DB_CONFIG")
    backend = getattr(settings, "STORAGE_BACKEND", BACKEND_MYSQL)
    logger.info("settings=%s backend=%s", settings_module, backend)

    if container is None:
        if backend == BACKEND_MYSQL and bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info(
                "schema ready on %s@%s:%s/%s (tables=%d)",
                db_config.get("user"),
                db_config.get("host"),
                db_config.get("port", 3306),
                db_config.get("database"),
                len(list_tables(db_config)),
            )

        container = build_container(
            db_config=db_config,
            backend=backend,
            overtime_threshold_hours=float(getattr(settings, "OVERTIME_THRESHOLD_HOURS", 40)),
            overtime_multiplier=float(getattr(settings, "OVERTIME_MULTIPLIER", 1.5)),
        )

    app.extensions["time_attendance"] = container
    connect_audit_log()

    register_punches(app, container)
    register_payroll(app, container)
    register_timesheets(app, container)
    register_status(app, container)

    return app
