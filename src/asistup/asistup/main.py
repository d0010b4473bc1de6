from __future__ import annotations

import importlib
import logging
from pathlib import Path
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import register_error_handlers
from .container import Container, build_container
from .core.constants import (
    DEFAULT_ERROR_DISPLAY_SECONDS,
    DEFAULT_KIOSK_IDLE_SECONDS,
    DEFAULT_LATE_THRESHOLD_MINUTES,
    DEFAULT_MAX_KIOSK_SESSIONS,
    DEFAULT_SUCCESS_DISPLAY_SECONDS,
)
from .database.bootstrap import apply_schema, list_tables, seed_default_settings
from .approvals.controller import register as register_approvals
from .attendance.controller import register as register_attendance
from .employees.controller import register as register_employees
from .kiosk.controller import register as register_kiosk
from .notifications.controller import register as register_notifications
from .payroll.controller import register as register_payroll
from .reports.controller import register as register_reports
from .settings.controller import register as register_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[ModuleType] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    if settings is None:
        settings_module = get_settings_module()
        settings = importlib.import_module(settings_module)
    else:
        settings_module = settings.__name__

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    store_backend = getattr(settings, "STORE_BACKEND", "memory")
    db_config = getattr(settings, "DB_CONFIG", {})

    if container is None:
        container = build_container(
            store_backend=store_backend,
            db_config=db_config,
            admin_password_hash=getattr(settings, "ADMIN_PASSWORD_HASH", None),
            late_threshold_minutes=int(getattr(settings, "LATE_THRESHOLD_MINUTES", DEFAULT_LATE_THRESHOLD_MINUTES)),
            success_seconds=float(getattr(settings, "KIOSK_SUCCESS_SECONDS", DEFAULT_SUCCESS_DISPLAY_SECONDS)),
            error_seconds=float(getattr(settings, "KIOSK_ERROR_SECONDS", DEFAULT_ERROR_DISPLAY_SECONDS)),
            kiosk_idle_seconds=float(getattr(settings, "KIOSK_SESSION_IDLE_SECONDS", DEFAULT_KIOSK_IDLE_SECONDS)),
            max_kiosk_sessions=int(getattr(settings, "KIOSK_MAX_SESSIONS", DEFAULT_MAX_KIOSK_SESSIONS)),
        )
    logger.info("asistup starting settings=%s store=%s", settings_module, store_backend)

    if container.conn is not None and bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(container.conn, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        if seed_default_settings(container.store):
            logger.info("default global settings stored")

    app.extensions["asistup"] = container
    register_error_handlers(app)

    register_kiosk(app, container)
    register_attendance(app, container)
    register_approvals(app, container)
    register_employees(app, container)
    register_settings(app, container)
    register_payroll(app, container)
    register_reports(app, container)
    register_notifications(app, container)

    return app
