from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .container import build_container
from .core.constants import DEFAULT_SYSTEM_ADMIN_EMAIL
from .database.bootstrap import apply_schema, ensure_system_admin, list_tables, seed_roles, seed_schedule_templates
from .employees.controller import register as register_employees
from .leave.controller import register as register_leave
from .rotation.controller import register as register_rotation
from .schedules.controller import register as register_schedules

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), format=LOG_FORMAT)

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.json.ensure_ascii = False
    admin_email = str(getattr(settings, "SYSTEM_ADMIN_EMAIL", DEFAULT_SYSTEM_ADMIN_EMAIL))

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        seed_roles(db_config, getattr(settings, "ROLES", []))
        seed_schedule_templates(db_config, getattr(settings, "SCHEDULE_TEMPLATES", []))
        ensure_system_admin(db_config, email=admin_email, password=getattr(settings, "SYSTEM_ADMIN_PASSWORD", None))

    container = build_container(db_config=db_config, system_admin_email=admin_email)

    register_error_handlers(app)
    register_employees(app, container)
    register_schedules(app, container)
    register_rotation(app, container)
    register_attendance(app, container)
    register_leave(app, container)

    return app
