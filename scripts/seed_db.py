from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.staff_scheduling.staff_scheduling.database.bootstrap import (
    ensure_system_admin,
    seed_roles,
    seed_schedule_templates,
)

logger = logging.getLogger("seed_db")


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(levelname)s %(name)s: %(message)s")
    db_config = dict(settings.DB_CONFIG)

    roles = seed_roles(db_config, settings.ROLES)
    templates = seed_schedule_templates(db_config, settings.SCHEDULE_TEMPLATES)
    admin = ensure_system_admin(
        db_config, email=settings.SYSTEM_ADMIN_EMAIL, password=getattr(settings, "SYSTEM_ADMIN_PASSWORD", None)
    )
    logger.info("Seed done: %s roles, %s templates, admin created=%s", roles, templates, admin)


if __name__ == "__main__":
    main()
