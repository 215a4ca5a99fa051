"""Run or preview the weekly rotation from the command line (e.g. from cron)."""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from datetime import date
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.staff_scheduling.staff_scheduling.common.datetime_utils import parse_iso_date
from src.staff_scheduling.staff_scheduling.common.permissions import Identity
from src.staff_scheduling.staff_scheduling.container import build_container
from src.staff_scheduling.staff_scheduling.core.enums import PermissionTag

logger = logging.getLogger("run_rotation")


def main() -> None:
    parser = argparse.ArgumentParser(description="Weekly rotation of role-tagged schedule templates.")
    parser.add_argument("--execute", action="store_true", help="persist the plan (default: preview only)")
    parser.add_argument("--date", help="reference date YYYY-MM-DD (default: today)")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(levelname)s %(name)s: %(message)s")

    container = build_container(db_config=dict(settings.DB_CONFIG), system_admin_email=settings.SYSTEM_ADMIN_EMAIL)
    system = Identity(employee_id=0, role="system", permission_tag=PermissionTag.ADMIN, full_name="cron")
    today = parse_iso_date(args.date) if args.date else date.today()

    if args.execute:
        result = container.rotation_service.execute(system, today)
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        plan = container.rotation_service.preview(system, today)
        print(json.dumps(plan.to_dict(), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
