"""Schema application and idempotent seeding of roles, templates and the admin."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import parse_hhmm
from ..common.validators import require_weekdays
from ..core.enums import PermissionTag, TemplateKind
from .connection import DatabaseConnection, DBConfig
from .mysql_base import db_cursor, fetchone, weekdays_to_column

logger = logging.getLogger(__name__)


def _factory(db_config: dict) -> DatabaseConnection:
    return DatabaseConnection.get_instance(DBConfig.from_settings(db_config))


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql stays independent of the configured database name
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside quoted strings."""
    buf: list[str] = []
    quote: Optional[str] = None
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue
        if ch == "\\":
            buf.append(ch)
            escape = True
            continue
        if ch in ("'", '"'):
            if quote is None:
                quote = ch
            elif quote == ch:
                quote = None
        if ch == ";" and quote is None:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    factory = _factory(db_config)
    conn = factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_comments(_strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8")))

    with db_cursor(_factory(db_config), dictionary=False) as (_, cur):
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
    logger.info("Schema applied to %s", _factory(db_config).config.describe())


def seed_roles(db_config: dict, roles: Sequence[Mapping[str, object]]) -> int:
    """Insert missing roles by name. Returns how many were added."""
    added = 0
    with db_cursor(_factory(db_config)) as (_, cur):
        for role in roles:
            cur.execute("SELECT role_id FROM roles WHERE role_name=%s", (role["name"],))
            if fetchone(cur):
                continue
            cur.execute(
                "INSERT INTO roles(role_name, description, permission_tag) VALUES(%s,%s,%s)",
                (role["name"], role.get("description"), PermissionTag(role.get("permission", "empleado")).value),
            )
            added += 1
    if added:
        logger.info("Seeded %s roles", added)
    return added


def seed_schedule_templates(db_config: dict, templates: Sequence[Mapping[str, object]]) -> int:
    """Insert catalog templates whose name is not present yet."""
    added = 0
    with db_cursor(_factory(db_config)) as (_, cur):
        for t in templates:
            cur.execute("SELECT template_id FROM schedule_templates WHERE template_name=%s", (t["name"],))
            if fetchone(cur):
                continue
            cur.execute(
                """
                INSERT INTO schedule_templates(
                    template_name, entry_time, exit_time, weekdays, description, kind, required_role, is_active
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,1)
                """,
                (
                    t["name"],
                    parse_hhmm(str(t["entry"])),
                    parse_hhmm(str(t["exit"])),
                    weekdays_to_column(require_weekdays(t["weekdays"])),  # type: ignore[arg-type]
                    t.get("description"),
                    TemplateKind(t.get("kind", "standard")).value,
                    t.get("required_role"),
                ),
            )
            added += 1
    if added:
        logger.info("Seeded %s schedule templates", added)
    return added


def ensure_system_admin(db_config: dict, *, email: str, password: Optional[str]) -> bool:
    """Create the system administrator account if it does not exist."""
    with db_cursor(_factory(db_config)) as (_, cur):
        cur.execute("SELECT employee_id FROM employees WHERE email=%s", (email.lower(),))
        if fetchone(cur):
            return False
        if not password:
            logger.warning("SYSTEM_ADMIN_PASSWORD is not set; %s was not created", email)
            return False

        cur.execute(
            "SELECT role_id FROM roles WHERE permission_tag=%s ORDER BY role_id LIMIT 1",
            (PermissionTag.ADMIN.value,),
        )
        role = fetchone(cur)
        cur.execute(
            """
            INSERT INTO employees(first_name, last_name, email, password_hash, role_id, hired_on)
            VALUES(%s,%s,%s,%s,%s,CURDATE())
            """,
            ("Administrador", "Sistema", email.lower(), generate_password_hash(password), role["role_id"] if role else None),
        )
    logger.info("System administrator %s created", email)
    return True


def list_tables(db_config: dict) -> list[str]:
    with db_cursor(_factory(db_config), dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
