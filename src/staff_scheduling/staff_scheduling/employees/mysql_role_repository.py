from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.enums import PermissionTag
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.guards import insert_if_absent
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .role_model import Role, RolePatch
from .role_repository import RoleRepository

_SELECT = "SELECT role_id, role_name, permission_tag, description, base_salary FROM roles"

_DUPLICATE_NAME = "Ya existe un rol con ese nombre"


def _to_role(r: dict) -> Role:
    salary = r.get("base_salary")
    return Role(
        role_id=int(r["role_id"]),
        name=r["role_name"],
        permission_tag=PermissionTag(r.get("permission_tag") or PermissionTag.EMPLOYEE.value),
        description=r.get("description"),
        base_salary=float(salary) if salary is not None else None,
    )


def _count(cur, query: str, params: tuple) -> int:
    cur.execute(query, params)
    row = fetchone(cur) or {"total": 0}
    return int(row["total"] or 0)


class MySQLRoleRepository(RoleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Role]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY role_name")
            return [_to_role(r) for r in fetchall(cur)]

    def get_by_id(self, role_id: int) -> Optional[Role]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE role_id=%s", (int(role_id),))
            r = fetchone(cur)
            return _to_role(r) if r else None

    def get_by_name(self, name: str) -> Optional[Role]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE role_name=%s", (name,))
            r = fetchone(cur)
            return _to_role(r) if r else None

    def create(
        self,
        *,
        name: str,
        permission_tag: PermissionTag,
        description: Optional[str],
        base_salary: Optional[float],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return insert_if_absent(
                cur,
                table="roles",
                id_column="role_id",
                key={"role_name": name},
                values={
                    "permission_tag": permission_tag.value,
                    "description": description,
                    "base_salary": base_salary,
                },
                conflict_message=_DUPLICATE_NAME,
            )

    def update(self, role_id: int, patch: RolePatch) -> bool:
        columns = patch.to_columns()
        if not columns:
            return False
        assignments = ", ".join(f"{col}=%s" for col in columns)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT role_name FROM roles WHERE role_id=%s FOR UPDATE", (int(role_id),))
            current = fetchone(cur)
            if not current:
                return False
            try:
                cur.execute(f"UPDATE roles SET {assignments} WHERE role_id=%s", (*columns.values(), int(role_id)))
            except mysql.connector.IntegrityError as exc:
                raise ConflictError(_DUPLICATE_NAME) from exc
            if patch.name is not None and patch.name != current["role_name"]:
                # templates reference roles by name
                cur.execute(
                    "UPDATE schedule_templates SET required_role=%s WHERE required_role=%s",
                    (patch.name, current["role_name"]),
                )
            return True

    def delete(self, role_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT role_name FROM roles WHERE role_id=%s FOR UPDATE", (int(role_id),))
            current = fetchone(cur)
            if not current:
                return False
            if _count(cur, "SELECT COUNT(*) AS total FROM employees WHERE role_id=%s", (int(role_id),)):
                raise ConflictError("No se puede eliminar el rol porque hay empleados asignados a él")
            if _count(
                cur,
                "SELECT COUNT(*) AS total FROM schedule_templates WHERE required_role=%s AND is_active=1",
                (current["role_name"],),
            ):
                raise ConflictError("No se puede eliminar el rol porque hay horarios activos que lo requieren")
            cur.execute("DELETE FROM roles WHERE role_id=%s", (int(role_id),))
            return True
