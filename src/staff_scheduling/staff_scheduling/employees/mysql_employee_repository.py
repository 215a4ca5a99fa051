from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.enums import EmploymentType, PermissionTag
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee, EmployeePatch
from .repository import EmployeeRepository

_SELECT = """
    SELECT e.employee_id, e.first_name, e.last_name, e.email, e.phone, e.password_hash,
           e.role_id, r.role_name, r.permission_tag,
           e.employment_type, e.is_active, e.meal_break_minutes
    FROM employees e
    LEFT JOIN roles r ON r.role_id = e.role_id
"""

_DUPLICATE_EMAIL = "Ya existe un empleado con ese email"


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        phone=row.get("phone"),
        password_hash=row["password_hash"],
        role_id=int(row["role_id"]) if row.get("role_id") is not None else None,
        role_name=row.get("role_name"),
        permission_tag=PermissionTag(row.get("permission_tag") or PermissionTag.EMPLOYEE.value),
        employment_type=EmploymentType(row.get("employment_type") or EmploymentType.STANDARD.value),
        is_active=bool(row.get("is_active", True)),
        meal_break_minutes=int(row.get("meal_break_minutes") or 0),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE e.employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE e.email=%s", (email,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_all(self, *, active_only: bool = False) -> Sequence[Employee]:
        where = "WHERE e.is_active=1" if active_only else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where} ORDER BY e.employee_id")
            return [_to_employee(r) for r in fetchall(cur)]

    def list_by_role(self, role_id: int) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE e.role_id=%s ORDER BY e.last_name, e.first_name", (int(role_id),))
            return [_to_employee(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        phone: Optional[str],
        password_hash: str,
        role_id: int,
        employment_type: EmploymentType,
        meal_break_minutes: int,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO employees(
                        first_name, last_name, email, phone, password_hash,
                        role_id, employment_type, meal_break_minutes, is_active, hired_on
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,1,CURDATE())
                    """,
                    (
                        first_name,
                        last_name,
                        email,
                        phone,
                        password_hash,
                        int(role_id),
                        employment_type.value,
                        int(meal_break_minutes),
                    ),
                )
            except mysql.connector.IntegrityError as exc:
                raise ConflictError(_DUPLICATE_EMAIL) from exc
            return int(cur.lastrowid)

    def update(self, employee_id: int, patch: EmployeePatch) -> bool:
        columns = patch.to_columns()
        if not columns:
            return False
        assignments = ", ".join(f"{col}=%s" for col in columns)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT employee_id FROM employees WHERE employee_id=%s FOR UPDATE", (int(employee_id),))
            if not fetchone(cur):
                return False
            try:
                cur.execute(
                    f"UPDATE employees SET {assignments} WHERE employee_id=%s",
                    (*columns.values(), int(employee_id)),
                )
            except mysql.connector.IntegrityError as exc:
                raise ConflictError(_DUPLICATE_EMAIL) from exc
            return True
