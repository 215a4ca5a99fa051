from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.guards import replace_active
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date, normalize_mysql_time
from .model import Assignment, NewAssignment
from .repository import AssignmentRepository

_SELECT = """
    SELECT a.assignment_id, a.employee_id, a.template_id, a.start_date, a.end_date,
           a.is_active, a.created_at, t.template_name, t.entry_time, t.exit_time
    FROM employee_schedules a
    JOIN schedule_templates t ON t.template_id = a.template_id
"""


def _to_assignment(r: dict) -> Assignment:
    return Assignment(
        assignment_id=int(r["assignment_id"]),
        employee_id=int(r["employee_id"]),
        template_id=int(r["template_id"]),
        start_date=normalize_mysql_date(r["start_date"]),
        end_date=normalize_mysql_date(r.get("end_date")),
        is_active=bool(r.get("is_active")),
        template_name=r.get("template_name"),
        entry_time=normalize_mysql_time(r.get("entry_time")),
        exit_time=normalize_mysql_time(r.get("exit_time")),
        created_at=r.get("created_at"),
    )


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def assign(
        self,
        *,
        employee_id: int,
        template_id: int,
        start_date: date,
        end_date: Optional[date] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return replace_active(
                cur,
                table="employee_schedules",
                id_column="assignment_id",
                key={"employee_id": int(employee_id)},
                values={"template_id": int(template_id), "start_date": start_date, "end_date": end_date},
            )

    def deactivate_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employee_schedules SET is_active=0 WHERE is_active=1")
            return int(cur.rowcount or 0)

    def replace_all_active(self, rows: Sequence[NewAssignment], *, start_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT assignment_id FROM employee_schedules WHERE is_active=1 FOR UPDATE")
            cur.fetchall()
            cur.execute("UPDATE employee_schedules SET is_active=0 WHERE is_active=1")
            if rows:
                cur.executemany(
                    """
                    INSERT INTO employee_schedules(employee_id, template_id, start_date, end_date, is_active)
                    VALUES(%s,%s,%s,NULL,1)
                    """,
                    [(int(r.employee_id), int(r.template_id), start_date) for r in rows],
                )
            return len(rows)

    def list_active_for_employee(self, employee_id: int) -> Sequence[Assignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE a.employee_id=%s AND a.is_active=1 ORDER BY a.assignment_id",
                (int(employee_id),),
            )
            return [_to_assignment(r) for r in fetchall(cur)]

    def history_for_employee(self, employee_id: int) -> Sequence[Assignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE a.employee_id=%s ORDER BY a.start_date DESC, a.assignment_id DESC",
                (int(employee_id),),
            )
            return [_to_assignment(r) for r in fetchall(cur)]

    def count_active(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM employee_schedules WHERE is_active=1")
            row = fetchone(cur) or {"total": 0}
            return int(row["total"] or 0)
