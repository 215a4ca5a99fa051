from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import TemplateKind
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.guards import replace_active
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    normalize_mysql_time,
    weekdays_from_column,
    weekdays_to_column,
)
from .model import DayWindow, ScheduleTemplate, ScheduleTemplatePatch, TemplateRemoval
from .repository import CustomScheduleRepository, ScheduleTemplateRepository

_COLUMNS = """
    template_id, template_name, entry_time, exit_time, weekdays,
    description, kind, required_role, is_active
"""

_DUPLICATE_NAME = "Ya existe un horario con ese nombre"
_IN_USE = "No se puede desactivar el horario porque hay empleados asignados a él"


def _active_assignments(cur, template_id: int) -> int:
    cur.execute(
        "SELECT COUNT(*) AS active FROM employee_schedules WHERE template_id=%s AND is_active=1",
        (int(template_id),),
    )
    row = fetchone(cur) or {"active": 0}
    return int(row["active"] or 0)


def _load_windows(cur, template_ids: Sequence[int]) -> dict[int, tuple[DayWindow, ...]]:
    if not template_ids:
        return {}
    marks = ", ".join(["%s"] * len(template_ids))
    cur.execute(
        f"""
        SELECT template_id, weekday, entry_time, exit_time
        FROM schedule_template_days
        WHERE template_id IN ({marks})
        ORDER BY template_id, weekday
        """,
        tuple(int(t) for t in template_ids),
    )
    out: dict[int, list[DayWindow]] = {}
    for r in fetchall(cur):
        out.setdefault(int(r["template_id"]), []).append(
            DayWindow(
                weekday=int(r["weekday"]),
                entry_time=normalize_mysql_time(r["entry_time"]),
                exit_time=normalize_mysql_time(r["exit_time"]),
            )
        )
    return {k: tuple(v) for k, v in out.items()}


def _to_template(r: dict, windows: tuple[DayWindow, ...] = ()) -> ScheduleTemplate:
    return ScheduleTemplate(
        template_id=int(r["template_id"]),
        name=r["template_name"],
        entry_time=normalize_mysql_time(r["entry_time"]),
        exit_time=normalize_mysql_time(r["exit_time"]),
        weekdays=weekdays_from_column(r["weekdays"]),
        description=r.get("description"),
        kind=TemplateKind(r.get("kind") or TemplateKind.STANDARD.value),
        required_role=r.get("required_role"),
        is_active=bool(r.get("is_active", True)),
        day_windows=windows,
    )


class MySQLScheduleTemplateRepository(ScheduleTemplateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_where(self, clause: str, params: tuple) -> Optional[ScheduleTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM schedule_templates WHERE {clause}", params)
            r = fetchone(cur)
            if not r:
                return None
            windows = _load_windows(cur, [int(r["template_id"])])
            return _to_template(r, windows.get(int(r["template_id"]), ()))

    def get_by_id(self, template_id: int) -> Optional[ScheduleTemplate]:
        return self._get_where("template_id=%s", (int(template_id),))

    def get_by_name(self, name: str) -> Optional[ScheduleTemplate]:
        return self._get_where("template_name=%s", (name,))

    def list_all(
        self,
        *,
        active_only: bool = False,
        kinds: Optional[Sequence[TemplateKind]] = None,
    ) -> Sequence[ScheduleTemplate]:
        clauses = ["1=1"]
        params: list[object] = []
        if active_only:
            clauses.append("is_active=1")
        if kinds:
            clauses.append(f"kind IN ({', '.join(['%s'] * len(kinds))})")
            params.extend(k.value for k in kinds)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM schedule_templates WHERE {' AND '.join(clauses)} ORDER BY template_id",
                tuple(params),
            )
            rows = fetchall(cur)
            windows = _load_windows(cur, [int(r["template_id"]) for r in rows])
            return [_to_template(r, windows.get(int(r["template_id"]), ())) for r in rows]

    def create(
        self,
        *,
        name: str,
        entry_time: time,
        exit_time: time,
        weekdays: Sequence[int],
        description: Optional[str],
        kind: TemplateKind,
        required_role: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO schedule_templates(
                        template_name, entry_time, exit_time, weekdays, description, kind, required_role, is_active
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,1)
                    """,
                    (name, entry_time, exit_time, weekdays_to_column(weekdays), description, kind.value, required_role),
                )
            except mysql.connector.IntegrityError as exc:
                raise ConflictError(_DUPLICATE_NAME) from exc
            return int(cur.lastrowid)

    def update(self, template_id: int, patch: ScheduleTemplatePatch) -> bool:
        columns = patch.to_columns()
        if not columns:
            return False
        assignments = ", ".join(f"{col}=%s" for col in columns)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT template_id FROM schedule_templates WHERE template_id=%s FOR UPDATE", (int(template_id),))
            if not fetchone(cur):
                return False
            if patch.is_active is False and _active_assignments(cur, template_id):
                raise ConflictError(_IN_USE)
            try:
                cur.execute(
                    f"UPDATE schedule_templates SET {assignments} WHERE template_id=%s",
                    (*columns.values(), int(template_id)),
                )
            except mysql.connector.IntegrityError as exc:
                raise ConflictError(_DUPLICATE_NAME) from exc
            return True

    def remove(self, template_id: int) -> TemplateRemoval:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT template_id FROM schedule_templates WHERE template_id=%s FOR UPDATE", (int(template_id),))
            if not fetchone(cur):
                return TemplateRemoval.NOT_FOUND

            cur.execute(
                """
                SELECT COUNT(*) AS total, COALESCE(SUM(is_active), 0) AS active
                FROM employee_schedules
                WHERE template_id=%s
                """,
                (int(template_id),),
            )
            counts = fetchone(cur) or {"total": 0, "active": 0}
            if int(counts["active"] or 0) > 0:
                return TemplateRemoval.REFERENCED
            if int(counts["total"] or 0) > 0:
                cur.execute("UPDATE schedule_templates SET is_active=0 WHERE template_id=%s", (int(template_id),))
                return TemplateRemoval.DEACTIVATED

            cur.execute("DELETE FROM schedule_templates WHERE template_id=%s", (int(template_id),))
            return TemplateRemoval.DELETED


class MySQLCustomScheduleRepository(CustomScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save_custom(
        self,
        *,
        employee_id: int,
        name: str,
        entry_time: time,
        exit_time: time,
        weekdays: Sequence[int],
        description: str,
        day_windows: Sequence[DayWindow],
        start_date: date,
    ) -> tuple[int, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO schedule_templates(
                        template_name, entry_time, exit_time, weekdays, description, kind, required_role, is_active
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,NULL,1)
                    """,
                    (name, entry_time, exit_time, weekdays_to_column(weekdays), description, TemplateKind.CUSTOM.value),
                )
            except mysql.connector.IntegrityError as exc:
                raise ConflictError(_DUPLICATE_NAME) from exc
            template_id = int(cur.lastrowid)

            cur.executemany(
                """
                INSERT INTO schedule_template_days(template_id, weekday, entry_time, exit_time)
                VALUES(%s,%s,%s,%s)
                """,
                [(template_id, w.weekday, w.entry_time, w.exit_time) for w in day_windows],
            )

            assignment_id = replace_active(
                cur,
                table="employee_schedules",
                id_column="assignment_id",
                key={"employee_id": int(employee_id)},
                values={"template_id": template_id, "start_date": start_date, "end_date": None},
            )
            return template_id, assignment_id
