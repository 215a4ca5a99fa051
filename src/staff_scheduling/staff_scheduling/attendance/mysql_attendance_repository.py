from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceState
from ..database.connection import DatabaseConnection
from ..database.guards import insert_if_absent
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT a.attendance_id, a.employee_id, a.work_date, a.entry_time, a.exit_time,
           a.worked_hours, a.state, a.notes, a.ip_address, a.location,
           CONCAT(e.first_name, ' ', e.last_name) AS employee_name
    FROM attendance_records a
    JOIN employees e ON e.employee_id = a.employee_id
"""


def _to_record(r: dict) -> AttendanceRecord:
    hours = r.get("worked_hours")
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=normalize_mysql_date(r["work_date"]),
        entry_time=r.get("entry_time"),
        exit_time=r.get("exit_time"),
        worked_hours=float(hours) if hours is not None else None,
        state=AttendanceState(r.get("state") or AttendanceState.PRESENT.value),
        notes=r.get("notes"),
        ip_address=r.get("ip_address"),
        location=r.get("location"),
        employee_name=r.get("employee_name"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE a.employee_id=%s AND a.work_date=%s", (int(employee_id), work_date))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_entry(
        self,
        *,
        employee_id: int,
        work_date: date,
        entry_time: Optional[datetime],
        state: AttendanceState,
        notes: Optional[str] = None,
        ip_address: Optional[str] = None,
        location: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return insert_if_absent(
                cur,
                table="attendance_records",
                id_column="attendance_id",
                key={"employee_id": int(employee_id), "work_date": work_date},
                values={
                    "entry_time": entry_time,
                    "state": state.value,
                    "notes": notes,
                    "ip_address": ip_address,
                    "location": location,
                },
                conflict_message="Ya existe un registro de asistencia para esta fecha",
            )

    def record_exit(
        self,
        *,
        attendance_id: int,
        exit_time: datetime,
        worked_hours: float,
        notes: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET exit_time=%s, worked_hours=%s, notes=COALESCE(%s, notes)
                WHERE attendance_id=%s AND exit_time IS NULL
                """,
                (exit_time, float(worked_hours), notes, int(attendance_id)),
            )
            return cur.rowcount > 0

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        query = _SELECT + " WHERE a.work_date BETWEEN %s AND %s"
        params: list[object] = [start_date, end_date]
        if employee_id is not None:
            query += " AND a.employee_id=%s"
            params.append(int(employee_id))
        query += " ORDER BY a.work_date DESC, a.entry_time DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(query, tuple(params))
            return [_to_record(r) for r in fetchall(cur)]
