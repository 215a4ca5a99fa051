from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import hours_between, now_local
from ..common.permissions import Identity, require_admin, require_self_or_admin
from ..core.constants import DEFAULT_HISTORY_DAYS
from ..core.enums import AttendanceState
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import AttendanceRecord, AttendanceStats
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Clock-in/clock-out recorder and attendance statistics.

    A day moves from no record, to entry recorded, to complete. Clock-out
    must happen on the clock-in date; shifts that cross midnight are not
    wrapped.
    """

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def _range(
        self, start: Optional[date], end: Optional[date], now: Optional[datetime]
    ) -> tuple[date, date]:
        today = (now or now_local()).date()
        end = end or today
        start = start or (end - timedelta(days=DEFAULT_HISTORY_DAYS))
        if end < start:
            raise ValidationError("La fecha de fin no puede ser anterior a la fecha de inicio")
        return start, end

    def clock_in(
        self,
        actor: Identity,
        *,
        ip_address: Optional[str] = None,
        location: Optional[str] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        if self._attendance.get_for_employee_and_date(actor.employee_id, today):
            raise ConflictError("Ya registraste tu entrada hoy")

        attendance_id = self._attendance.create_entry(
            employee_id=actor.employee_id,
            work_date=today,
            entry_time=now,
            state=AttendanceState.PRESENT,
            notes=notes,
            ip_address=ip_address,
            location=location,
        )
        logger.info("Employee %s clocked in at %s", actor.employee_id, now.isoformat(timespec="seconds"))
        return AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=actor.employee_id,
            work_date=today,
            entry_time=now,
            notes=notes,
            ip_address=ip_address,
            location=location,
        )

    def clock_out(
        self,
        actor: Identity,
        *,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        record = self._attendance.get_for_employee_and_date(actor.employee_id, today)
        if not record or record.entry_time is None:
            raise NotFoundError("No hay registro de entrada para hoy")
        if record.exit_time is not None:
            raise ConflictError("Ya registraste tu salida hoy")

        worked = hours_between(record.entry_time, now)
        if not self._attendance.record_exit(
            attendance_id=record.attendance_id, exit_time=now, worked_hours=worked, notes=notes
        ):
            raise ConflictError("Ya registraste tu salida hoy")

        logger.info("Employee %s clocked out after %.2fh", actor.employee_id, worked)
        return AttendanceRecord(
            attendance_id=record.attendance_id,
            employee_id=record.employee_id,
            work_date=record.work_date,
            entry_time=record.entry_time,
            exit_time=now,
            worked_hours=worked,
            state=record.state,
            notes=notes or record.notes,
            ip_address=record.ip_address,
            location=record.location,
        )

    def statistics(
        self,
        actor: Identity,
        *,
        employee_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceStats:
        target = actor.employee_id if employee_id is None else int(employee_id)
        require_self_or_admin(actor, target)
        start, end = self._range(start, end, now)
        return AttendanceStats.from_records(
            self._attendance.list_range(start_date=start, end_date=end, employee_id=target)
        )

    def my_records(
        self,
        actor: Identity,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> tuple[Sequence[AttendanceRecord], AttendanceStats]:
        start, end = self._range(start, end, now)
        records = self._attendance.list_range(start_date=start, end_date=end, employee_id=actor.employee_id)
        return records, AttendanceStats.from_records(records)

    def list_records(
        self,
        actor: Identity,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_id: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> Sequence[AttendanceRecord]:
        require_admin(actor)
        start, end = self._range(start, end, now)
        return self._attendance.list_range(start_date=start, end_date=end, employee_id=employee_id)

    def record_absence(
        self,
        actor: Identity,
        *,
        employee_id: int,
        work_date: date,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        require_admin(actor)
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Empleado no encontrado")

        attendance_id = self._attendance.create_entry(
            employee_id=employee.employee_id,
            work_date=work_date,
            entry_time=None,
            state=AttendanceState.ABSENT,
            notes=notes,
        )
        logger.info("Absence recorded for employee %s on %s", employee.employee_id, work_date)
        return AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=employee.employee_id,
            work_date=work_date,
            entry_time=None,
            state=AttendanceState.ABSENT,
            notes=notes,
            employee_name=employee.full_name,
        )
