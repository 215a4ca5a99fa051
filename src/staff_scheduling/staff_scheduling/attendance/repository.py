from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceState
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

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
        """Insert the day's record. Raises ConflictError if one already exists."""

        raise NotImplementedError

    def record_exit(
        self,
        *,
        attendance_id: int,
        exit_time: datetime,
        worked_hours: float,
        notes: Optional[str] = None,
    ) -> bool:
        """Set the exit once. Returns False if the exit was already recorded."""

        raise NotImplementedError

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records between both dates inclusive, newest first."""

        raise NotImplementedError
