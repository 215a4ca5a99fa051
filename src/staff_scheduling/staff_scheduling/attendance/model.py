from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from ..core.enums import AttendanceState


@dataclass(frozen=True)
class AttendanceRecord:
    """One employee's attendance on one calendar date."""

    attendance_id: int
    employee_id: int
    work_date: date
    entry_time: Optional[datetime]
    exit_time: Optional[datetime] = None
    worked_hours: Optional[float] = None
    state: AttendanceState = AttendanceState.PRESENT
    notes: Optional[str] = None
    ip_address: Optional[str] = None
    location: Optional[str] = None
    employee_name: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.exit_time is not None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "empleado_id": self.employee_id,
            "empleado": self.employee_name,
            "fecha": self.work_date.isoformat(),
            "hora_entrada": self.entry_time.strftime("%H:%M:%S") if self.entry_time else None,
            "hora_salida": self.exit_time.strftime("%H:%M:%S") if self.exit_time else None,
            "horas_trabajadas": round(self.worked_hours, 2) if self.worked_hours is not None else None,
            "estado": self.state.value,
            "observaciones": self.notes,
            "ubicacion": self.location,
        }


def _round2(value: float) -> float:
    return math.floor(value * 100 + 0.5) / 100


@dataclass(frozen=True)
class AttendanceStats:
    total_days: int = 0
    present_days: int = 0
    absent_days: int = 0
    total_hours: float = 0.0
    average_hours: float = 0.0
    attendance_percentage: int = 0

    @classmethod
    def from_records(cls, records: Iterable[AttendanceRecord]) -> "AttendanceStats":
        items = list(records)
        total = len(items)
        present = sum(1 for r in items if r.state == AttendanceState.PRESENT)
        absent = sum(1 for r in items if r.state == AttendanceState.ABSENT)
        hours = sum(r.worked_hours or 0.0 for r in items)
        return cls(
            total_days=total,
            present_days=present,
            absent_days=absent,
            total_hours=_round2(hours),
            average_hours=_round2(hours / present) if present else 0.0,
            attendance_percentage=math.floor(present * 100 / total + 0.5) if total else 0,
        )

    def as_dict(self) -> dict:
        return {
            "totalDias": self.total_days,
            "diasPresentes": self.present_days,
            "diasAusentes": self.absent_days,
            "totalHoras": self.total_hours,
            "promedioHoras": self.average_hours,
            "porcentajeAsistencia": self.attendance_percentage,
        }
