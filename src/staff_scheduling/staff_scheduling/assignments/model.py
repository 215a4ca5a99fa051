from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import format_hhmm


@dataclass(frozen=True)
class Assignment:
    """Dated link between an employee and a schedule template."""

    assignment_id: int
    employee_id: int
    template_id: int
    start_date: date
    end_date: Optional[date] = None
    is_active: bool = True
    template_name: Optional[str] = None
    entry_time: Optional[time] = None
    exit_time: Optional[time] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.assignment_id,
            "empleado_id": self.employee_id,
            "horario_id": self.template_id,
            "horario_nombre": self.template_name,
            "hora_entrada": format_hhmm(self.entry_time) if self.entry_time else None,
            "hora_salida": format_hhmm(self.exit_time) if self.exit_time else None,
            "fecha_inicio": self.start_date.isoformat(),
            "fecha_fin": self.end_date.isoformat() if self.end_date else None,
            "activo": self.is_active,
        }


@dataclass(frozen=True)
class NewAssignment:
    """Row to insert during a bulk rotation write."""

    employee_id: int
    template_id: int
