from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveKind, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    """Vacation range or single day off awaiting an admin decision."""

    request_id: int
    employee_id: int
    kind: LeaveKind
    start_date: date
    end_date: date
    day_count: int
    status: RequestStatus = RequestStatus.PENDING
    reason: Optional[str] = None
    day_off_type: Optional[str] = None
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    admin_note: Optional[str] = None
    created_at: Optional[datetime] = None
    employee_name: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    def overlaps(self, start: date, end: date) -> bool:
        return self.start_date <= end and start <= self.end_date

    def to_dict(self) -> dict:
        data = {
            "id": self.request_id,
            "empleado_id": self.employee_id,
            "empleado": self.employee_name,
            "tipo_solicitud": self.kind.value,
            "estado": self.status.value,
            "motivo": self.reason,
            "comentario_admin": self.admin_note,
            "aprobado_por": self.decided_by,
            "fecha_respuesta": self.decided_at.isoformat(timespec="seconds") if self.decided_at else None,
            "fecha_solicitud": self.created_at.isoformat(timespec="seconds") if self.created_at else None,
        }
        if self.kind == LeaveKind.DAY_OFF:
            data.update({"fecha": self.start_date.isoformat(), "tipo": self.day_off_type})
        else:
            data.update(
                {
                    "fecha_inicio": self.start_date.isoformat(),
                    "fecha_fin": self.end_date.isoformat(),
                    "dias_solicitados": self.day_count,
                }
            )
        return data
