from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from enum import Enum
from typing import Optional

from ..common.datetime_utils import format_hhmm, shift_hours
from ..core.constants import WEEKDAY_NAMES
from ..core.enums import TemplateKind


@dataclass(frozen=True)
class DayWindow:
    """Hours worked on one weekday of a template (custom schedules)."""

    weekday: int
    entry_time: time
    exit_time: time

    @property
    def hours(self) -> float:
        return shift_hours(self.entry_time, self.exit_time)


@dataclass(frozen=True)
class ScheduleTemplate:
    """Reusable shift definition.

    ``weekdays`` uses 0=Domingo .. 6=Sábado. When ``day_windows`` is empty the
    entry/exit pair applies to every listed weekday.
    """

    template_id: int
    name: str
    entry_time: time
    exit_time: time
    weekdays: tuple[int, ...]
    description: Optional[str] = None
    kind: TemplateKind = TemplateKind.STANDARD
    required_role: Optional[str] = None
    is_active: bool = True
    day_windows: tuple[DayWindow, ...] = field(default=())

    @property
    def is_overnight(self) -> bool:
        return self.exit_time <= self.entry_time

    @property
    def duration_hours(self) -> float:
        return shift_hours(self.entry_time, self.exit_time)

    @property
    def weekday_names(self) -> list[str]:
        return [WEEKDAY_NAMES[d] for d in self.weekdays]

    def to_dict(self) -> dict:
        return {
            "id": self.template_id,
            "nombre": self.name,
            "hora_entrada": format_hhmm(self.entry_time),
            "hora_salida": format_hhmm(self.exit_time),
            "dias_semana": list(self.weekdays),
            "dias_semana_nombres": self.weekday_names,
            "descripcion": self.description or "",
            "tipo": self.kind.value,
            "rol_requerido": self.required_role,
            "activo": self.is_active,
            "duracion_horas": round(self.duration_hours, 2),
            "dias": [
                {
                    "dia": w.weekday,
                    "hora_entrada": format_hhmm(w.entry_time),
                    "hora_salida": format_hhmm(w.exit_time),
                }
                for w in self.day_windows
            ],
        }


@dataclass(frozen=True)
class ScheduleTemplatePatch:
    """Partial update for a template; ``None`` means "leave unchanged".

    An empty ``description`` or ``required_role`` clears the column.
    """

    name: Optional[str] = None
    entry_time: Optional[time] = None
    exit_time: Optional[time] = None
    weekdays: Optional[tuple[int, ...]] = None
    description: Optional[str] = None
    kind: Optional[TemplateKind] = None
    required_role: Optional[str] = None
    is_active: Optional[bool] = None

    def is_empty(self) -> bool:
        return not self.to_columns()

    def to_columns(self) -> dict[str, object]:
        """Column/value pairs for the fields that are present, in a fixed order."""
        columns: dict[str, object] = {}
        if self.name is not None:
            columns["template_name"] = self.name
        if self.entry_time is not None:
            columns["entry_time"] = self.entry_time
        if self.exit_time is not None:
            columns["exit_time"] = self.exit_time
        if self.weekdays is not None:
            columns["weekdays"] = ",".join(str(d) for d in self.weekdays)
        if self.description is not None:
            columns["description"] = self.description or None
        if self.kind is not None:
            columns["kind"] = self.kind.value
        if self.required_role is not None:
            columns["required_role"] = self.required_role or None
        if self.is_active is not None:
            columns["is_active"] = 1 if self.is_active else 0
        return columns


class TemplateRemoval(str, Enum):
    DELETED = "deleted"
    DEACTIVATED = "deactivated"
    REFERENCED = "referenced"
    NOT_FOUND = "not_found"
