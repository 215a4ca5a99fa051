"""Per-employee weekly schedules built day by day.

Each day is measured with overnight wrap; days longer than the meal-break
threshold lose the meal break, and the week must stay within the legal
ceiling before anything is stored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import format_hhmm, now_local, parse_hhmm, shift_hours
from ..common.permissions import Identity, require_admin
from ..core.constants import MAX_WEEKLY_HOURS, MEAL_BREAK_HOURS, MEAL_BREAK_THRESHOLD_HOURS, WEEKDAY_NAMES
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import DayWindow
from .repository import CustomScheduleRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayBreakdown:
    weekday: int
    entry_time: time
    exit_time: time
    raw_hours: float
    meal_break_hours: float

    @property
    def worked_hours(self) -> float:
        return self.raw_hours - self.meal_break_hours

    def to_dict(self) -> dict:
        return {
            "dia": self.weekday,
            "dia_nombre": WEEKDAY_NAMES[self.weekday],
            "hora_entrada": format_hhmm(self.entry_time),
            "hora_salida": format_hhmm(self.exit_time),
            "horas_brutas": round(self.raw_hours, 2),
            "colacion": round(self.meal_break_hours, 2),
            "horas_trabajadas": round(self.worked_hours, 2),
        }


@dataclass(frozen=True)
class WeeklyBreakdown:
    days: tuple[DayBreakdown, ...]

    @property
    def total_raw_hours(self) -> float:
        return sum(d.raw_hours for d in self.days)

    @property
    def total_meal_break_hours(self) -> float:
        return sum(d.meal_break_hours for d in self.days)

    @property
    def total_worked_hours(self) -> float:
        return self.total_raw_hours - self.total_meal_break_hours

    @property
    def within_limit(self) -> bool:
        return self.total_worked_hours <= MAX_WEEKLY_HOURS

    @property
    def weekdays(self) -> tuple[int, ...]:
        return tuple(sorted(d.weekday for d in self.days))

    def to_dict(self) -> dict:
        return {
            "dias": [d.to_dict() for d in self.days],
            "total_horas_brutas": round(self.total_raw_hours, 2),
            "total_colacion": round(self.total_meal_break_hours, 2),
            "total_horas_trabajadas": round(self.total_worked_hours, 2),
            "limite_semanal": MAX_WEEKLY_HOURS,
            "dentro_del_limite": self.within_limit,
        }


@dataclass(frozen=True)
class CustomSchedule:
    template_id: int
    assignment_id: int
    name: str
    employee_id: int
    start_date: date
    breakdown: WeeklyBreakdown

    def to_dict(self) -> dict:
        return {
            "horario_id": self.template_id,
            "asignacion_id": self.assignment_id,
            "nombre": self.name,
            "empleado_id": self.employee_id,
            "fecha_inicio": self.start_date.isoformat(),
            **self.breakdown.to_dict(),
        }


def _parse_entry(raw: Mapping[str, object], position: int) -> tuple[int, time, time]:
    label = f"Día {position + 1}"
    try:
        weekday = int(raw.get("dia"))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationError(f"{label}: el día de la semana debe ser un número del 0 al 6")
    if weekday < 0 or weekday > 6:
        raise ValidationError(f"{label}: el día de la semana debe ser un número del 0 al 6")
    entry = parse_hhmm(str(raw.get("hora_entrada") or ""), f"{label}: hora de entrada")
    exit_ = parse_hhmm(str(raw.get("hora_salida") or ""), f"{label}: hora de salida")
    return weekday, entry, exit_


class CustomScheduleBuilder:
    def __init__(self, schedules: CustomScheduleRepository, employees: EmployeeRepository):
        self._schedules = schedules
        self._employees = employees

    def evaluate(self, entries: Iterable[Mapping[str, object]]) -> WeeklyBreakdown:
        """Validate entries and compute the weekly breakdown without saving."""
        items = list(entries or [])
        if not items:
            raise ValidationError("Debe indicar al menos un día de trabajo")

        seen: set[int] = set()
        days: list[DayBreakdown] = []
        for position, raw in enumerate(items):
            if not isinstance(raw, Mapping):
                raise ValidationError(f"Día {position + 1}: formato no válido")
            weekday, entry, exit_ = _parse_entry(raw, position)
            if weekday in seen:
                raise ValidationError(f"El día {WEEKDAY_NAMES[weekday]} está repetido")
            seen.add(weekday)

            raw_hours = shift_hours(entry, exit_)
            meal = MEAL_BREAK_HOURS if raw_hours > MEAL_BREAK_THRESHOLD_HOURS else 0.0
            days.append(DayBreakdown(weekday, entry, exit_, raw_hours, meal))

        return WeeklyBreakdown(days=tuple(days))

    def build(
        self,
        actor: Identity,
        *,
        employee_id: int,
        entries: Sequence[Mapping[str, object]],
        name: Optional[str] = None,
        start_date: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> CustomSchedule:
        require_admin(actor)
        breakdown = self.evaluate(entries)
        if not breakdown.within_limit:
            raise ValidationError(
                f"El horario supera las {MAX_WEEKLY_HOURS:g} horas semanales "
                f"({breakdown.total_worked_hours:.2f} horas)"
            )

        employee = self._employees.get_by_id(int(employee_id))
        if not employee or not employee.is_active:
            raise NotFoundError("Empleado no encontrado o inactivo")

        now = now or now_local()
        start = start_date or now.date()
        first = breakdown.days[0]
        template_name = (name or "").strip() or (
            f"Personalizado {employee.full_name} {now.strftime('%Y%m%d%H%M%S')}"
        )
        description = f"Horario personalizado de {employee.full_name} ({breakdown.total_worked_hours:.2f} h/semana)"

        template_id, assignment_id = self._schedules.save_custom(
            employee_id=employee.employee_id,
            name=template_name,
            entry_time=first.entry_time,
            exit_time=first.exit_time,
            weekdays=breakdown.weekdays,
            description=description,
            day_windows=[DayWindow(d.weekday, d.entry_time, d.exit_time) for d in breakdown.days],
            start_date=start,
        )
        logger.info(
            "Custom schedule %s (%.2fh) assigned to employee %s",
            template_id,
            breakdown.total_worked_hours,
            employee.employee_id,
        )
        return CustomSchedule(
            template_id=template_id,
            assignment_id=assignment_id,
            name=template_name,
            employee_id=employee.employee_id,
            start_date=start,
            breakdown=breakdown,
        )
