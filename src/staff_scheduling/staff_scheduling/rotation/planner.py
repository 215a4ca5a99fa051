"""Deterministic weekly rotation of employees across role-tagged templates.

The planner is pure: the same roster, templates and week always produce the
same plan, so preview and execute agree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from ..core.enums import TemplateKind
from ..employees.model import Employee
from ..schedules.model import ScheduleTemplate


@dataclass(frozen=True)
class RotationSlot:
    template_id: int
    template_name: str
    required_role: Optional[str]
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None

    @property
    def is_filled(self) -> bool:
        return self.employee_id is not None

    def to_dict(self) -> dict:
        return {
            "horario_id": self.template_id,
            "horario": self.template_name,
            "rol_requerido": self.required_role,
            "empleado_id": self.employee_id,
            "empleado": self.employee_name,
        }


@dataclass(frozen=True)
class RotationPlan:
    week: int
    slots: tuple[RotationSlot, ...] = field(default=())
    employees_considered: int = 0
    templates_considered: int = 0

    @property
    def filled_slots(self) -> tuple[RotationSlot, ...]:
        return tuple(s for s in self.slots if s.is_filled)

    @property
    def unfilled_slots(self) -> tuple[RotationSlot, ...]:
        return tuple(s for s in self.slots if not s.is_filled)

    def to_dict(self) -> dict:
        return {
            "semana": self.week,
            "empleados": self.employees_considered,
            "horarios": self.templates_considered,
            "asignaciones": [s.to_dict() for s in self.slots],
            "sin_cubrir": [s.template_name for s in self.unfilled_slots],
        }


def eligible_employees(employees: Iterable[Employee], excluded_emails: Iterable[str]) -> list[Employee]:
    """Active employees minus excluded accounts, ordered by id."""
    excluded = {e.lower() for e in excluded_emails}
    return sorted(
        (e for e in employees if e.is_active and e.email.lower() not in excluded),
        key=lambda e: e.employee_id,
    )


def plan_rotation(
    employees: Iterable[Employee],
    templates: Sequence[ScheduleTemplate],
    week: int,
    excluded_emails: Iterable[str] = (),
) -> RotationPlan:
    roster = eligible_employees(employees, excluded_emails)

    buckets: dict[str, list[Employee]] = {}
    part_timers: list[Employee] = []
    for employee in roster:
        if employee.is_part_time:
            part_timers.append(employee)
        elif employee.role_name:
            buckets.setdefault(employee.role_name, []).append(employee)

    active = sorted((t for t in templates if t.is_active), key=lambda t: t.template_id)
    rotation_templates = [t for t in active if t.kind == TemplateKind.ROTATION]
    weekend_templates = [t for t in active if t.kind == TemplateKind.PART_TIME]

    slots: list[RotationSlot] = []
    for position, template in enumerate(rotation_templates):
        bucket = buckets.get(template.required_role or "", [])
        if not bucket:
            slots.append(RotationSlot(template.template_id, template.name, template.required_role))
            continue
        chosen = bucket[(week + position) % len(bucket)]
        slots.append(
            RotationSlot(
                template.template_id,
                template.name,
                template.required_role,
                employee_id=chosen.employee_id,
                employee_name=chosen.full_name,
            )
        )

    for template in weekend_templates:
        if not part_timers:
            slots.append(RotationSlot(template.template_id, template.name, template.required_role))
        for employee in part_timers:
            slots.append(
                RotationSlot(
                    template.template_id,
                    template.name,
                    template.required_role,
                    employee_id=employee.employee_id,
                    employee_name=employee.full_name,
                )
            )

    return RotationPlan(
        week=week,
        slots=tuple(slots),
        employees_considered=len(roster),
        templates_considered=len(rotation_templates) + len(weekend_templates),
    )
