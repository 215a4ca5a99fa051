from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..assignments.model import NewAssignment
from ..assignments.repository import AssignmentRepository
from ..common.datetime_utils import current_week, now_local
from ..common.permissions import Identity, require_admin
from ..core.constants import DEFAULT_SYSTEM_ADMIN_EMAIL
from ..core.enums import TemplateKind
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from ..schedules.repository import ScheduleTemplateRepository
from .planner import RotationPlan, RotationSlot, eligible_employees, plan_rotation

logger = logging.getLogger(__name__)

ROTATING_KINDS = (TemplateKind.ROTATION, TemplateKind.PART_TIME)


@dataclass(frozen=True)
class RotationResult:
    assignments_made: int
    employees_considered: int
    templates_considered: int
    slots: tuple[RotationSlot, ...]

    def to_dict(self) -> dict:
        return {
            "totalAsignaciones": self.assignments_made,
            "empleados": self.employees_considered,
            "horarios": self.templates_considered,
            "distribucion": [s.to_dict() for s in self.slots],
        }


class RotationService:
    """Admin use cases around the weekly rotation."""

    def __init__(
        self,
        employees: EmployeeRepository,
        templates: ScheduleTemplateRepository,
        assignments: AssignmentRepository,
        *,
        system_admin_email: str = DEFAULT_SYSTEM_ADMIN_EMAIL,
    ):
        self._employees = employees
        self._templates = templates
        self._assignments = assignments
        self._excluded = (system_admin_email,)

    def _plan(self, today: date) -> RotationPlan:
        employees = self._employees.list_all(active_only=True)
        templates = self._templates.list_all(active_only=True, kinds=ROTATING_KINDS)
        plan = plan_rotation(employees, templates, current_week(today), self._excluded)
        for slot in plan.unfilled_slots:
            logger.warning(
                "No employee available for %s (requires %s)", slot.template_name, slot.required_role or "part time"
            )
        return plan

    def preview(self, actor: Identity, today: Optional[date] = None) -> RotationPlan:
        require_admin(actor)
        return self._plan(today or now_local().date())

    def execute(self, actor: Identity, today: Optional[date] = None) -> RotationResult:
        require_admin(actor)
        today = today or now_local().date()
        plan = self._plan(today)
        if plan.employees_considered == 0:
            raise ValidationError("No hay empleados activos para asignar horarios")

        rows = [NewAssignment(employee_id=s.employee_id, template_id=s.template_id) for s in plan.filled_slots]
        made = self._assignments.replace_all_active(rows, start_date=today)
        logger.info(
            "Rotation executed for week %s: %s assignments, %s employees, %s templates",
            plan.week,
            made,
            plan.employees_considered,
            plan.templates_considered,
        )
        return RotationResult(
            assignments_made=made,
            employees_considered=plan.employees_considered,
            templates_considered=plan.templates_considered,
            slots=plan.slots,
        )

    def reset(self, actor: Identity) -> int:
        require_admin(actor)
        count = self._assignments.deactivate_all()
        logger.info("Rotation reset: %s assignments deactivated", count)
        return count

    def stats(self, actor: Identity, today: Optional[date] = None) -> dict:
        require_admin(actor)
        today = today or now_local().date()
        employees = eligible_employees(self._employees.list_all(active_only=True), self._excluded)
        templates = self._templates.list_all(active_only=True, kinds=ROTATING_KINDS)
        active = self._assignments.count_active()
        return {
            "empleadosActivos": len(employees),
            "horariosDisponibles": len(templates),
            "asignacionesActivas": active,
            "semanaActual": current_week(today),
            "promedioEmpleadosPorHorario": round(active / len(templates), 2) if templates else 0,
        }
