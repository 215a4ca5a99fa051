from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.permissions import Identity, require_admin, require_self_or_admin
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..schedules.repository import ScheduleTemplateRepository
from .model import Assignment
from .repository import AssignmentRepository

logger = logging.getLogger(__name__)


class AssignmentLedgerService:
    """Use case: link employees to templates, keeping one active link each."""

    def __init__(
        self,
        assignments: AssignmentRepository,
        templates: ScheduleTemplateRepository,
        employees: EmployeeRepository,
    ):
        self._assignments = assignments
        self._templates = templates
        self._employees = employees

    def assign(
        self,
        actor: Identity,
        *,
        employee_id: int,
        template_id: int,
        start_date: date,
        end_date: Optional[date] = None,
    ) -> Assignment:
        require_admin(actor)

        template = self._templates.get_by_id(int(template_id))
        if not template or not template.is_active:
            raise NotFoundError("Horario no encontrado o inactivo")
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or not employee.is_active:
            raise NotFoundError("Empleado no encontrado o inactivo")
        if end_date is not None and end_date < start_date:
            raise ValidationError("La fecha de fin no puede ser anterior a la fecha de inicio")

        assignment_id = self._assignments.assign(
            employee_id=employee.employee_id,
            template_id=template.template_id,
            start_date=start_date,
            end_date=end_date,
        )
        logger.info(
            "Template %s assigned to employee %s from %s", template.template_id, employee.employee_id, start_date
        )
        return Assignment(
            assignment_id=assignment_id,
            employee_id=employee.employee_id,
            template_id=template.template_id,
            start_date=start_date,
            end_date=end_date,
            is_active=True,
            template_name=template.name,
            entry_time=template.entry_time,
            exit_time=template.exit_time,
        )

    def list_active_for_employee(self, employee_id: int) -> Sequence[Assignment]:
        return self._assignments.list_active_for_employee(int(employee_id))

    def history_for_employee(self, actor: Identity, employee_id: int) -> Sequence[Assignment]:
        require_self_or_admin(actor, employee_id)
        return self._assignments.history_for_employee(int(employee_id))

    def deactivate_all(self) -> int:
        return self._assignments.deactivate_all()
