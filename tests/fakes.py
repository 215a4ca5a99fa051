"""In-memory repositories and factories shared by the test modules."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, time
from typing import Optional, Sequence

from src.staff_scheduling.staff_scheduling.assignments.model import Assignment, NewAssignment
from src.staff_scheduling.staff_scheduling.core.enums import EmploymentType, PermissionTag, TemplateKind
from src.staff_scheduling.staff_scheduling.core.exceptions import ConflictError
from src.staff_scheduling.staff_scheduling.employees.model import Employee, EmployeePatch
from src.staff_scheduling.staff_scheduling.employees.role_model import Role, RolePatch
from src.staff_scheduling.staff_scheduling.schedules.model import (
    ScheduleTemplate,
    ScheduleTemplatePatch,
    TemplateRemoval,
)


def make_employee(
    employee_id: int,
    first_name: str,
    role_name: Optional[str] = "Centralista",
    *,
    email: Optional[str] = None,
    part_time: bool = False,
    active: bool = True,
    permission: PermissionTag = PermissionTag.EMPLOYEE,
    password_hash: str = "x",
) -> Employee:
    return Employee(
        employee_id=employee_id,
        first_name=first_name,
        last_name="Test",
        email=email or f"{first_name.lower()}@example.com",
        password_hash=password_hash,
        role_id=1,
        role_name=role_name,
        permission_tag=permission,
        employment_type=EmploymentType.PART_TIME if part_time else EmploymentType.STANDARD,
        is_active=active,
    )


def make_template(
    template_id: int,
    name: str,
    *,
    kind: TemplateKind = TemplateKind.ROTATION,
    required_role: Optional[str] = "Centralista",
    entry: time = time(8, 0),
    exit_: time = time(16, 0),
    weekdays: tuple[int, ...] = (1, 2, 3, 4, 5),
    active: bool = True,
) -> ScheduleTemplate:
    return ScheduleTemplate(
        template_id=template_id,
        name=name,
        entry_time=entry,
        exit_time=exit_,
        weekdays=weekdays,
        kind=kind,
        required_role=required_role,
        is_active=active,
    )


class InMemoryRoles:
    def __init__(self, roles: Sequence[Role] = ()):
        self._by_id = {r.role_id: r for r in roles}
        self._next_id = max(self._by_id, default=0) + 1
        # wired by InMemoryEmployees so delete can see who holds a role
        self.employees: Optional["InMemoryEmployees"] = None

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda r: r.role_id)

    def get_by_id(self, role_id: int):
        return self._by_id.get(int(role_id))

    def get_by_name(self, name: str):
        return next((r for r in self._by_id.values() if r.name == name), None)

    def create(self, *, name, permission_tag, description=None, base_salary=None) -> int:
        if self.get_by_name(name):
            raise ConflictError("Ya existe un rol con ese nombre")
        role_id = self._next_id
        self._next_id += 1
        self._by_id[role_id] = Role(
            role_id=role_id,
            name=name,
            permission_tag=permission_tag,
            description=description,
            base_salary=base_salary,
        )
        return role_id

    def update(self, role_id: int, patch: RolePatch) -> bool:
        current = self._by_id.get(int(role_id))
        if not current:
            return False
        fields = {
            name: getattr(patch, name)
            for name in ("name", "permission_tag", "base_salary")
            if getattr(patch, name) is not None
        }
        if patch.description is not None:
            fields["description"] = patch.description or None
        self._by_id[current.role_id] = replace(current, **fields)
        return True

    def delete(self, role_id: int) -> bool:
        current = self._by_id.get(int(role_id))
        if not current:
            return False
        if self.employees is not None and self.employees.list_by_role(current.role_id):
            raise ConflictError("No se puede eliminar el rol porque hay empleados asignados a él")
        del self._by_id[current.role_id]
        return True


class InMemoryEmployees:
    def __init__(self, employees: Sequence[Employee] = (), roles: Optional[InMemoryRoles] = None):
        self._by_id = {e.employee_id: e for e in employees}
        self._roles = roles or InMemoryRoles()
        self._roles.employees = self
        self._next_id = max(self._by_id, default=0) + 1

    def get_by_id(self, employee_id: int):
        return self._by_id.get(int(employee_id))

    def get_by_email(self, email: str):
        return next((e for e in self._by_id.values() if e.email == email), None)

    def list_all(self, *, active_only: bool = False):
        items = sorted(self._by_id.values(), key=lambda e: e.employee_id)
        return [e for e in items if e.is_active] if active_only else items

    def list_by_role(self, role_id: int):
        return sorted(
            (e for e in self._by_id.values() if e.role_id == int(role_id)),
            key=lambda e: (e.last_name, e.first_name),
        )

    def create(self, *, first_name, last_name, email, phone, password_hash, role_id, employment_type, meal_break_minutes):
        role = self._roles.get_by_id(role_id)
        employee_id = self._next_id
        self._next_id += 1
        self._by_id[employee_id] = Employee(
            employee_id=employee_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=password_hash,
            role_id=role_id,
            role_name=role.name if role else None,
            permission_tag=role.permission_tag if role else PermissionTag.EMPLOYEE,
            employment_type=employment_type,
            meal_break_minutes=meal_break_minutes,
            phone=phone,
        )
        return employee_id

    def update(self, employee_id: int, patch: EmployeePatch) -> bool:
        current = self._by_id.get(int(employee_id))
        if not current:
            return False
        self._by_id[current.employee_id] = replace(
            current, **{name: getattr(patch, name) for name in patch.present_fields()}
        )
        return True


class InMemoryAssignments:
    def __init__(self):
        self.rows: list[Assignment] = []

    def _insert(self, employee_id: int, template_id: int, start_date: date, end_date=None) -> int:
        assignment_id = len(self.rows) + 1
        self.rows.append(
            Assignment(
                assignment_id=assignment_id,
                employee_id=employee_id,
                template_id=template_id,
                start_date=start_date,
                end_date=end_date,
                is_active=True,
            )
        )
        return assignment_id

    def assign(self, *, employee_id, template_id, start_date, end_date=None) -> int:
        self.rows = [replace(r, is_active=False) if r.employee_id == employee_id else r for r in self.rows]
        return self._insert(employee_id, template_id, start_date, end_date)

    def deactivate_all(self) -> int:
        count = sum(1 for r in self.rows if r.is_active)
        self.rows = [replace(r, is_active=False) for r in self.rows]
        return count

    def replace_all_active(self, rows: Sequence[NewAssignment], *, start_date: date) -> int:
        self.deactivate_all()
        for r in rows:
            self._insert(r.employee_id, r.template_id, start_date)
        return len(rows)

    def list_active_for_employee(self, employee_id: int):
        return [r for r in self.rows if r.employee_id == employee_id and r.is_active]

    def history_for_employee(self, employee_id: int):
        return sorted(
            (r for r in self.rows if r.employee_id == employee_id),
            key=lambda r: (r.start_date, r.assignment_id),
            reverse=True,
        )

    def count_active(self) -> int:
        return sum(1 for r in self.rows if r.is_active)


class InMemoryTemplates:
    def __init__(self, templates: Sequence[ScheduleTemplate] = (), assignments: Optional[InMemoryAssignments] = None):
        self._by_id = {t.template_id: t for t in templates}
        self._assignments = assignments or InMemoryAssignments()
        self._next_id = max(self._by_id, default=0) + 1

    def get_by_id(self, template_id: int):
        return self._by_id.get(int(template_id))

    def get_by_name(self, name: str):
        return next((t for t in self._by_id.values() if t.name == name), None)

    def list_all(self, *, active_only: bool = False, kinds=None):
        items = sorted(self._by_id.values(), key=lambda t: t.template_id)
        if active_only:
            items = [t for t in items if t.is_active]
        if kinds:
            items = [t for t in items if t.kind in kinds]
        return items

    def create(self, *, name, entry_time, exit_time, weekdays, description, kind, required_role) -> int:
        if self.get_by_name(name):
            raise ConflictError("Ya existe un horario con ese nombre")
        template_id = self._next_id
        self._next_id += 1
        self._by_id[template_id] = ScheduleTemplate(
            template_id=template_id,
            name=name,
            entry_time=entry_time,
            exit_time=exit_time,
            weekdays=tuple(weekdays),
            description=description,
            kind=kind,
            required_role=required_role,
        )
        return template_id

    def update(self, template_id: int, patch: ScheduleTemplatePatch) -> bool:
        current = self._by_id.get(int(template_id))
        if not current:
            return False
        if patch.is_active is False and any(
            r.is_active and r.template_id == current.template_id for r in self._assignments.rows
        ):
            raise ConflictError("No se puede desactivar el horario porque hay empleados asignados a él")
        fields = {
            name: getattr(patch, name)
            for name in ("name", "entry_time", "exit_time", "weekdays", "kind", "is_active")
            if getattr(patch, name) is not None
        }
        for name in ("description", "required_role"):
            if getattr(patch, name) is not None:
                fields[name] = getattr(patch, name) or None
        self._by_id[current.template_id] = replace(current, **fields)
        return True

    def remove(self, template_id: int) -> TemplateRemoval:
        current = self._by_id.get(int(template_id))
        if not current:
            return TemplateRemoval.NOT_FOUND
        refs = [r for r in self._assignments.rows if r.template_id == current.template_id]
        if any(r.is_active for r in refs):
            return TemplateRemoval.REFERENCED
        if refs:
            self._by_id[current.template_id] = replace(current, is_active=False)
            return TemplateRemoval.DEACTIVATED
        del self._by_id[current.template_id]
        return TemplateRemoval.DELETED
