from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.permissions import Identity, require_admin, require_self_or_admin
from ..common.validators import require_int_range, require_min_length, require_non_empty, require_positive_id
from ..core.constants import (
    DEFAULT_MEAL_BREAK_MINUTES,
    DEFAULT_SYSTEM_ADMIN_EMAIL,
    MAX_MEAL_BREAK_MINUTES,
    MIN_MEAL_BREAK_MINUTES,
    MIN_PASSWORD_LENGTH,
)
from ..core.enums import EmploymentType, PermissionTag
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from .model import Employee, EmployeePatch
from .repository import EmployeeRepository
from .role_model import Role, RolePatch
from .role_repository import RoleRepository

logger = logging.getLogger(__name__)


def identity_of(employee: Employee) -> Identity:
    return Identity(
        employee_id=employee.employee_id,
        role=employee.role_name or "",
        permission_tag=employee.permission_tag,
        full_name=employee.full_name,
    )


def parse_employment_type(value: object) -> EmploymentType:
    try:
        return EmploymentType(value)
    except ValueError:
        raise ValidationError("Tipo de contrato no válido (standard | part_time)")


class AuthService:
    """Use case: verify credentials and produce the caller identity."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def authenticate(self, email: str, password: str) -> Identity:
        employee = self._employees.get_by_email((email or "").strip().lower())
        if not employee or not employee.is_active:
            raise AuthenticationError("Credenciales inválidas")

        try:
            ok = check_password_hash(employee.password_hash, password or "")
        except ValueError:
            # placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Credenciales inválidas")

        logger.info("Employee %s authenticated", employee.employee_id)
        return identity_of(employee)


def parse_permission(value: object) -> PermissionTag:
    try:
        return PermissionTag(value)
    except ValueError:
        raise ValidationError("Permisos no válidos (admin | supervisor | empleado)")


def parse_salary(value: object) -> float:
    try:
        salary = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationError("El salario base debe ser un número")
    if salary < 0:
        raise ValidationError("El salario base no puede ser negativo")
    return salary


class RoleService:
    """Use case: maintain the operational roles employees and templates refer to."""

    def __init__(self, roles: RoleRepository, employees: EmployeeRepository):
        self._roles = roles
        self._employees = employees

    def list_roles(self) -> Sequence[Role]:
        return self._roles.list_all()

    def get(self, role_id: int) -> Role:
        role = self._roles.get_by_id(int(role_id))
        if not role:
            raise NotFoundError("Rol no encontrado")
        return role

    def create(
        self,
        actor: Identity,
        *,
        name: str,
        permission: object,
        description: Optional[str] = None,
        base_salary: object = None,
    ) -> Role:
        require_admin(actor)
        name = require_non_empty(name, "El nombre del rol")
        if permission in (None, ""):
            raise ValidationError("Nombre y permisos son requeridos")
        tag = parse_permission(permission)
        salary = parse_salary(base_salary) if base_salary not in (None, "") else None

        if self._roles.get_by_name(name):
            raise ConflictError("Ya existe un rol con ese nombre")
        role_id = self._roles.create(
            name=name,
            permission_tag=tag,
            description=(description or "").strip() or None,
            base_salary=salary,
        )
        logger.info("Role %s (%s) created by %s", role_id, name, actor.employee_id)
        return self.get(role_id)

    def build_patch(self, fields: dict) -> RolePatch:
        name = fields.get("nombre")
        permission = fields.get("permisos")
        salary = fields.get("salario_base")
        return RolePatch(
            name=require_non_empty(name, "El nombre del rol") if name is not None else None,
            description=str(fields["descripcion"]).strip() if fields.get("descripcion") is not None else None,
            permission_tag=parse_permission(permission) if permission not in (None, "") else None,
            base_salary=parse_salary(salary) if salary not in (None, "") else None,
        )

    def update(self, actor: Identity, role_id: int, patch: RolePatch) -> Role:
        require_admin(actor)
        if patch.is_empty():
            raise ValidationError("No hay campos para actualizar")
        if patch.name is not None:
            other = self._roles.get_by_name(patch.name)
            if other and other.role_id != int(role_id):
                raise ConflictError("Ya existe un rol con ese nombre")

        if not self._roles.update(int(role_id), patch):
            raise NotFoundError("Rol no encontrado")
        logger.info("Role %s updated: %s", role_id, sorted(patch.to_columns()))
        return self.get(role_id)

    def delete(self, actor: Identity, role_id: int) -> None:
        require_admin(actor)
        if not self._roles.delete(int(role_id)):
            raise NotFoundError("Rol no encontrado")
        logger.info("Role %s deleted by %s", role_id, actor.employee_id)

    def employees_of(self, actor: Identity, role_id: int) -> Sequence[Employee]:
        require_admin(actor)
        self.get(role_id)
        return self._employees.list_by_role(int(role_id))


class EmployeeService:
    """Use case: manage the employee directory."""

    def __init__(
        self,
        employees: EmployeeRepository,
        roles: RoleRepository,
        *,
        system_admin_email: str = DEFAULT_SYSTEM_ADMIN_EMAIL,
    ):
        self._employees = employees
        self._roles = roles
        self._system_admin_email = system_admin_email.lower()

    def _require(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Empleado no encontrado")
        return employee

    def get(self, actor: Identity, employee_id: int) -> Employee:
        require_self_or_admin(actor, employee_id)
        return self._require(employee_id)

    def list_all(self, actor: Identity, *, active_only: bool = False) -> Sequence[Employee]:
        require_admin(actor)
        return self._employees.list_all(active_only=active_only)

    def create(
        self,
        actor: Identity,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        role_id: object,
        phone: Optional[str] = None,
        employment_type: object = EmploymentType.STANDARD,
        meal_break_minutes: object = DEFAULT_MEAL_BREAK_MINUTES,
    ) -> Employee:
        require_admin(actor)

        first_name = require_non_empty(first_name, "Nombre")
        last_name = require_non_empty(last_name, "Apellido")
        email = require_non_empty(email, "Email").lower()
        if "@" not in email:
            raise ValidationError("Email no válido")
        require_min_length(password, "Contraseña", MIN_PASSWORD_LENGTH)
        role_id = require_positive_id(role_id, "Rol")
        contract = parse_employment_type(employment_type)
        minutes = require_int_range(
            meal_break_minutes, "El tiempo de colación", MIN_MEAL_BREAK_MINUTES, MAX_MEAL_BREAK_MINUTES
        )

        if not self._roles.get_by_id(role_id):
            raise NotFoundError("Rol no encontrado")
        if self._employees.get_by_email(email):
            raise ConflictError("Ya existe un empleado con ese email")

        employee_id = self._employees.create(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=(phone or "").strip() or None,
            password_hash=generate_password_hash(password),
            role_id=role_id,
            employment_type=contract,
            meal_break_minutes=minutes,
        )
        logger.info("Employee %s created by %s", employee_id, actor.employee_id)
        return self._require(employee_id)

    def update(self, actor: Identity, employee_id: int, patch: EmployeePatch) -> Employee:
        """Self-service update; role, status, contract and meal break are admin-only."""
        require_self_or_admin(actor, employee_id)
        if not patch.present_fields():
            raise ValidationError("No hay campos para actualizar")
        if patch.touches_privileged() and not actor.is_admin:
            raise AuthorizationError("Solo un administrador puede cambiar rol, estado o contrato")

        if patch.first_name is not None:
            require_non_empty(patch.first_name, "Nombre")
        if patch.last_name is not None:
            require_non_empty(patch.last_name, "Apellido")
        if patch.meal_break_minutes is not None:
            minutes = require_int_range(
                patch.meal_break_minutes, "El tiempo de colación", MIN_MEAL_BREAK_MINUTES, MAX_MEAL_BREAK_MINUTES
            )
            patch = replace(patch, meal_break_minutes=minutes)
        if patch.role_id is not None and not self._roles.get_by_id(patch.role_id):
            raise NotFoundError("Rol no encontrado")
        if patch.email is not None:
            email = require_non_empty(patch.email, "Email").lower()
            other = self._employees.get_by_email(email)
            if other and other.employee_id != int(employee_id):
                raise ConflictError("Ya existe un empleado con ese email")
            patch = replace(patch, email=email)

        if not self._employees.update(int(employee_id), patch):
            raise NotFoundError("Empleado no encontrado")
        return self._require(employee_id)

    def set_meal_break(self, actor: Identity, employee_id: int, minutes: object) -> Employee:
        require_admin(actor)
        value = require_int_range(
            minutes, "El tiempo de colación", MIN_MEAL_BREAK_MINUTES, MAX_MEAL_BREAK_MINUTES
        )
        if not self._employees.update(int(employee_id), EmployeePatch(meal_break_minutes=value)):
            raise NotFoundError("Empleado no encontrado")
        return self._require(employee_id)

    def deactivate(self, actor: Identity, employee_id: int) -> None:
        require_admin(actor)
        employee = self._require(employee_id)
        if employee.email.lower() == self._system_admin_email:
            raise ValidationError("No se puede desactivar la cuenta de administrador del sistema")
        self._employees.update(employee.employee_id, EmployeePatch(is_active=False))
        logger.info("Employee %s deactivated by %s", employee.employee_id, actor.employee_id)
