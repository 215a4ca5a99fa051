from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_MEAL_BREAK_MINUTES
from ..core.enums import EmploymentType, PermissionTag


@dataclass(frozen=True)
class Employee:
    """Employee record joined with its role.

    Note: Plain data object; no DB access lives here.
    """

    employee_id: int
    first_name: str
    last_name: str
    email: str
    password_hash: str
    role_id: Optional[int]
    role_name: Optional[str]
    permission_tag: PermissionTag = PermissionTag.EMPLOYEE
    employment_type: EmploymentType = EmploymentType.STANDARD
    is_active: bool = True
    meal_break_minutes: int = DEFAULT_MEAL_BREAK_MINUTES
    phone: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_part_time(self) -> bool:
        return self.employment_type == EmploymentType.PART_TIME

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "nombre": self.first_name,
            "apellido": self.last_name,
            "email": self.email,
            "telefono": self.phone,
            "rol_id": self.role_id,
            "rol": self.role_name,
            "permisos": self.permission_tag.value,
            "tipo_contrato": self.employment_type.value,
            "activo": self.is_active,
            "tiempo_colacion": self.meal_break_minutes,
        }


PRIVILEGED_FIELDS = frozenset({"role_id", "is_active", "employment_type", "meal_break_minutes"})


@dataclass(frozen=True)
class EmployeePatch:
    """Partial update for an employee; ``None`` means "leave unchanged"."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    role_id: Optional[int] = None
    employment_type: Optional[EmploymentType] = None
    is_active: Optional[bool] = None
    meal_break_minutes: Optional[int] = None

    def present_fields(self) -> set[str]:
        return {name for name, value in vars(self).items() if value is not None}

    def touches_privileged(self) -> bool:
        return bool(self.present_fields() & PRIVILEGED_FIELDS)

    def to_columns(self) -> dict[str, object]:
        columns: dict[str, object] = {}
        for name in ("first_name", "last_name", "email", "phone", "role_id", "meal_break_minutes"):
            value = getattr(self, name)
            if value is not None:
                columns[name] = value
        if self.employment_type is not None:
            columns["employment_type"] = self.employment_type.value
        if self.is_active is not None:
            columns["is_active"] = 1 if self.is_active else 0
        return columns
