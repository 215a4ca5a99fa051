from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import PermissionTag


@dataclass(frozen=True)
class Role:
    """Operational role (Centralista, Despachador, ...) with its permission tag."""

    role_id: int
    name: str
    permission_tag: PermissionTag
    description: Optional[str] = None
    base_salary: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "id": self.role_id,
            "nombre": self.name,
            "permisos": self.permission_tag.value,
            "descripcion": self.description or "",
            "salario_base": self.base_salary,
        }


@dataclass(frozen=True)
class RolePatch:
    """Partial update for a role; ``None`` means "leave unchanged"."""

    name: Optional[str] = None
    description: Optional[str] = None
    permission_tag: Optional[PermissionTag] = None
    base_salary: Optional[float] = None

    def is_empty(self) -> bool:
        return not self.to_columns()

    def to_columns(self) -> dict[str, object]:
        columns: dict[str, object] = {}
        if self.name is not None:
            columns["role_name"] = self.name
        if self.description is not None:
            columns["description"] = self.description or None
        if self.permission_tag is not None:
            columns["permission_tag"] = self.permission_tag.value
        if self.base_salary is not None:
            columns["base_salary"] = self.base_salary
        return columns
