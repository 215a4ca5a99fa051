from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import PermissionTag
from ..core.exceptions import AuthorizationError


@dataclass(frozen=True)
class Identity:
    """Verified caller identity handed to services by the HTTP layer."""

    employee_id: int
    role: str
    permission_tag: PermissionTag
    full_name: str = ""

    @property
    def is_admin(self) -> bool:
        return self.permission_tag == PermissionTag.ADMIN


def require_admin(actor: Identity) -> None:
    if not actor.is_admin:
        raise AuthorizationError("No tienes permisos de administrador")


def require_self_or_admin(actor: Identity, employee_id: int) -> None:
    if not actor.is_admin and actor.employee_id != int(employee_id):
        raise AuthorizationError("No tienes permisos para ver los datos de este empleado")
