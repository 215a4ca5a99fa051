from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import PermissionTag
from .role_model import Role, RolePatch


class RoleRepository(Protocol):
    def list_all(self) -> Sequence[Role]:
        raise NotImplementedError

    def get_by_id(self, role_id: int) -> Optional[Role]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Role]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        permission_tag: PermissionTag,
        description: Optional[str],
        base_salary: Optional[float],
    ) -> int:
        """Insert a role. Raises ConflictError when the name exists."""

        raise NotImplementedError

    def update(self, role_id: int, patch: RolePatch) -> bool:
        """Apply ``patch``. A rename also renames template role requirements.

        False when the role does not exist; ConflictError on a duplicate name.
        """

        raise NotImplementedError

    def delete(self, role_id: int) -> bool:
        """Delete an unused role.

        False when it does not exist; ConflictError while employees or
        active schedule templates still reference it.
        """

        raise NotImplementedError
