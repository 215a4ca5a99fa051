from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import EmploymentType
from .model import Employee, EmployeePatch


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Note: services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self, *, active_only: bool = False) -> Sequence[Employee]:
        """Employees ordered by id."""

        raise NotImplementedError

    def list_by_role(self, role_id: int) -> Sequence[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        phone: Optional[str],
        password_hash: str,
        role_id: int,
        employment_type: EmploymentType,
        meal_break_minutes: int,
    ) -> int:
        """Insert an employee. Raises ConflictError when the email exists."""

        raise NotImplementedError

    def update(self, employee_id: int, patch: EmployeePatch) -> bool:
        raise NotImplementedError
