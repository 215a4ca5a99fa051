from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Assignment, NewAssignment


class AssignmentRepository(Protocol):
    def assign(
        self,
        *,
        employee_id: int,
        template_id: int,
        start_date: date,
        end_date: Optional[date] = None,
    ) -> int:
        """Deactivate the employee's active rows and insert the new one atomically."""

        raise NotImplementedError

    def deactivate_all(self) -> int:
        raise NotImplementedError

    def replace_all_active(self, rows: Sequence[NewAssignment], *, start_date: date) -> int:
        """Deactivate every active assignment and insert ``rows`` in one transaction."""

        raise NotImplementedError

    def list_active_for_employee(self, employee_id: int) -> Sequence[Assignment]:
        raise NotImplementedError

    def history_for_employee(self, employee_id: int) -> Sequence[Assignment]:
        """All assignments of the employee, newest first."""

        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError
