from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveKind, RequestStatus
from .model import LeaveRequest


class LeaveRequestRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        kind: LeaveKind,
        start_date: date,
        end_date: date,
        day_count: int,
        reason: Optional[str],
        day_off_type: Optional[str] = None,
        blocking_statuses: Sequence[RequestStatus] = (),
        conflict_message: str = "",
    ) -> int:
        """Insert a pending request.

        When ``blocking_statuses`` is given, the insert is refused with
        ``ConflictError(conflict_message)`` if another request of the same
        employee and kind in one of those statuses intersects the range. The
        check and the insert share one transaction.
        """

        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        decided_at: datetime,
        admin_note: Optional[str],
        blocking_statuses: Sequence[RequestStatus] = (),
        conflict_message: str = "",
    ) -> bool:
        """Move a pending request to ``status``. False if it is no longer pending.

        ``blocking_statuses`` re-checks overlap with the employee's other
        requests inside the same transaction, as in ``create``.
        """

        raise NotImplementedError

    def cancel(self, request_id: int) -> bool:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        kind: LeaveKind,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 50,
    ) -> Sequence[LeaveRequest]:
        """Newest first."""

        raise NotImplementedError
