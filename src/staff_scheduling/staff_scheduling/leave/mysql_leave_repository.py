from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveKind, RequestStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.guards import lock_owner, range_taken, transition
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import LeaveRequest
from .repository import LeaveRequestRepository

_SELECT = """
    SELECT l.request_id, l.employee_id, l.kind, l.start_date, l.end_date, l.day_count,
           l.day_off_type, l.reason, l.status, l.decided_by, l.decided_at, l.admin_note,
           l.created_at, CONCAT(e.first_name, ' ', e.last_name) AS employee_name
    FROM leave_requests l
    JOIN employees e ON e.employee_id = l.employee_id
"""


def _to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        kind=LeaveKind(r["kind"]),
        start_date=normalize_mysql_date(r["start_date"]),
        end_date=normalize_mysql_date(r["end_date"]),
        day_count=int(r["day_count"]),
        status=RequestStatus(r["status"]),
        reason=r.get("reason"),
        day_off_type=r.get("day_off_type"),
        decided_by=int(r["decided_by"]) if r.get("decided_by") else None,
        decided_at=r.get("decided_at"),
        admin_note=r.get("admin_note"),
        created_at=r.get("created_at"),
        employee_name=r.get("employee_name"),
    )


class MySQLLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _guard_overlap(
        cur,
        *,
        employee_id: int,
        kind: LeaveKind,
        start_date: date,
        end_date: date,
        blocking_statuses: Sequence[RequestStatus],
        conflict_message: str,
        exclude_request_id: Optional[int] = None,
    ) -> None:
        # employee row lock serializes leave writers of one employee
        lock_owner(cur, table="employees", id_column="employee_id", owner_id=employee_id)
        if range_taken(
            cur,
            table="leave_requests",
            id_column="request_id",
            key={"employee_id": int(employee_id), "kind": kind.value},
            start=start_date,
            end=end_date,
            status_column="status",
            statuses=[s.value for s in blocking_statuses],
            exclude_id=exclude_request_id,
        ):
            raise ConflictError(conflict_message)

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
        with db_cursor(self._conn_factory) as (_, cur):
            if blocking_statuses:
                self._guard_overlap(
                    cur,
                    employee_id=employee_id,
                    kind=kind,
                    start_date=start_date,
                    end_date=end_date,
                    blocking_statuses=blocking_statuses,
                    conflict_message=conflict_message,
                )
            cur.execute(
                """
                INSERT INTO leave_requests(
                    employee_id, kind, start_date, end_date, day_count, day_off_type, reason, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    kind.value,
                    start_date,
                    end_date,
                    int(day_count),
                    day_off_type,
                    reason,
                    RequestStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE l.request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            if blocking_statuses:
                cur.execute(
                    "SELECT employee_id, kind, start_date, end_date FROM leave_requests WHERE request_id=%s",
                    (int(request_id),),
                )
                r = fetchone(cur)
                if not r:
                    return False
                self._guard_overlap(
                    cur,
                    employee_id=int(r["employee_id"]),
                    kind=LeaveKind(r["kind"]),
                    start_date=normalize_mysql_date(r["start_date"]),
                    end_date=normalize_mysql_date(r["end_date"]),
                    blocking_statuses=blocking_statuses,
                    conflict_message=conflict_message,
                    exclude_request_id=int(request_id),
                )
            return transition(
                cur,
                table="leave_requests",
                id_column="request_id",
                record_id=request_id,
                status_column="status",
                from_status=RequestStatus.PENDING.value,
                values={
                    "status": status.value,
                    "decided_by": int(decided_by),
                    "decided_at": decided_at,
                    "admin_note": admin_note,
                },
            )

    def cancel(self, request_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            return transition(
                cur,
                table="leave_requests",
                id_column="request_id",
                record_id=request_id,
                status_column="status",
                from_status=RequestStatus.PENDING.value,
                values={"status": RequestStatus.CANCELLED.value},
            )

    def list_requests(
        self,
        *,
        kind: LeaveKind,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 50,
    ) -> Sequence[LeaveRequest]:
        query = _SELECT + " WHERE l.kind=%s"
        params: list[object] = [kind.value]
        if employee_id is not None:
            query += " AND l.employee_id=%s"
            params.append(int(employee_id))
        if status is not None:
            query += " AND l.status=%s"
            params.append(status.value)
        query += " ORDER BY l.created_at DESC, l.request_id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(query, tuple(params))
            return [_to_request(r) for r in fetchall(cur)]
