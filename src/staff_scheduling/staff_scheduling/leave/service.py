from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.permissions import Identity, require_admin
from ..common.validators import require_int_range, require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveKind, NotificationLevel, RequestStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..notifications.repository import NotificationSink
from .model import LeaveRequest
from .repository import LeaveRequestRepository

logger = logging.getLogger(__name__)

OPEN_STATUSES = (RequestStatus.PENDING, RequestStatus.APPROVED, RequestStatus.REJECTED)


def _as_date(value: object, field_name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} es requerida")
    return parse_iso_date(str(value), field_name)


def parse_status(value: object) -> Optional[RequestStatus]:
    if value is None or value == "":
        return None
    try:
        return RequestStatus(value)
    except ValueError:
        raise ValidationError("Estado no válido")


class LeaveRequestService:
    """Vacation and day-off requests with a single admin decision each.

    ``pendiente`` moves once to ``aprobado`` or ``rechazado`` (admin) or to
    ``cancelado`` (requester). Decisions are conditional updates, so two
    concurrent decisions cannot both succeed.
    """

    def __init__(self, requests: LeaveRequestRepository, notifier: NotificationSink):
        self._requests = requests
        self._notifier = notifier

    def _notify_admins(self, title: str, message: str) -> None:
        try:
            self._notifier.notify_admins(title=title, message=message)
        except Exception:
            logger.exception("Could not notify admins: %s", title)

    def _notify_employee(self, employee_id: int, title: str, message: str, level: NotificationLevel) -> None:
        try:
            self._notifier.notify_employee(employee_id=employee_id, title=title, message=message, level=level)
        except Exception:
            logger.exception("Could not notify employee %s: %s", employee_id, title)

    def _require(self, request_id: int, kind: Optional[LeaveKind]) -> LeaveRequest:
        request = self._requests.get_by_id(int(request_id))
        if not request or (kind is not None and request.kind != kind):
            raise NotFoundError("Solicitud no encontrada")
        return request

    def request_vacation(
        self,
        actor: Identity,
        *,
        start: object,
        end: object,
        reason: Optional[str] = None,
        day_count: object = None,
        today: Optional[date] = None,
    ) -> LeaveRequest:
        if not start or not end:
            raise ValidationError("Fecha de inicio y fin son requeridas")
        start_date = _as_date(start, "Fecha de inicio")
        end_date = _as_date(end, "Fecha de fin")
        today = today or now_local().date()

        if start_date < today:
            raise ValidationError("La fecha de inicio no puede ser anterior a hoy")
        if end_date < start_date:
            raise ValidationError("La fecha de fin debe ser posterior a la fecha de inicio")
        span = (end_date - start_date).days + 1
        if day_count is None or day_count == "":
            days = span
        else:
            days = require_int_range(day_count, "Días solicitados", 1, span)

        request_id = self._requests.create(
            employee_id=actor.employee_id,
            kind=LeaveKind.VACATION,
            start_date=start_date,
            end_date=end_date,
            day_count=days,
            reason=(reason or "").strip() or None,
            blocking_statuses=(RequestStatus.APPROVED,),
            conflict_message="Ya tienes vacaciones aprobadas que se superponen con estas fechas",
        )
        logger.info("Vacation request %s created by employee %s", request_id, actor.employee_id)
        self._notify_admins(
            "Nueva solicitud de vacaciones",
            f"El empleado {actor.full_name} ha solicitado {days} días de vacaciones",
        )
        return self._require(request_id, LeaveKind.VACATION)

    def request_day_off(
        self,
        actor: Identity,
        *,
        day: object,
        day_off_type: Optional[str],
        reason: Optional[str] = None,
        today: Optional[date] = None,
    ) -> LeaveRequest:
        if not day or not day_off_type:
            raise ValidationError("Fecha y tipo son requeridos")
        the_day = _as_date(day, "Fecha")
        kind_label = require_non_empty(day_off_type, "Tipo")
        today = today or now_local().date()

        if the_day < today:
            raise ValidationError("No puedes solicitar días libres para fechas pasadas")
        request_id = self._requests.create(
            employee_id=actor.employee_id,
            kind=LeaveKind.DAY_OFF,
            start_date=the_day,
            end_date=the_day,
            day_count=1,
            reason=(reason or "").strip() or None,
            day_off_type=kind_label,
            blocking_statuses=OPEN_STATUSES,
            conflict_message="Ya tienes una solicitud para esta fecha",
        )
        logger.info("Day-off request %s created by employee %s", request_id, actor.employee_id)
        self._notify_admins(
            "Nueva solicitud de día libre",
            f"El empleado {actor.full_name} ha solicitado un día libre ({kind_label}) para el {the_day.isoformat()}",
        )
        return self._require(request_id, LeaveKind.DAY_OFF)

    def _decide(
        self,
        actor: Identity,
        request_id: int,
        status: RequestStatus,
        admin_note: Optional[str],
        kind: Optional[LeaveKind],
        now: Optional[datetime],
    ) -> LeaveRequest:
        require_admin(actor)
        request = self._require(request_id, kind)
        if not request.is_pending:
            raise ConflictError("Esta solicitud ya ha sido procesada")

        blocking: tuple[RequestStatus, ...] = ()
        if status == RequestStatus.APPROVED and request.kind == LeaveKind.VACATION:
            blocking = (RequestStatus.APPROVED,)

        if not self._requests.decide(
            request_id=request.request_id,
            status=status,
            decided_by=actor.employee_id,
            decided_at=now or now_local(),
            admin_note=(admin_note or "").strip() or None,
            blocking_statuses=blocking,
            conflict_message="El empleado ya tiene vacaciones aprobadas en esas fechas",
        ):
            raise ConflictError("Esta solicitud ya ha sido procesada")

        approved = status == RequestStatus.APPROVED
        logger.info("Leave request %s %s by %s", request.request_id, status.value, actor.employee_id)
        if request.kind == LeaveKind.VACATION:
            title = "Vacaciones Aprobadas" if approved else "Vacaciones Rechazadas"
            message = (
                f"Tu solicitud de vacaciones del {request.start_date.isoformat()} al "
                f"{request.end_date.isoformat()} ha sido {status.value}"
            )
        else:
            title = "Día libre aprobado" if approved else "Día libre rechazado"
            message = f"Tu solicitud de día libre para el {request.start_date.isoformat()} ha sido {status.value}"
        if admin_note:
            message += f". Comentario: {admin_note}"
        self._notify_employee(
            request.employee_id, title, message, NotificationLevel.SUCCESS if approved else NotificationLevel.WARNING
        )
        return self._require(request.request_id, kind)

    def approve(
        self,
        actor: Identity,
        request_id: int,
        admin_note: Optional[str] = None,
        *,
        kind: Optional[LeaveKind] = None,
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        return self._decide(actor, request_id, RequestStatus.APPROVED, admin_note, kind, now)

    def reject(
        self,
        actor: Identity,
        request_id: int,
        admin_note: Optional[str] = None,
        *,
        kind: Optional[LeaveKind] = None,
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        return self._decide(actor, request_id, RequestStatus.REJECTED, admin_note, kind, now)

    def decide(
        self,
        actor: Identity,
        request_id: int,
        status: object,
        admin_note: Optional[str] = None,
        *,
        kind: Optional[LeaveKind] = None,
    ) -> LeaveRequest:
        """Dispatch a client decision ('aprobado' or 'rechazado')."""
        decision = parse_status(status)
        if decision == RequestStatus.APPROVED:
            return self.approve(actor, request_id, admin_note, kind=kind)
        if decision == RequestStatus.REJECTED:
            return self.reject(actor, request_id, admin_note, kind=kind)
        raise ValidationError('Estado debe ser "aprobado" o "rechazado"')

    def cancel(self, actor: Identity, request_id: int, *, kind: Optional[LeaveKind] = None) -> None:
        request = self._requests.get_by_id(int(request_id))
        if not request or request.employee_id != actor.employee_id or (kind is not None and request.kind != kind):
            raise NotFoundError("Solicitud no encontrada")
        if not request.is_pending:
            raise ConflictError("Solo se pueden cancelar solicitudes pendientes")
        if not self._requests.cancel(request.request_id):
            raise ConflictError("Solo se pueden cancelar solicitudes pendientes")
        logger.info("Leave request %s cancelled by employee %s", request.request_id, actor.employee_id)

    def list_mine(
        self,
        actor: Identity,
        *,
        kind: LeaveKind,
        status: Optional[RequestStatus] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[LeaveRequest]:
        return self._requests.list_requests(kind=kind, employee_id=actor.employee_id, status=status, limit=limit)

    def list_all(
        self,
        actor: Identity,
        *,
        kind: LeaveKind,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[LeaveRequest]:
        require_admin(actor)
        return self._requests.list_requests(kind=kind, employee_id=employee_id, status=status, limit=limit)
