from __future__ import annotations

from flask import Flask, request

from ..common.http import admin_required, arg_int, current_identity, json_body, login_required, ok
from ..container import Container
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveKind
from .service import parse_status


def _limit() -> int:
    return arg_int("limite") or DEFAULT_LIST_LIMIT


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    @app.route("/api/vacations", methods=["POST"], endpoint="vacations_create")
    @login_required
    def request_vacation():
        body = json_body()
        created = service.request_vacation(
            current_identity(),
            start=body.get("fecha_inicio"),
            end=body.get("fecha_fin"),
            reason=body.get("motivo"),
            day_count=body.get("dias_solicitados"),
        )
        return ok(created.to_dict(), "Solicitud de vacaciones enviada exitosamente", 201)

    @app.route("/api/day-offs", methods=["POST"], endpoint="day_offs_create")
    @login_required
    def request_day_off():
        body = json_body()
        created = service.request_day_off(
            current_identity(),
            day=body.get("fecha"),
            day_off_type=body.get("tipo"),
            reason=body.get("motivo"),
        )
        return ok(created.to_dict(), "Solicitud de día libre enviada exitosamente", 201)

    for prefix, kind, label in (
        ("vacations", LeaveKind.VACATION, "Vacaciones"),
        ("day_offs", LeaveKind.DAY_OFF, "Día libre"),
    ):
        _register_kind(app, service, prefix, kind, label)


def _register_kind(app: Flask, service, prefix: str, kind: LeaveKind, label: str) -> None:
    path = "/api/" + prefix.replace("_", "-")

    @app.route(f"{path}/mine", methods=["GET"], endpoint=f"{prefix}_mine")
    @login_required
    def list_mine():
        items = service.list_mine(
            current_identity(), kind=kind, status=parse_status(request.args.get("estado")), limit=_limit()
        )
        return ok([i.to_dict() for i in items])

    @app.route(path, methods=["GET"], endpoint=f"{prefix}_list")
    @admin_required
    def list_all():
        items = service.list_all(
            current_identity(),
            kind=kind,
            status=parse_status(request.args.get("estado")),
            employee_id=arg_int("empleado_id"),
            limit=_limit(),
        )
        return ok([i.to_dict() for i in items])

    @app.route(f"{path}/<int:request_id>/decision", methods=["PUT"], endpoint=f"{prefix}_decide")
    @admin_required
    def decide(request_id: int):
        body = json_body()
        decided = service.decide(
            current_identity(), request_id, body.get("estado"), body.get("comentario_admin"), kind=kind
        )
        return ok(decided.to_dict(), f"{label} {decided.status.value} exitosamente")

    @app.route(f"{path}/<int:request_id>", methods=["DELETE"], endpoint=f"{prefix}_cancel")
    @login_required
    def cancel(request_id: int):
        service.cancel(current_identity(), request_id, kind=kind)
        return ok(message="Solicitud cancelada exitosamente")
