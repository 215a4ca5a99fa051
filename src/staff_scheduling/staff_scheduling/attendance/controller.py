from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date, parse_optional_date
from ..common.http import admin_required, arg_int, current_identity, json_body, login_required, ok
from ..common.validators import require_positive_id
from ..container import Container


def _range_args():
    return (
        parse_optional_date(request.args.get("fecha_inicio"), "Fecha de inicio"),
        parse_optional_date(request.args.get("fecha_fin"), "Fecha de fin"),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="attendance_clock_in")
    @login_required
    def clock_in():
        body = json_body()
        record = container.attendance_service.clock_in(
            current_identity(),
            ip_address=request.remote_addr,
            location=body.get("ubicacion"),
            notes=body.get("observaciones"),
        )
        return ok(record.to_dict(), "Entrada registrada exitosamente", 201)

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="attendance_clock_out")
    @login_required
    def clock_out():
        body = json_body()
        record = container.attendance_service.clock_out(current_identity(), notes=body.get("observaciones"))
        return ok(record.to_dict(), "Salida registrada exitosamente")

    @app.route("/api/attendance/me", methods=["GET"], endpoint="attendance_mine")
    @login_required
    def my_attendance():
        start, end = _range_args()
        records, stats = container.attendance_service.my_records(current_identity(), start=start, end=end)
        return ok({"registros": [r.to_dict() for r in records], "estadisticas": stats.as_dict()})

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    @login_required
    def attendance_stats():
        start, end = _range_args()
        stats = container.attendance_service.statistics(
            current_identity(), employee_id=arg_int("empleado_id"), start=start, end=end
        )
        return ok(stats.as_dict())

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @admin_required
    def list_attendance():
        start, end = _range_args()
        records = container.attendance_service.list_records(
            current_identity(), start=start, end=end, employee_id=arg_int("empleado_id")
        )
        return ok([r.to_dict() for r in records])

    @app.route("/api/attendance/absences", methods=["POST"], endpoint="attendance_absence")
    @admin_required
    def record_absence():
        body = json_body()
        record = container.attendance_service.record_absence(
            current_identity(),
            employee_id=require_positive_id(body.get("empleado_id"), "Empleado"),
            work_date=parse_iso_date(body.get("fecha") or "", "Fecha"),
            notes=body.get("observaciones"),
        )
        return ok(record.to_dict(), "Ausencia registrada", 201)
