from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date, parse_optional_date
from ..common.http import admin_required, current_identity, json_body, login_required, ok
from ..common.validators import require_positive_id
from ..container import Container
from .model import TemplateRemoval


def register(app: Flask, container: Container) -> None:
    @app.route("/api/schedules", methods=["GET"], endpoint="schedules_list")
    @login_required
    def list_schedules():
        active_only = request.args.get("activos") in ("1", "true")
        templates = container.schedule_service.list_all(active_only=active_only)
        return ok([t.to_dict() for t in templates])

    @app.route("/api/schedules", methods=["POST"], endpoint="schedules_create")
    @admin_required
    def create_schedule():
        body = json_body()
        template = container.schedule_service.create(
            current_identity(),
            name=body.get("nombre", ""),
            entry=body.get("hora_entrada", ""),
            exit_=body.get("hora_salida", ""),
            weekdays=body.get("dias_semana"),
            description=body.get("descripcion"),
            kind=body.get("tipo") or "standard",
            required_role=body.get("rol_requerido"),
        )
        return ok(template.to_dict(), "Horario creado exitosamente", 201)

    @app.route("/api/schedules/<int:template_id>", methods=["GET"], endpoint="schedules_get")
    @login_required
    def get_schedule(template_id: int):
        return ok(container.schedule_service.get(template_id).to_dict())

    @app.route("/api/schedules/<int:template_id>", methods=["PUT"], endpoint="schedules_update")
    @admin_required
    def update_schedule(template_id: int):
        patch = container.schedule_service.build_patch(json_body())
        template = container.schedule_service.update(current_identity(), template_id, patch)
        return ok(template.to_dict(), "Horario actualizado exitosamente")

    @app.route("/api/schedules/<int:template_id>", methods=["DELETE"], endpoint="schedules_delete")
    @admin_required
    def delete_schedule(template_id: int):
        outcome = container.schedule_service.delete(current_identity(), template_id)
        if outcome == TemplateRemoval.DEACTIVATED:
            return ok({"resultado": outcome.value}, "Horario desactivado (tiene historial de asignaciones)")
        return ok({"resultado": outcome.value}, "Horario eliminado exitosamente")

    @app.route("/api/schedules/<int:template_id>/assign", methods=["POST"], endpoint="schedules_assign")
    @admin_required
    def assign_schedule(template_id: int):
        body = json_body()
        start_date = parse_iso_date(body.get("fecha_inicio") or "", "Fecha de inicio")
        end_date = parse_optional_date(body.get("fecha_fin"), "Fecha de fin")
        assignment = container.assignment_service.assign(
            current_identity(),
            employee_id=require_positive_id(body.get("empleado_id"), "Empleado"),
            template_id=template_id,
            start_date=start_date,
            end_date=end_date,
        )
        return ok(assignment.to_dict(), "Horario asignado exitosamente", 201)

    @app.route("/api/schedules/employee/<int:employee_id>", methods=["GET"], endpoint="schedules_for_employee")
    @login_required
    def employee_schedules(employee_id: int):
        history = container.assignment_service.history_for_employee(current_identity(), employee_id)
        return ok([a.to_dict() for a in history])

    @app.route("/api/schedules/custom/preview", methods=["POST"], endpoint="schedules_custom_preview")
    @admin_required
    def preview_custom():
        body = json_body()
        return ok(container.custom_schedule_builder.evaluate(body.get("dias") or []).to_dict())

    @app.route("/api/schedules/custom", methods=["POST"], endpoint="schedules_custom_create")
    @admin_required
    def create_custom():
        body = json_body()
        schedule = container.custom_schedule_builder.build(
            current_identity(),
            employee_id=require_positive_id(body.get("empleado_id"), "Empleado"),
            entries=body.get("dias") or [],
            name=body.get("nombre"),
            start_date=parse_optional_date(body.get("fecha_inicio"), "Fecha de inicio"),
        )
        return ok(schedule.to_dict(), "Horario personalizado creado y asignado", 201)
