from __future__ import annotations

from flask import Flask, request, session

from ..common.http import (
    admin_required,
    current_identity,
    json_body,
    login_required,
    ok,
    remember_identity,
)
from ..common.validators import require_positive_id
from ..container import Container
from .model import EmployeePatch
from .service import parse_employment_type


def _patch_from(body: dict) -> EmployeePatch:
    return EmployeePatch(
        first_name=body.get("nombre"),
        last_name=body.get("apellido"),
        email=body.get("email"),
        phone=body.get("telefono"),
        role_id=require_positive_id(body["rol_id"], "Rol") if body.get("rol_id") not in (None, "") else None,
        employment_type=parse_employment_type(body["tipo_contrato"]) if body.get("tipo_contrato") else None,
        is_active=body["activo"] in (True, 1, "1", "true") if body.get("activo") is not None else None,
        meal_break_minutes=body.get("tiempo_colacion") if body.get("tiempo_colacion") not in (None, "") else None,
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        body = json_body()
        identity = container.auth_service.authenticate(body.get("email", ""), body.get("password", ""))
        remember_identity(identity)
        employee = container.employee_service.get(identity, identity.employee_id)
        return ok(employee.to_dict(), "Inicio de sesión exitoso")

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def logout():
        session.clear()
        return ok(message="Sesión cerrada")

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def me():
        actor = current_identity()
        return ok(container.employee_service.get(actor, actor.employee_id).to_dict())

    @app.route("/api/roles", methods=["GET"], endpoint="roles_list")
    @login_required
    def list_roles():
        return ok([r.to_dict() for r in container.role_service.list_roles()])

    @app.route("/api/roles", methods=["POST"], endpoint="roles_create")
    @admin_required
    def create_role():
        body = json_body()
        role = container.role_service.create(
            current_identity(),
            name=body.get("nombre", ""),
            permission=body.get("permisos"),
            description=body.get("descripcion"),
            base_salary=body.get("salario_base"),
        )
        return ok(role.to_dict(), "Rol creado exitosamente", 201)

    @app.route("/api/roles/<int:role_id>", methods=["GET"], endpoint="roles_get")
    @login_required
    def get_role(role_id: int):
        return ok(container.role_service.get(role_id).to_dict())

    @app.route("/api/roles/<int:role_id>", methods=["PUT"], endpoint="roles_update")
    @admin_required
    def update_role(role_id: int):
        patch = container.role_service.build_patch(json_body())
        role = container.role_service.update(current_identity(), role_id, patch)
        return ok(role.to_dict(), "Rol actualizado exitosamente")

    @app.route("/api/roles/<int:role_id>", methods=["DELETE"], endpoint="roles_delete")
    @admin_required
    def delete_role(role_id: int):
        container.role_service.delete(current_identity(), role_id)
        return ok(message="Rol eliminado exitosamente")

    @app.route("/api/roles/<int:role_id>/employees", methods=["GET"], endpoint="roles_employees")
    @admin_required
    def role_employees(role_id: int):
        employees = container.role_service.employees_of(current_identity(), role_id)
        return ok([e.to_dict() for e in employees])

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @admin_required
    def list_employees():
        active_only = request.args.get("activos") in ("1", "true")
        employees = container.employee_service.list_all(current_identity(), active_only=active_only)
        return ok([e.to_dict() for e in employees])

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    @admin_required
    def create_employee():
        body = json_body()
        employee = container.employee_service.create(
            current_identity(),
            first_name=body.get("nombre", ""),
            last_name=body.get("apellido", ""),
            email=body.get("email", ""),
            password=body.get("password", ""),
            role_id=body.get("rol_id"),
            phone=body.get("telefono"),
            employment_type=body.get("tipo_contrato") or "standard",
            meal_break_minutes=body.get("tiempo_colacion", 30),
        )
        return ok(employee.to_dict(), "Empleado creado exitosamente", 201)

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    @login_required
    def get_employee(employee_id: int):
        return ok(container.employee_service.get(current_identity(), employee_id).to_dict())

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="employees_update")
    @login_required
    def update_employee(employee_id: int):
        employee = container.employee_service.update(current_identity(), employee_id, _patch_from(json_body()))
        return ok(employee.to_dict(), "Empleado actualizado")

    @app.route("/api/employees/<int:employee_id>/meal-break", methods=["PUT"], endpoint="employees_meal_break")
    @admin_required
    def set_meal_break(employee_id: int):
        body = json_body()
        employee = container.employee_service.set_meal_break(
            current_identity(), employee_id, body.get("tiempo_colacion")
        )
        return ok(employee.to_dict(), "Tiempo de colación actualizado")

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_deactivate")
    @admin_required
    def deactivate_employee(employee_id: int):
        container.employee_service.deactivate(current_identity(), employee_id)
        return ok(message="Empleado desactivado")
