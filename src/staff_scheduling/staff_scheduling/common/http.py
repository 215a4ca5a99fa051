"""JSON envelope, session identity and error mapping shared by controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import PermissionTag
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from .permissions import Identity

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (PersistenceError, 500),
)


def ok(data: Any = None, message: Optional[str] = None, status: int = 200):
    return jsonify({"success": True, "message": message, "data": data}), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message, "data": None}), status


def json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def remember_identity(identity: Identity) -> None:
    session.clear()
    session["employee_id"] = identity.employee_id
    session["role"] = identity.role
    session["permission"] = identity.permission_tag.value
    session["name"] = identity.full_name


def current_identity() -> Identity:
    if "employee_id" not in session:
        raise AuthenticationError("Debes iniciar sesión")
    return Identity(
        employee_id=int(session["employee_id"]),
        role=session.get("role") or "",
        permission_tag=PermissionTag(session.get("permission") or PermissionTag.EMPLOYEE.value),
        full_name=session.get("name") or "",
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        current_identity()
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_identity().is_admin:
            raise AuthorizationError("No tienes permisos de administrador")
        return view(*args, **kwargs)

    return wrapper


def arg_int(name: str) -> Optional[int]:
    value = request.args.get(name)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"Parámetro '{name}' no válido")


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                if status >= 500:
                    return fail("Error interno del servidor", status)
                return fail(str(exc), status)
        return fail(str(exc), 400)

    @app.errorhandler(404)
    def handle_not_found(_exc):
        return fail("Recurso no encontrado", 404)

    @app.errorhandler(405)
    def handle_method_not_allowed(_exc):
        return fail("Método no permitido", 405)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return fail(exc.description or exc.name, exc.code or 500)
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return fail("Error interno del servidor", 500)
