from __future__ import annotations

import pytest

from fakes import InMemoryEmployees, InMemoryRoles, make_employee
from src.staff_scheduling.staff_scheduling.core.enums import PermissionTag
from src.staff_scheduling.staff_scheduling.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.staff_scheduling.staff_scheduling.employees.role_model import Role
from src.staff_scheduling.staff_scheduling.employees.service import RoleService


@pytest.fixture
def roles():
    repo = InMemoryRoles(
        [
            Role(role_id=1, name="Centralista", permission_tag=PermissionTag.EMPLOYEE),
            Role(role_id=2, name="Despachador", permission_tag=PermissionTag.EMPLOYEE),
        ]
    )
    employees = InMemoryEmployees([make_employee(7, "Ana"), make_employee(8, "Beto")], roles=repo)
    return RoleService(repo, employees), repo


def test_create_normalizes_fields(roles, admin):
    svc, _ = roles

    role = svc.create(
        admin, name="  Supervisor ", permission="supervisor", description=" Turnos ", base_salary="750000"
    )

    assert role.name == "Supervisor"
    assert role.permission_tag == PermissionTag.SUPERVISOR
    assert role.description == "Turnos"
    assert role.base_salary == 750000.0
    assert [r.name for r in svc.list_roles()] == ["Centralista", "Despachador", "Supervisor"]


@pytest.mark.parametrize(
    "fields",
    [
        {"name": "", "permission": "empleado"},
        {"name": "Nuevo", "permission": None},
        {"name": "Nuevo", "permission": "root"},
        {"name": "Nuevo", "permission": "empleado", "base_salary": "mucho"},
        {"name": "Nuevo", "permission": "empleado", "base_salary": -1},
    ],
)
def test_create_rejects_invalid_input(roles, admin, fields):
    svc, repo = roles

    with pytest.raises(ValidationError):
        svc.create(admin, **fields)
    assert len(repo.list_all()) == 2


def test_create_duplicate_name_conflicts(roles, admin):
    svc, _ = roles

    with pytest.raises(ConflictError):
        svc.create(admin, name="Centralista", permission="empleado")


def test_update_renames_and_checks_conflicts(roles, admin):
    svc, _ = roles

    updated = svc.update(admin, 2, svc.build_patch({"nombre": "Despacho", "permisos": "supervisor"}))
    assert updated.name == "Despacho"
    assert updated.permission_tag == PermissionTag.SUPERVISOR

    with pytest.raises(ConflictError):
        svc.update(admin, 2, svc.build_patch({"nombre": "Centralista"}))
    with pytest.raises(ValidationError):
        svc.update(admin, 2, svc.build_patch({}))
    with pytest.raises(NotFoundError):
        svc.update(admin, 99, svc.build_patch({"descripcion": "x"}))


def test_delete_is_blocked_while_employees_hold_the_role(roles, admin):
    svc, _ = roles

    with pytest.raises(ConflictError):
        svc.delete(admin, 1)

    svc.delete(admin, 2)
    with pytest.raises(NotFoundError):
        svc.get(2)
    with pytest.raises(NotFoundError):
        svc.delete(admin, 2)


def test_employees_of_lists_holders(roles, admin):
    svc, _ = roles

    assert [e.employee_id for e in svc.employees_of(admin, 1)] == [7, 8]
    assert svc.employees_of(admin, 2) == []
    with pytest.raises(NotFoundError):
        svc.employees_of(admin, 42)


def test_role_management_requires_admin(roles, staff):
    svc, _ = roles

    with pytest.raises(AuthorizationError):
        svc.create(staff, name="X", permission="empleado")
    with pytest.raises(AuthorizationError):
        svc.update(staff, 1, svc.build_patch({"nombre": "X"}))
    with pytest.raises(AuthorizationError):
        svc.delete(staff, 2)
    with pytest.raises(AuthorizationError):
        svc.employees_of(staff, 1)
