from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from fakes import InMemoryEmployees, InMemoryRoles, make_employee
from src.staff_scheduling.staff_scheduling.core.enums import EmploymentType, PermissionTag
from src.staff_scheduling.staff_scheduling.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.staff_scheduling.staff_scheduling.employees.model import EmployeePatch
from src.staff_scheduling.staff_scheduling.employees.role_model import Role
from src.staff_scheduling.staff_scheduling.employees.service import AuthService, EmployeeService

ROLES = InMemoryRoles(
    [
        Role(role_id=1, name="Administrador", permission_tag=PermissionTag.ADMIN),
        Role(role_id=2, name="Centralista", permission_tag=PermissionTag.EMPLOYEE),
    ]
)


@pytest.fixture
def directory():
    repo = InMemoryEmployees(
        [
            make_employee(1, "Admin", "Administrador", email="admin@sistema.com", permission=PermissionTag.ADMIN),
            make_employee(2, "Ana", email="ana@example.com"),
        ],
        roles=ROLES,
    )
    return EmployeeService(repo, ROLES, system_admin_email="admin@sistema.com"), repo


def _create(svc, admin, **overrides):
    data = dict(
        first_name=" Luis ",
        last_name="Soto",
        email="Luis@Example.com",
        password="secreto1",
        role_id=2,
        employment_type="part_time",
        meal_break_minutes=45,
    )
    data.update(overrides)
    return svc.create(admin, **data)


def test_created_employee_can_log_in(directory, admin):
    svc, repo = directory

    employee = _create(svc, admin)
    identity = AuthService(repo).authenticate("  luis@example.com ", "secreto1")

    assert employee.first_name == "Luis"
    assert employee.email == "luis@example.com"
    assert employee.employment_type == EmploymentType.PART_TIME
    assert employee.password_hash != "secreto1"
    assert identity.employee_id == employee.employee_id
    assert identity.role == "Centralista"
    assert not identity.is_admin


def test_wrong_password_and_unknown_email_are_indistinguishable(directory, admin):
    svc, repo = directory
    _create(svc, admin)
    auth = AuthService(repo)

    with pytest.raises(AuthenticationError) as wrong:
        auth.authenticate("luis@example.com", "otra-clave")
    with pytest.raises(AuthenticationError) as unknown:
        auth.authenticate("nadie@example.com", "secreto1")
    assert str(wrong.value) == str(unknown.value)


def test_inactive_or_placeholder_accounts_cannot_log_in():
    repo = InMemoryEmployees(
        [
            make_employee(5, "Old", active=False, password_hash=generate_password_hash("secreto1")),
            make_employee(6, "Seed", password_hash="CHANGE_ME"),
        ]
    )
    auth = AuthService(repo)

    with pytest.raises(AuthenticationError):
        auth.authenticate("old@example.com", "secreto1")
    with pytest.raises(AuthenticationError):
        auth.authenticate("seed@example.com", "CHANGE_ME")


@pytest.mark.parametrize(
    "overrides, error",
    [
        ({"password": "12345"}, ValidationError),
        ({"email": "sin-arroba"}, ValidationError),
        ({"first_name": "  "}, ValidationError),
        ({"meal_break_minutes": 121}, ValidationError),
        ({"employment_type": "freelance"}, ValidationError),
        ({"role_id": 99}, NotFoundError),
        ({"email": "ANA@example.com"}, ConflictError),
    ],
)
def test_create_rejects_bad_input(directory, admin, overrides, error):
    svc, _ = directory

    with pytest.raises(error):
        _create(svc, admin, **overrides)


def test_only_admins_manage_the_directory(directory, staff):
    svc, _ = directory

    with pytest.raises(AuthorizationError):
        _create(svc, staff)
    with pytest.raises(AuthorizationError):
        svc.list_all(staff)
    with pytest.raises(AuthorizationError):
        svc.get(staff, 1)


def test_self_service_update_limits(directory, staff):
    svc, _ = directory

    updated = svc.update(staff, 2, EmployeePatch(phone="+56 9 1234 5678"))
    assert updated.phone == "+56 9 1234 5678"

    with pytest.raises(AuthorizationError):
        svc.update(staff, 2, EmployeePatch(role_id=1))
    with pytest.raises(AuthorizationError):
        svc.update(staff, 2, EmployeePatch(meal_break_minutes=60))
    with pytest.raises(ValidationError):
        svc.update(staff, 2, EmployeePatch())


def test_update_email_must_stay_unique(directory, admin):
    svc, _ = directory

    with pytest.raises(ConflictError):
        svc.update(admin, 2, EmployeePatch(email="admin@sistema.com"))
    assert svc.update(admin, 2, EmployeePatch(email=" ANA.P@Example.com ")).email == "ana.p@example.com"


@pytest.mark.parametrize("minutes", [-1, 121, "mucho"])
def test_meal_break_out_of_range(directory, admin, minutes):
    svc, _ = directory

    with pytest.raises(ValidationError):
        svc.set_meal_break(admin, 2, minutes)


def test_meal_break_boundaries(directory, admin):
    svc, _ = directory

    assert svc.set_meal_break(admin, 2, 0).meal_break_minutes == 0
    assert svc.set_meal_break(admin, 2, "120").meal_break_minutes == 120


def test_system_admin_cannot_be_deactivated(directory, admin):
    svc, repo = directory

    with pytest.raises(ValidationError):
        svc.deactivate(admin, 1)

    svc.deactivate(admin, 2)
    assert repo.get_by_id(2).is_active is False
    with pytest.raises(NotFoundError):
        svc.deactivate(admin, 42)
