from datetime import date, time

import pytest

from fakes import InMemoryAssignments, InMemoryTemplates, make_template

from src.staff_scheduling.staff_scheduling.core.enums import TemplateKind
from src.staff_scheduling.staff_scheduling.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.staff_scheduling.staff_scheduling.schedules.model import TemplateRemoval
from src.staff_scheduling.staff_scheduling.schedules.service import ScheduleCatalogService


@pytest.fixture
def catalog():
    assignments = InMemoryAssignments()
    templates = InMemoryTemplates([make_template(1, "Centralista Turno Mañana")], assignments)
    return ScheduleCatalogService(templates), assignments


def test_create_parses_times_and_weekdays(catalog, admin):
    svc, _ = catalog

    created = svc.create(admin, name="Nocturno", entry="23:30", exit_="07:00", weekdays="6,0")

    assert created.entry_time == time(23, 30)
    assert created.weekdays == (0, 6)
    assert created.weekday_names == ["Domingo", "Sábado"]
    assert created.is_overnight
    assert created.duration_hours == 7.5


@pytest.mark.parametrize(
    "fields",
    [
        {"name": "", "entry": "08:00", "exit_": "16:00", "weekdays": [1]},
        {"name": "X", "entry": "8am", "exit_": "16:00", "weekdays": [1]},
        {"name": "X", "entry": "08:00", "exit_": "16:00", "weekdays": []},
        {"name": "X", "entry": "08:00", "exit_": "16:00", "weekdays": [7]},
        {"name": "X", "entry": "08:00", "exit_": "16:00", "weekdays": [1], "kind": "rotation"},
    ],
)
def test_create_rejects_invalid_input(catalog, admin, fields):
    svc, _ = catalog

    with pytest.raises(ValidationError):
        svc.create(admin, **fields)


def test_create_duplicate_name_conflicts(catalog, admin):
    svc, _ = catalog

    with pytest.raises(ConflictError):
        svc.create(admin, name="Centralista Turno Mañana", entry="08:00", exit_="16:00", weekdays=[1])


def test_create_requires_admin(catalog, staff):
    svc, _ = catalog

    with pytest.raises(AuthorizationError):
        svc.create(staff, name="X", entry="08:00", exit_="16:00", weekdays=[1])


def test_update_applies_only_present_fields(catalog, admin):
    svc, _ = catalog

    patch = svc.build_patch({"hora_salida": "17:00", "tipo": "rotation"})
    updated = svc.update(admin, 1, patch)

    assert updated.exit_time == time(17, 0)
    assert updated.entry_time == time(8, 0)
    assert updated.kind == TemplateKind.ROTATION


def test_update_errors(catalog, admin):
    svc, _ = catalog
    svc.create(admin, name="Otro", entry="08:00", exit_="16:00", weekdays=[1])

    with pytest.raises(ValidationError):
        svc.update(admin, 1, svc.build_patch({}))
    with pytest.raises(NotFoundError):
        svc.update(admin, 404, svc.build_patch({"descripcion": "x"}))
    with pytest.raises(ConflictError):
        svc.update(admin, 1, svc.build_patch({"nombre": "Otro"}))
    with pytest.raises(ValidationError):
        svc.build_patch({"dias_semana": "1,9"})


def test_update_cannot_turn_a_roleless_template_into_a_rotation(catalog, admin):
    svc, _ = catalog
    created = svc.create(admin, name="Fijo", entry="08:00", exit_="16:00", weekdays=[1])

    with pytest.raises(ValidationError):
        svc.update(admin, created.template_id, svc.build_patch({"tipo": "rotation"}))
    assert svc.get(created.template_id).kind == TemplateKind.STANDARD

    updated = svc.update(admin, created.template_id, svc.build_patch({"tipo": "rotation", "rol_requerido": "Despachador"}))
    assert updated.kind == TemplateKind.ROTATION
    assert updated.required_role == "Despachador"


def test_update_clears_role_and_description_with_empty_strings(catalog, admin):
    svc, _ = catalog
    svc.update(admin, 1, svc.build_patch({"descripcion": "Turno diurno"}))

    with pytest.raises(ValidationError):
        svc.update(admin, 1, svc.build_patch({"rol_requerido": ""}))

    updated = svc.update(admin, 1, svc.build_patch({"tipo": "standard", "rol_requerido": "", "descripcion": ""}))
    assert updated.required_role is None
    assert updated.description is None


def test_update_refuses_to_deactivate_an_assigned_template(catalog, admin):
    svc, assignments = catalog
    assignments.assign(employee_id=5, template_id=1, start_date=date(2024, 6, 1))

    with pytest.raises(ConflictError):
        svc.update(admin, 1, svc.build_patch({"activo": False}))
    assert svc.get(1).is_active is True

    assignments.deactivate_all()
    assert svc.update(admin, 1, svc.build_patch({"activo": "false"})).is_active is False


def test_delete_blocked_while_assigned(catalog, admin):
    svc, assignments = catalog
    assignments.assign(employee_id=5, template_id=1, start_date=date(2024, 6, 1))

    with pytest.raises(ConflictError):
        svc.delete(admin, 1)


def test_delete_with_history_only_deactivates(catalog, admin):
    svc, assignments = catalog
    assignments.assign(employee_id=5, template_id=1, start_date=date(2024, 6, 1))
    assignments.deactivate_all()

    assert svc.delete(admin, 1) == TemplateRemoval.DEACTIVATED
    assert svc.get(1).is_active is False


def test_delete_unreferenced_removes_it(catalog, admin):
    svc, _ = catalog

    assert svc.delete(admin, 1) == TemplateRemoval.DELETED
    with pytest.raises(NotFoundError):
        svc.get(1)
    with pytest.raises(NotFoundError):
        svc.delete(admin, 1)
