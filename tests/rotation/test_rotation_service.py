from datetime import date

import pytest

from fakes import InMemoryAssignments, InMemoryEmployees, InMemoryTemplates, make_employee, make_template

from src.staff_scheduling.staff_scheduling.core.exceptions import AuthorizationError, ValidationError
from src.staff_scheduling.staff_scheduling.rotation.service import RotationService

MONDAY_WEEK_10 = date(2024, 3, 11)


def _service(employees, templates=None, assignments=None):
    assignments = assignments or InMemoryAssignments()
    templates = templates or [make_template(1, "Centralista Mañana"), make_template(2, "Centralista Tarde")]
    svc = RotationService(
        InMemoryEmployees(employees),
        InMemoryTemplates(templates, assignments),
        assignments,
        system_admin_email="admin@sistema.com",
    )
    return svc, assignments


def test_execute_replaces_previous_assignments(admin):
    svc, assignments = _service([make_employee(1, "A"), make_employee(2, "B")])
    assignments.assign(employee_id=1, template_id=99, start_date=date(2024, 1, 1))

    result = svc.execute(admin, MONDAY_WEEK_10)

    assert result.assignments_made == 2
    assert result.employees_considered == 2
    assert result.templates_considered == 2
    active = [(r.employee_id, r.template_id, r.start_date) for r in assignments.rows if r.is_active]
    assert active == [(1, 1, MONDAY_WEEK_10), (2, 2, MONDAY_WEEK_10)]


def test_preview_matches_execute_and_persists_nothing(admin):
    svc, assignments = _service([make_employee(1, "A"), make_employee(2, "B"), make_employee(3, "C")])

    plan = svc.preview(admin, MONDAY_WEEK_10)
    assert assignments.rows == []

    result = svc.execute(admin, MONDAY_WEEK_10)
    assert result.slots == plan.slots


def test_execute_without_eligible_employees_is_rejected(admin):
    svc, assignments = _service([make_employee(1, "Admin", email="admin@sistema.com")])

    with pytest.raises(ValidationError):
        svc.execute(admin, MONDAY_WEEK_10)
    assert assignments.rows == []


def test_reset_deactivates_everything(admin):
    svc, assignments = _service([make_employee(1, "A"), make_employee(2, "B")])
    svc.execute(admin, MONDAY_WEEK_10)

    assert svc.reset(admin) == 2
    assert assignments.count_active() == 0


def test_stats_report_week_and_counts(admin):
    svc, _ = _service([make_employee(1, "A"), make_employee(2, "B"), make_employee(3, "Admin", email="admin@sistema.com")])
    svc.execute(admin, MONDAY_WEEK_10)

    stats = svc.stats(admin, MONDAY_WEEK_10)

    assert stats["empleadosActivos"] == 2
    assert stats["horariosDisponibles"] == 2
    assert stats["asignacionesActivas"] == 2
    assert stats["semanaActual"] == 10
    assert stats["promedioEmpleadosPorHorario"] == 1.0


def test_rotation_is_admin_only(staff):
    svc, _ = _service([make_employee(1, "A")])

    with pytest.raises(AuthorizationError):
        svc.preview(staff, MONDAY_WEEK_10)
    with pytest.raises(AuthorizationError):
        svc.reset(staff)
