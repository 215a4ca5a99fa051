from datetime import date, time

from fakes import make_employee, make_template

from src.staff_scheduling.staff_scheduling.common.datetime_utils import current_week
from src.staff_scheduling.staff_scheduling.core.enums import TemplateKind
from src.staff_scheduling.staff_scheduling.rotation.planner import plan_rotation


def _weekend_templates():
    return [
        make_template(
            20,
            "Part Time Sábado Noche",
            kind=TemplateKind.PART_TIME,
            required_role=None,
            entry=time(23, 30),
            exit_=time(7, 0),
            weekdays=(6,),
        ),
        make_template(
            21,
            "Part Time Domingo Tarde",
            kind=TemplateKind.PART_TIME,
            required_role=None,
            entry=time(15, 0),
            exit_=time(23, 0),
            weekdays=(0,),
        ),
    ]


def test_two_centralistas_week_10_fill_positions_in_order():
    a = make_employee(1, "A")
    b = make_employee(2, "B")
    templates = [
        make_template(1, "Centralista Turno Mañana"),
        make_template(2, "Centralista Turno Tarde", entry=time(14, 30), exit_=time(23, 30)),
    ]

    plan = plan_rotation([b, a], templates, week=10)

    assert [s.employee_id for s in plan.slots] == [1, 2]
    assert plan.employees_considered == 2
    assert plan.templates_considered == 2


def test_next_week_swaps_the_pair():
    employees = [make_employee(1, "A"), make_employee(2, "B")]
    templates = [make_template(1, "Mañana"), make_template(2, "Tarde")]

    plan = plan_rotation(employees, templates, week=11)

    assert [s.employee_id for s in plan.slots] == [2, 1]


def test_same_inputs_give_identical_plans():
    employees = [make_employee(i, f"E{i}", "Centralista" if i % 2 else "Despachador") for i in range(1, 8)]
    templates = [
        make_template(1, "Centralista Mañana"),
        make_template(2, "Centralista Tarde"),
        make_template(3, "Despachador Mañana", required_role="Despachador"),
    ]

    first = plan_rotation(employees, templates, week=23)
    second = plan_rotation(list(reversed(employees)), templates, week=23)

    assert first == second


def test_empty_bucket_leaves_slot_unfilled():
    templates = [make_template(1, "Centralista Mañana"), make_template(2, "Noche", required_role="Turno Noche")]

    plan = plan_rotation([make_employee(1, "A")], templates, week=0)

    assert [s.template_name for s in plan.unfilled_slots] == ["Noche"]
    assert len(plan.filled_slots) == 1


def test_part_timers_fill_both_weekend_templates_and_no_role_bucket():
    pt = make_employee(5, "Pablo", "Centralista", part_time=True)
    regular = make_employee(6, "Rosa", "Centralista")
    templates = [make_template(1, "Centralista Mañana"), *_weekend_templates()]

    plan = plan_rotation([pt, regular], templates, week=3)

    by_template = {}
    for slot in plan.filled_slots:
        by_template.setdefault(slot.template_id, []).append(slot.employee_id)
    assert by_template == {1: [6], 20: [5], 21: [5]}


def test_admin_account_and_inactive_employees_are_excluded():
    employees = [
        make_employee(1, "Admin", "Centralista", email="admin@sistema.com"),
        make_employee(2, "Inactiva", active=False),
        make_employee(3, "Carla"),
    ]

    plan = plan_rotation(employees, [make_template(1, "Centralista Mañana")], week=7, excluded_emails=["ADMIN@sistema.com"])

    assert plan.employees_considered == 1
    assert plan.slots[0].employee_id == 3


def test_inactive_and_non_rotation_templates_are_ignored():
    templates = [
        make_template(1, "Manual", kind=TemplateKind.STANDARD),
        make_template(2, "Centralista Mañana", active=False),
        make_template(3, "Centralista Tarde"),
    ]

    plan = plan_rotation([make_employee(1, "A"), make_employee(2, "B")], templates, week=0)

    assert [s.template_id for s in plan.slots] == [3]
    assert plan.slots[0].employee_id == 1


def test_current_week_counts_whole_weeks_since_january_first():
    assert current_week(date(2024, 1, 1)) == 0
    assert current_week(date(2024, 1, 7)) == 0
    assert current_week(date(2024, 1, 8)) == 1
    assert current_week(date(2024, 3, 11)) == 10
