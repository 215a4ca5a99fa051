from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta

import pytest

from fakes import InMemoryEmployees, make_employee

from src.staff_scheduling.staff_scheduling.attendance.model import AttendanceRecord, AttendanceStats
from src.staff_scheduling.staff_scheduling.attendance.service import AttendanceService
from src.staff_scheduling.staff_scheduling.core.enums import AttendanceState
from src.staff_scheduling.staff_scheduling.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
)


class InMemoryAttendance:
    def __init__(self):
        self._by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0

    def get_for_employee_and_date(self, employee_id, work_date):
        return self._by_key.get((employee_id, work_date))

    def create_entry(self, *, employee_id, work_date, entry_time, state, notes=None, ip_address=None, location=None):
        if (employee_id, work_date) in self._by_key:
            raise ConflictError("Ya existe un registro de asistencia para esta fecha")
        self._id += 1
        self._by_key[(employee_id, work_date)] = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            work_date=work_date,
            entry_time=entry_time,
            state=state,
            notes=notes,
            ip_address=ip_address,
            location=location,
        )
        return self._id

    def record_exit(self, *, attendance_id, exit_time, worked_hours, notes=None):
        for key, rec in self._by_key.items():
            if rec.attendance_id == attendance_id and rec.exit_time is None:
                self._by_key[key] = replace(rec, exit_time=exit_time, worked_hours=worked_hours)
                return True
        return False

    def list_range(self, *, start_date, end_date, employee_id=None):
        items = [
            r
            for (emp, day), r in self._by_key.items()
            if start_date <= day <= end_date and (employee_id is None or emp == employee_id)
        ]
        return sorted(items, key=lambda r: r.work_date, reverse=True)


@pytest.fixture
def recorder():
    repo = InMemoryAttendance()
    employees = InMemoryEmployees([make_employee(2, "Ana"), make_employee(3, "Luis")])
    return AttendanceService(repo, employees), repo


def test_clock_in_then_out_records_eight_and_a_half_hours(recorder, staff):
    svc, repo = recorder
    entry = datetime(2024, 6, 3, 8, 0, 0)

    svc.clock_in(staff, ip_address="10.0.0.5", now=entry)
    out = svc.clock_out(staff, now=datetime(2024, 6, 3, 16, 30, 0))

    assert out.worked_hours == 8.5
    stored = repo.get_for_employee_and_date(2, entry.date())
    assert stored.worked_hours == 8.5
    assert stored.ip_address == "10.0.0.5"


def test_second_clock_in_same_day_conflicts(recorder, staff, fixed_now):
    svc, _ = recorder
    svc.clock_in(staff, now=fixed_now)

    with pytest.raises(ConflictError):
        svc.clock_in(staff, now=fixed_now + timedelta(hours=1))


def test_clock_out_requires_an_entry(recorder, staff, fixed_now):
    svc, _ = recorder

    with pytest.raises(NotFoundError):
        svc.clock_out(staff, now=fixed_now)


def test_clock_out_only_once(recorder, staff, fixed_now):
    svc, _ = recorder
    svc.clock_in(staff, now=fixed_now)
    svc.clock_out(staff, now=fixed_now + timedelta(hours=4))

    with pytest.raises(ConflictError):
        svc.clock_out(staff, now=fixed_now + timedelta(hours=5))


def test_statistics_over_empty_range_are_zero(recorder, staff, fixed_now):
    svc, _ = recorder

    stats = svc.statistics(staff, start=date(2024, 1, 1), end=date(2024, 1, 31), now=fixed_now)

    assert stats.as_dict() == {
        "totalDias": 0,
        "diasPresentes": 0,
        "diasAusentes": 0,
        "totalHoras": 0.0,
        "promedioHoras": 0.0,
        "porcentajeAsistencia": 0,
    }


def test_statistics_mix_present_and_absent_days(recorder, staff, admin):
    svc, _ = recorder
    for day, hours in ((3, 8), (4, 7.5)):
        start = datetime(2024, 6, day, 8, 0, 0)
        svc.clock_in(staff, now=start)
        svc.clock_out(staff, now=start + timedelta(hours=hours))
    svc.record_absence(admin, employee_id=2, work_date=date(2024, 6, 5))

    stats = svc.statistics(admin, employee_id=2, start=date(2024, 6, 1), end=date(2024, 6, 30))

    assert stats.total_days == 3
    assert stats.present_days == 2
    assert stats.absent_days == 1
    assert stats.total_hours == 15.5
    assert stats.average_hours == 7.75
    assert stats.attendance_percentage == 67


def test_statistics_of_other_employee_require_admin(recorder, staff):
    svc, _ = recorder

    with pytest.raises(AuthorizationError):
        svc.statistics(staff, employee_id=3)


def test_absence_conflicts_with_existing_record(recorder, staff, admin, fixed_now):
    svc, _ = recorder
    svc.clock_in(staff, now=fixed_now)

    with pytest.raises(ConflictError):
        svc.record_absence(admin, employee_id=2, work_date=fixed_now.date())
    with pytest.raises(NotFoundError):
        svc.record_absence(admin, employee_id=404, work_date=fixed_now.date())


def test_my_records_default_to_last_30_days(recorder, staff, fixed_now):
    svc, _ = recorder
    svc.clock_in(staff, now=fixed_now - timedelta(days=40))
    svc.clock_in(staff, now=fixed_now - timedelta(days=2))

    records, stats = svc.my_records(staff, now=fixed_now)

    assert [r.work_date for r in records] == [date(2024, 6, 1)]
    assert stats.total_days == 1


def test_stats_helper_handles_missing_hours():
    records = [
        AttendanceRecord(1, 2, date(2024, 6, 3), datetime(2024, 6, 3, 8), state=AttendanceState.PRESENT),
    ]

    assert AttendanceStats.from_records(records).average_hours == 0.0
