from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.staff_scheduling.staff_scheduling.common.datetime_utils import (
    current_week,
    from_iso_weekday,
    hours_between,
    parse_hhmm,
    parse_iso_date,
    parse_optional_date,
    shift_hours,
    weekday_of,
)
from src.staff_scheduling.staff_scheduling.common.validators import parse_weekdays
from src.staff_scheduling.staff_scheduling.core.exceptions import ValidationError


def test_weekday_encoding_starts_on_sunday():
    assert weekday_of(date(2024, 6, 2)) == 0
    assert weekday_of(date(2024, 6, 3)) == 1
    assert weekday_of(date(2024, 6, 8)) == 6
    assert from_iso_weekday(7) == 0
    assert from_iso_weekday(1) == 1


def test_current_week_counts_from_january_first():
    assert current_week(date(2024, 1, 1)) == 0
    assert current_week(date(2024, 1, 7)) == 0
    assert current_week(date(2024, 1, 8)) == 1
    assert current_week(date(2024, 12, 31)) == 52


@pytest.mark.parametrize(
    "entry, exit_, expected",
    [
        (time(8, 0), time(16, 0), 8.0),
        (time(22, 0), time(6, 0), 8.0),
        (time(9, 0), time(9, 0), 24.0),
        (time(14, 0), time(22, 30), 8.5),
    ],
)
def test_shift_hours(entry, exit_, expected):
    assert shift_hours(entry, exit_) == expected


def test_hours_between_is_never_negative():
    assert hours_between(datetime(2024, 6, 3, 8), datetime(2024, 6, 3, 16, 30)) == 8.5
    assert hours_between(datetime(2024, 6, 3, 22), datetime(2024, 6, 3, 6)) == 0.0


def test_parsing_helpers():
    assert parse_hhmm("08:30") == time(8, 30)
    assert parse_hhmm("23:59:59") == time(23, 59, 59)
    assert parse_iso_date("2024-02-29") == date(2024, 2, 29)
    assert parse_optional_date("  ") is None
    with pytest.raises(ValidationError):
        parse_hhmm("25:00")
    with pytest.raises(ValidationError):
        parse_iso_date("2023-02-29")


def test_parse_weekdays_accepts_csv_and_lists():
    assert parse_weekdays("5,1, 3,1") == (1, 3, 5)
    assert parse_weekdays([0, "6"]) == (0, 6)
    with pytest.raises(ValidationError):
        parse_weekdays("1,7")
    with pytest.raises(ValidationError):
        parse_weekdays([])
