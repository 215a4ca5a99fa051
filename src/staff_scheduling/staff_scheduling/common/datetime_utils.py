from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.exceptions import ValidationError

SECONDS_PER_DAY = 24 * 60 * 60


def parse_iso_date(value: str, field_name: str = "Fecha") -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} inválida (YYYY-MM-DD)")


def parse_optional_date(value: Optional[str], field_name: str = "Fecha") -> Optional[date]:
    if value is None or not str(value).strip():
        return None
    return parse_iso_date(str(value), field_name)


def parse_hhmm(value: str, field_name: str = "Hora") -> time:
    """Parse 'HH:MM' (or 'HH:MM:SS') into a time."""
    v = (value or "").strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"{field_name} inválida (HH:MM)")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def current_week(today: date) -> int:
    """Whole weeks elapsed since January 1st of ``today``'s year."""
    return (today - date(today.year, 1, 1)).days // 7


def weekday_of(day: date) -> int:
    """Weekday in the catalog encoding (0=Sunday .. 6=Saturday)."""
    return (day.weekday() + 1) % 7


def from_iso_weekday(value: int) -> int:
    """Convert ISO weekday (1=Monday .. 7=Sunday) to 0=Sunday .. 6=Saturday."""
    if not 1 <= int(value) <= 7:
        raise ValidationError("Día ISO fuera de rango (1-7)")
    return int(value) % 7


def shift_hours(entry: time, exit_: time) -> float:
    """Length of a shift in hours; an exit at or before the entry ends next day."""
    start = entry.hour * 3600 + entry.minute * 60 + entry.second
    end = exit_.hour * 3600 + exit_.minute * 60 + exit_.second
    if end <= start:
        end += SECONDS_PER_DAY
    return (end - start) / 3600


def hours_between(start: datetime, end: datetime) -> float:
    """Fractional hours from ``start`` to ``end``, never negative."""
    return max((end - start) / timedelta(hours=1), 0.0)


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")
