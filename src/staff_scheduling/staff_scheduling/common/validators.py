from __future__ import annotations

from typing import Iterable, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} es requerido")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} debe tener al menos {min_len} caracteres")
    return value


def require_int_range(value: object, field_name: str, low: int, high: int) -> int:
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} debe ser un número entre {low} y {high}")
    if number < low or number > high:
        raise ValidationError(f"{field_name} debe ser un número entre {low} y {high}")
    return number


def require_weekdays(values: Iterable[object]) -> tuple[int, ...]:
    """Validate a weekday set (0=Domingo .. 6=Sábado); returns it sorted, deduplicated."""
    days: set[int] = set()
    for v in values:
        try:
            day = int(str(v).strip())
        except ValueError:
            raise ValidationError("Los días de la semana deben ser números del 0 al 6 (0=Domingo, 6=Sábado)")
        if day < 0 or day > 6:
            raise ValidationError("Los días de la semana deben ser números del 0 al 6 (0=Domingo, 6=Sábado)")
        days.add(day)
    if not days:
        raise ValidationError("Debe indicar al menos un día de la semana")
    return tuple(sorted(days))


def parse_weekdays(value: object) -> tuple[int, ...]:
    """Accept '1,2,3' strings or lists, as sent by clients."""
    if isinstance(value, str):
        parts = [p for p in value.split(",") if p.strip()]
        return require_weekdays(parts)
    if isinstance(value, (list, tuple, set)):
        return require_weekdays(value)
    raise ValidationError("Días de la semana inválidos")


def require_positive_id(value: object, field_name: str) -> int:
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} no es válido")
    if number <= 0:
        raise ValidationError(f"{field_name} no es válido")
    return number
