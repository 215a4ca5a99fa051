from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import PersistenceError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` inside one transaction.

    Commits when the block exits normally and rolls back on any exception.
    Driver errors are re-raised as ``PersistenceError``; domain errors raised
    inside the block propagate unchanged.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.exception("Could not open a database connection")
        raise PersistenceError("No se pudo conectar con la base de datos") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        conn.rollback()
        logger.exception("Database operation failed")
        raise PersistenceError("Error al acceder a la base de datos") from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector returns TIME as ``timedelta`` (C extension and pure
    Python alike); some drivers and fixtures hand back ``time`` or 'HH:MM:SS'.
    """

    if value is None:
        return None
    if isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours, rest = divmod(total_seconds, 3600)
        minutes, seconds = divmod(rest, 60)
        return time(hour=hours, minute=minutes, second=seconds)
    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=int(parts[0]), minute=int(parts[1]), second=seconds)
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def normalize_mysql_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value), "%Y-%m-%d").date()


def weekdays_to_column(days) -> str:
    return ",".join(str(int(d)) for d in sorted(set(days)))


def weekdays_from_column(value: Optional[str]) -> tuple[int, ...]:
    if not value:
        return ()
    return tuple(sorted({int(p) for p in str(value).split(",") if p.strip()}))
