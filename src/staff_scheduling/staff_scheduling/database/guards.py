"""Transactional helpers for "one current record per key" rules.

All helpers run on a cursor opened by ``db_cursor`` so the locking read and
the writes that follow share one transaction. Table and column names come
from repository code, never from user input.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

import mysql.connector

from ..core.exceptions import ConflictError


def _where(key: Mapping[str, Any]) -> str:
    return " AND ".join(f"{col}=%s" for col in key)


def _insert(cur, table: str, values: Mapping[str, Any]) -> int:
    cols = ", ".join(values)
    marks = ", ".join(["%s"] * len(values))
    cur.execute(f"INSERT INTO {table}({cols}) VALUES({marks})", tuple(values.values()))
    return int(cur.lastrowid)


def replace_active(
    cur,
    *,
    table: str,
    id_column: str,
    key: Mapping[str, Any],
    values: Mapping[str, Any],
    active_column: str = "is_active",
) -> int:
    """Deactivate every active row for ``key`` and insert the new active row.

    Returns the id of the inserted row.
    """
    where = _where(key)
    params = tuple(key.values())
    cur.execute(f"SELECT {id_column} FROM {table} WHERE {where} AND {active_column}=1 FOR UPDATE", params)
    cur.fetchall()
    cur.execute(f"UPDATE {table} SET {active_column}=0 WHERE {where} AND {active_column}=1", params)
    return _insert(cur, table, {**key, **values, active_column: 1})


def insert_if_absent(
    cur,
    *,
    table: str,
    id_column: str,
    key: Mapping[str, Any],
    values: Mapping[str, Any],
    conflict_message: str,
) -> int:
    """Insert a row unless one already exists for ``key``.

    The unique index on ``key`` backs the locking read, so a concurrent insert
    for the same key also ends as ``ConflictError``.
    """
    cur.execute(f"SELECT {id_column} FROM {table} WHERE {_where(key)} FOR UPDATE", tuple(key.values()))
    if cur.fetchall():
        raise ConflictError(conflict_message)
    try:
        return _insert(cur, table, {**key, **values})
    except mysql.connector.IntegrityError as exc:
        raise ConflictError(conflict_message) from exc


def transition(
    cur,
    *,
    table: str,
    id_column: str,
    record_id: int,
    status_column: str,
    from_status: str,
    values: Mapping[str, Any],
) -> bool:
    """Apply ``values`` only while the row is still in ``from_status``.

    Returns False when another request moved the row first.
    """
    assignments = ", ".join(f"{col}=%s" for col in values)
    cur.execute(
        f"UPDATE {table} SET {assignments} WHERE {id_column}=%s AND {status_column}=%s",
        (*values.values(), int(record_id), from_status),
    )
    return cur.rowcount > 0


def lock_owner(cur, *, table: str, id_column: str, owner_id: int) -> bool:
    """Lock one parent row so writers for the same owner run one after another.

    Returns False when the row does not exist.
    """
    cur.execute(f"SELECT {id_column} FROM {table} WHERE {id_column}=%s FOR UPDATE", (int(owner_id),))
    return bool(cur.fetchall())


def range_taken(
    cur,
    *,
    table: str,
    id_column: str,
    key: Mapping[str, Any],
    start: Any,
    end: Any,
    status_column: str,
    statuses: Sequence[str],
    start_column: str = "start_date",
    end_column: str = "end_date",
    exclude_id: Optional[int] = None,
) -> bool:
    """True if a row for ``key`` in one of ``statuses`` intersects ``[start, end]``.

    Call after ``lock_owner`` so the answer holds until the transaction ends.
    """
    marks = ", ".join(["%s"] * len(statuses))
    query = (
        f"SELECT {id_column} FROM {table} WHERE {_where(key)} AND {status_column} IN ({marks}) "
        f"AND {start_column} <= %s AND %s <= {end_column}"
    )
    params: list[Any] = [*key.values(), *statuses, end, start]
    if exclude_id is not None:
        query += f" AND {id_column} <> %s"
        params.append(int(exclude_id))
    cur.execute(query + " FOR UPDATE", tuple(params))
    return bool(cur.fetchall())
