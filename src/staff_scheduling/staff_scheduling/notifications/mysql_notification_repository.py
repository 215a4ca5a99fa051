from __future__ import annotations

from ..core.enums import NotificationLevel, PermissionTag
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .repository import NotificationSink


class MySQLNotificationSink(NotificationSink):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def notify_admins(self, *, title: str, message: str, level: NotificationLevel = NotificationLevel.INFO) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(employee_id, title, message, level)
                SELECT e.employee_id, %s, %s, %s
                FROM employees e
                JOIN roles r ON r.role_id = e.role_id
                WHERE r.permission_tag=%s AND e.is_active=1
                """,
                (title, message, level.value, PermissionTag.ADMIN.value),
            )

    def notify_employee(
        self,
        *,
        employee_id: int,
        title: str,
        message: str,
        level: NotificationLevel = NotificationLevel.INFO,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO notifications(employee_id, title, message, level) VALUES(%s,%s,%s,%s)",
                (int(employee_id), title, message, level.value),
            )
