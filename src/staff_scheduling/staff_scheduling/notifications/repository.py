from __future__ import annotations

from typing import Protocol

from ..core.enums import NotificationLevel


class NotificationSink(Protocol):
    def notify_admins(self, *, title: str, message: str, level: NotificationLevel = NotificationLevel.INFO) -> None:
        raise NotImplementedError

    def notify_employee(
        self,
        *,
        employee_id: int,
        title: str,
        message: str,
        level: NotificationLevel = NotificationLevel.INFO,
    ) -> None:
        raise NotImplementedError
