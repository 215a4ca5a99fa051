from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import TemplateKind
from .model import DayWindow, ScheduleTemplate, ScheduleTemplatePatch, TemplateRemoval


class ScheduleTemplateRepository(Protocol):
    def get_by_id(self, template_id: int) -> Optional[ScheduleTemplate]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[ScheduleTemplate]:
        raise NotImplementedError

    def list_all(
        self,
        *,
        active_only: bool = False,
        kinds: Optional[Sequence[TemplateKind]] = None,
    ) -> Sequence[ScheduleTemplate]:
        """Templates ordered by id (the rotation enumeration order)."""

        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        entry_time: time,
        exit_time: time,
        weekdays: Sequence[int],
        description: Optional[str],
        kind: TemplateKind,
        required_role: Optional[str],
    ) -> int:
        """Insert a template. Raises ConflictError on a duplicate name."""

        raise NotImplementedError

    def update(self, template_id: int, patch: ScheduleTemplatePatch) -> bool:
        """Apply the present fields of ``patch``. Returns False if the id is unknown.

        Raises ConflictError on a duplicate name, or when ``patch`` deactivates
        a template that active assignments still use.
        """

        raise NotImplementedError

    def remove(self, template_id: int) -> TemplateRemoval:
        """Delete, or deactivate when history references it, in one transaction."""

        raise NotImplementedError


class CustomScheduleRepository(Protocol):
    def save_custom(
        self,
        *,
        employee_id: int,
        name: str,
        entry_time: time,
        exit_time: time,
        weekdays: Sequence[int],
        description: str,
        day_windows: Sequence[DayWindow],
        start_date: date,
    ) -> tuple[int, int]:
        """Persist template, its day windows and the new active assignment.

        Returns ``(template_id, assignment_id)``.
        """

        raise NotImplementedError
