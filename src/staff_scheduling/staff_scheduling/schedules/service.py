from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.datetime_utils import parse_hhmm
from ..common.permissions import Identity, require_admin
from ..common.validators import parse_weekdays, require_non_empty
from ..core.enums import TemplateKind
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import ScheduleTemplate, ScheduleTemplatePatch, TemplateRemoval
from .repository import ScheduleTemplateRepository

logger = logging.getLogger(__name__)


def _parse_kind(value: object) -> TemplateKind:
    try:
        return TemplateKind(value)
    except ValueError:
        raise ValidationError("Tipo de horario no válido")


class ScheduleCatalogService:
    """Use cases for schedule templates (admin maintained)."""

    def __init__(self, templates: ScheduleTemplateRepository):
        self._templates = templates

    def get(self, template_id: int) -> ScheduleTemplate:
        template = self._templates.get_by_id(int(template_id))
        if not template:
            raise NotFoundError("Horario no encontrado")
        return template

    def list_all(self, *, active_only: bool = False) -> Sequence[ScheduleTemplate]:
        return self._templates.list_all(active_only=active_only)

    def create(
        self,
        actor: Identity,
        *,
        name: str,
        entry: str,
        exit_: str,
        weekdays: object,
        description: Optional[str] = None,
        kind: object = TemplateKind.STANDARD,
        required_role: Optional[str] = None,
    ) -> ScheduleTemplate:
        require_admin(actor)

        name = require_non_empty(name, "Nombre")
        entry_time = parse_hhmm(require_non_empty(entry, "Hora de entrada"), "Hora de entrada")
        exit_time = parse_hhmm(require_non_empty(exit_, "Hora de salida"), "Hora de salida")
        days = parse_weekdays(weekdays)
        template_kind = _parse_kind(kind)
        role = (required_role or "").strip() or None
        if template_kind == TemplateKind.ROTATION and not role:
            raise ValidationError("Un horario de rotación requiere un rol")

        if self._templates.get_by_name(name):
            raise ConflictError("Ya existe un horario con ese nombre")

        template_id = self._templates.create(
            name=name,
            entry_time=entry_time,
            exit_time=exit_time,
            weekdays=days,
            description=(description or "").strip() or None,
            kind=template_kind,
            required_role=role,
        )
        logger.info("Schedule template %s created (%s)", template_id, name)
        return self.get(template_id)

    def build_patch(self, fields: dict) -> ScheduleTemplatePatch:
        """Validate client-supplied fields one by one into a patch."""
        name = fields.get("nombre")
        entry = fields.get("hora_entrada")
        exit_ = fields.get("hora_salida")
        weekdays = fields.get("dias_semana")
        active = fields.get("activo")
        kind = fields.get("tipo")
        return ScheduleTemplatePatch(
            name=require_non_empty(name, "Nombre") if name is not None else None,
            entry_time=parse_hhmm(entry, "Hora de entrada") if entry is not None else None,
            exit_time=parse_hhmm(exit_, "Hora de salida") if exit_ is not None else None,
            weekdays=parse_weekdays(weekdays) if weekdays is not None else None,
            description=str(fields["descripcion"]).strip() if fields.get("descripcion") is not None else None,
            kind=_parse_kind(kind) if kind is not None else None,
            required_role=str(fields["rol_requerido"]).strip() if fields.get("rol_requerido") is not None else None,
            is_active=active in (True, 1, "1", "true") if active is not None else None,
        )

    def update(self, actor: Identity, template_id: int, patch: ScheduleTemplatePatch) -> ScheduleTemplate:
        """Apply ``patch`` after validating the template it would produce.

        Deactivation is refused while active assignments use the template.
        """
        require_admin(actor)
        if patch.is_empty():
            raise ValidationError("No hay campos para actualizar")

        current = self.get(template_id)
        kind = patch.kind or current.kind
        role = current.required_role if patch.required_role is None else (patch.required_role or None)
        if kind == TemplateKind.ROTATION and not role:
            raise ValidationError("Un horario de rotación requiere un rol")

        if patch.name is not None:
            other = self._templates.get_by_name(patch.name)
            if other and other.template_id != int(template_id):
                raise ConflictError("Ya existe un horario con ese nombre")

        if not self._templates.update(int(template_id), patch):
            raise NotFoundError("Horario no encontrado")
        logger.info("Schedule template %s updated: %s", template_id, sorted(patch.to_columns()))
        return self.get(template_id)

    def delete(self, actor: Identity, template_id: int) -> TemplateRemoval:
        """Remove a template; blocked while any active assignment uses it."""
        require_admin(actor)

        outcome = self._templates.remove(int(template_id))
        if outcome == TemplateRemoval.NOT_FOUND:
            raise NotFoundError("Horario no encontrado")
        if outcome == TemplateRemoval.REFERENCED:
            raise ConflictError("No se puede eliminar el horario porque hay empleados asignados a él")
        logger.info("Schedule template %s removed (%s)", template_id, outcome.value)
        return outcome
