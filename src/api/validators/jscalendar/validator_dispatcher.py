"""Despacho de validação pela variante do objeto de calendário."""

from __future__ import annotations

from typing import TYPE_CHECKING

from api.validators.jscalendar.errors import ValidationError, ValidationErrors
from api.validators.jscalendar.objects import validate_event, validate_group, validate_task
from app.domain.event import Event
from app.domain.group import Group
from app.domain.task import Task

if TYPE_CHECKING:
    from app.domain.group import CalendarObject


def validate(obj: CalendarObject | None) -> ValidationErrors:
    """Valida Event, Task ou Group; coleção vazia significa sucesso."""
    match obj:
        case Event():
            return validate_event(obj)
        case Task():
            return validate_task(obj)
        case Group():
            return validate_group(obj)
        case None:
            return ValidationErrors([ValidationError("object", "object is absent")])
        case _:
            return ValidationErrors(
                [ValidationError("@type", "must be 'Event', 'Task' or 'Group'", type(obj).__name__)]
            )


class JSCalendarValidator:
    """Validador de objetos JSCalendar (CalendarValidatorProtocol)."""

    def validate(self, obj: CalendarObject | None) -> ValidationErrors:
        return validate(obj)

    def validate_or_raise(self, obj: CalendarObject | None) -> None:
        """Levanta ValidationErrors se houver violações."""
        validate(obj).raise_if_any()
