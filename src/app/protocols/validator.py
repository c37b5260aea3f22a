"""Protocolo de validação de objetos de calendário."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from api.validators.jscalendar.errors import ValidationErrors
    from app.domain.group import CalendarObject


@runtime_checkable
class CalendarValidatorProtocol(Protocol):
    """Contrato mínimo: devolve todas as violações do objeto de uma vez."""

    def validate(self, obj: CalendarObject | None) -> ValidationErrors: ...
