"""Protocolo de construção outbound (JSCalendar -> formato externo)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.domain.event import Event


@runtime_checkable
class ComponentBuilderProtocol(Protocol):
    """Constrói o componente externo correspondente a um Event."""

    def build(self, event: Event) -> Any: ...
