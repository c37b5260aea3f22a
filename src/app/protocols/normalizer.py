"""Protocolo de normalização inbound (formato externo -> JSCalendar)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.domain.event import Event


@runtime_checkable
class ComponentNormalizerProtocol(Protocol):
    """Converte um componente externo já parseado em Event."""

    def normalize(self, component: Any) -> Event: ...
