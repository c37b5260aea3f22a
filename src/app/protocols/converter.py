"""Protocolo de conversão bidirecional entre JSCalendar e outro formato."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.event import Event


@runtime_checkable
class CalendarConverterProtocol(Protocol):
    """Contrato de conversores de formato (ex: iCalendar)."""

    def parse(self, data: bytes | str) -> Event: ...

    def parse_all(self, data: bytes | str) -> list[Event]: ...

    def format(self, event: Event) -> bytes: ...

    def format_all(self, events: Sequence[Event]) -> bytes: ...

    def detect(self, data: bytes | str) -> bool: ...
