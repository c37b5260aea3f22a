"""ICalendarConverter: fachada de conversão iCalendar <-> JSCalendar.

Responsabilidades:
- Ler texto iCalendar (biblioteca icalendar) e normalizar cada VEVENT
- Exportar Events como VCALENDAR com VERSION/PRODID das settings
- Isolar falhas por componente em conversões em lote

Uso:
    converter = ICalendarConverter()
    batch = converter.parse_batch(ics_bytes)
    for failure in batch.failures:
        ...
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from icalendar import Calendar

from api.connectors.icalendar.detection import detect
from api.normalizers.icalendar import ICalendarNormalizer
from api.payload_builders.icalendar import ICalendarComponentBuilder
from app.observability import correlation_scope
from config.settings import ICalendarSettings, get_icalendar_settings
from utils.errors import ConversionError, ParseError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.event import Event
    from app.protocols import ComponentBuilderProtocol, ComponentNormalizerProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ConversionFailure:
    """Componente que não pôde ser convertido."""

    index: int
    message: str
    uid: str | None = None


@dataclass(slots=True)
class ConversionBatch:
    """Resultado de conversão em lote: sucessos e falhas isoladas."""

    events: list[Event] = field(default_factory=list)
    failures: list[ConversionFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def _load_calendar(data: bytes | str) -> Calendar:
    try:
        return Calendar.from_ical(data)
    except ValueError as exc:
        raise ParseError(f"failed to parse iCalendar: {exc}") from exc


def _vevents(data: bytes | str) -> list[Any]:
    return list(_load_calendar(data).walk("VEVENT"))


class ICalendarConverter:
    """Conversor iCalendar (CalendarConverterProtocol)."""

    def __init__(
        self,
        settings: ICalendarSettings | None = None,
        *,
        normalizer: ComponentNormalizerProtocol | None = None,
        builder: ComponentBuilderProtocol | None = None,
    ) -> None:
        self._settings = settings or get_icalendar_settings()
        self._normalizer = normalizer or ICalendarNormalizer()
        self._builder = builder or ICalendarComponentBuilder(self._settings)

    def parse(self, data: bytes | str) -> Event:
        """Converte texto com exatamente um VEVENT.

        Raises:
            ParseError: texto iCalendar inválido.
            ConversionError: zero ou múltiplos VEVENTs, ou falha no VEVENT.
        """
        events = self.parse_all(data)
        if not events:
            raise ConversionError("no events found in iCalendar data")
        if len(events) > 1:
            raise ConversionError("multiple events found, use parse_all instead")
        return events[0]

    def parse_all(self, data: bytes | str) -> list[Event]:
        """Converte todos os VEVENTs; a primeira falha aborta a chamada.

        Para isolar falhas por componente use parse_batch.
        """
        events: list[Event] = []
        for index, component in enumerate(_vevents(data)):
            try:
                events.append(self._normalizer.normalize(component))
            except ConversionError as exc:
                exc.index = index
                raise
        return events

    def parse_batch(self, data: bytes | str) -> ConversionBatch:
        """Converte todos os VEVENTs isolando falhas por componente.

        Raises:
            ParseError: texto iCalendar inválido (nenhum componente lido).
        """
        batch = ConversionBatch()
        with correlation_scope():
            components = _vevents(data)
            for index, component in enumerate(components):
                try:
                    batch.events.append(self._normalizer.normalize(component))
                except ConversionError as exc:
                    batch.failures.append(ConversionFailure(index, str(exc), exc.uid))
                    logger.warning(
                        "icalendar_component_failed",
                        extra={
                            "component": "icalendar_converter",
                            "action": "parse_batch",
                            "result": "skipped",
                            "index": index,
                        },
                    )

            logger.info(
                "icalendar_batch_parsed",
                extra={
                    "component": "icalendar_converter",
                    "action": "parse_batch",
                    "result": "ok" if batch.ok else "partial",
                    "event_count": len(batch.events),
                    "failure_count": len(batch.failures),
                },
            )
        return batch

    def format(self, event: Event) -> bytes:
        """Exporta um Event como VCALENDAR.

        Raises:
            ConversionError: Event não pôde ser convertido.
        """
        calendar = self._new_calendar()
        calendar.add_component(self._builder.build(event))
        return calendar.to_ical()

    def format_all(self, events: Sequence[Event]) -> bytes:
        """Exporta vários Events; os que falham são omitidos e logados.

        Raises:
            ConversionError: lista vazia ou nenhum Event convertido.
        """
        if not events:
            raise ConversionError("no events to convert")

        calendar = self._new_calendar()
        converted = 0
        with correlation_scope():
            for index, event in enumerate(events):
                try:
                    calendar.add_component(self._builder.build(event))
                except ConversionError as exc:
                    logger.warning(
                        "icalendar_event_skipped",
                        extra={
                            "component": "icalendar_converter",
                            "action": "format_all",
                            "result": "skipped",
                            "index": index,
                            "uid": exc.uid,
                        },
                    )
                    continue
                converted += 1

        if not converted:
            raise ConversionError("no events could be converted")
        return calendar.to_ical()

    def detect(self, data: bytes | str) -> bool:
        return detect(data)

    def _new_calendar(self) -> Calendar:
        calendar = Calendar()
        calendar.add("prodid", self._settings.prodid)
        calendar.add("version", self._settings.version)
        return calendar


__all__ = ["ConversionBatch", "ConversionFailure", "ICalendarConverter"]
