"""Conector iCalendar (RFC 5545): bridge bidirecional com JSCalendar.

Módulos:
- mappings: tabelas de status, privacidade, transparência e papéis
- rrule: tradutor de RRULE <-> RecurrenceRule
- detection: heurística de detecção de texto iCalendar
- converter: fachada ICalendarConverter (parse/format, lote com isolamento)

A leitura e escrita do texto iCalendar em si é feita pela biblioteca
`icalendar`; este pacote define apenas o mapeamento de propriedades.

Uso:
    from api.connectors.icalendar.converter import ICalendarConverter
"""

__all__: list[str] = []
