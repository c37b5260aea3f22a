"""Connectors por formato: fachadas de conversão para formatos externos.

Estrutura:
- icalendar/: iCalendar (RFC 5545) <-> JSCalendar

Cada formato tem seu próprio connector, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []
