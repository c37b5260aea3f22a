"""Payload builders por formato: construção de componentes para formatos externos.

Estrutura:
- icalendar/: VEVENT a partir de Event JSCalendar

Cada formato tem seus próprios builders, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []
