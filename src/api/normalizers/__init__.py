"""Normalizers por formato: conversão de componentes externos para modelos internos.

Estrutura:
- icalendar/: extractor e normalizer de VEVENT

Cada formato tem seu próprio extractor e normalizer, mantendo SRP.
"""

from .icalendar import ICalendarNormalizer, normalize_event

__all__ = [
    "ICalendarNormalizer",
    "normalize_event",
]
