"""Normalizer iCalendar: VEVENT (biblioteca icalendar) para Event JSCalendar.

Uso:
    from api.normalizers.icalendar import normalize_event

    event = normalize_event(vevent)
"""

from api.normalizers.icalendar.normalizer import ICalendarNormalizer, normalize_event

__all__ = ["ICalendarNormalizer", "normalize_event"]
