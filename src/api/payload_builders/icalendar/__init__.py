"""Builder iCalendar: Event JSCalendar para VEVENT (biblioteca icalendar)."""

from api.payload_builders.icalendar.builder import (
    ICalendarComponentBuilder,
    build_event_component,
)

__all__ = ["ICalendarComponentBuilder", "build_event_component"]
