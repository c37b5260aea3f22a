"""Normalizer iCalendar: converte um VEVENT no Event JSCalendar.

Mapeamento por propriedade:
- UID (obrigatório) -> uid; ausente aborta o componente
- SUMMARY/DESCRIPTION -> title/description
- DTSTART -> start (+ showWithoutTime em VALUE=DATE, + timeZone se não UTC)
- DTEND - DTSTART, ou DURATION quando não há DTEND -> duration
- CREATED/LAST-MODIFIED/SEQUENCE -> created/updated/sequence
- STATUS -> status em minúsculas; CATEGORIES -> conjunto de categorias
- LOCATION -> locations["1"]; URL -> links["1"]
- TRANSP -> freeBusyStatus; CLASS -> privacy
- ORGANIZER/ATTENDEE -> participants, unificados por endereço
- RRULE -> recurrenceRules

Falhas:
- UID ausente, DURATION ou RRULE malformados: ConversionError
- data-hora malformada: instante zero + log de fallback
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from api.connectors.icalendar.mappings import (
    DEFAULT_IMPORT_ROLES,
    ORGANIZER_ROLES,
    import_privacy,
    import_roles,
    import_status,
    import_transparency,
    strip_mailto,
)
from api.connectors.icalendar.rrule import parse_rrule
from api.normalizers.icalendar.extractor import (
    ICalDateTime,
    first_property,
    has_error,
    param,
    parse_ical_datetime,
    properties,
    raw_value,
    text_value,
    utc_timestamp,
)
from app.domain.duration import duration_between, format_duration, parse_duration
from app.domain.entities import Participant, new_link, new_location
from app.domain.event import Event
from app.domain.local_datetime import LocalDateTime
from config.logging import log_fallback
from utils.errors import ConversionError, ParseError

if TYPE_CHECKING:
    from datetime import timedelta

logger = logging.getLogger(__name__)

FIRST_ENTRY_ID = "1"


def normalize_event(component: Any) -> Event:
    """Converte um componente VEVENT em Event.

    Raises:
        ConversionError: UID ausente ou valor estrutural malformado
            (DURATION, RRULE, token BYDAY).
    """
    uid = text_value(component, "UID")
    if not uid:
        raise ConversionError("event missing UID")

    try:
        return _build_event(component, uid)
    except ParseError as exc:
        raise ConversionError(f"failed to convert event {uid}: {exc}", uid=uid) from exc


def _build_event(component: Any, uid: str) -> Event:
    event = Event(uid=uid)
    event.title = text_value(component, "SUMMARY")
    event.description = text_value(component, "DESCRIPTION")

    start = _apply_start(component, event)
    _apply_duration(component, event, start)
    _apply_metadata(component, event)
    _apply_categories(component, event)
    _apply_location_and_link(component, event)

    participants = _extract_participants(component)
    if participants:
        event.participants = participants

    if has_error(component, "RRULE"):
        raise ConversionError(f"event {uid} has malformed RRULE", uid=uid)
    rules = [parse_rrule(prop) for prop in properties(component, "RRULE")]
    if rules:
        event.recurrence_rules = rules
    return event


def _read_datetime(component: Any, name: str, uid: str) -> ICalDateTime | None:
    """DTSTART/DTEND; descartada pela biblioteca também degrada para zero."""
    prop = first_property(component, name)
    if prop is not None:
        return parse_ical_datetime(prop, name=name, uid=uid)
    if has_error(component, name):
        log_fallback(logger, name, reason="malformed_datetime", uid=uid)
        return ICalDateTime(LocalDateTime.ZERO)
    return None


def _apply_start(component: Any, event: Event) -> ICalDateTime | None:
    start = _read_datetime(component, "DTSTART", event.uid)
    if start is None:
        return None
    event.start = start.value
    if start.all_day:
        event.show_without_time = True
    if start.tzid and start.tzid != "UTC":
        event.time_zone = start.tzid
    return start


def _apply_duration(component: Any, event: Event, start: ICalDateTime | None) -> None:
    end = _read_datetime(component, "DTEND", event.uid)
    if end is not None:
        if start is None or start.is_zero or end.is_zero:
            return
        event.duration = format_duration(_elapsed(start, end))
        return

    prop = first_property(component, "DURATION")
    if prop is not None:
        event.duration = format_duration(parse_duration(raw_value(prop)))
    elif has_error(component, "DURATION"):
        raise ConversionError(f"event {event.uid} has malformed DURATION", uid=event.uid)


def _elapsed(start: ICalDateTime, end: ICalDateTime) -> timedelta:
    """Diferença fim - início.

    Em fusos distintos (ambos conhecidos) usa o instante absoluto; nos
    demais casos, a diferença de relógio.
    """
    if start.tzid and end.tzid and start.tzid != end.tzid:
        try:
            start_zone = ZoneInfo(start.tzid)
            end_zone = ZoneInfo(end.tzid)
        except (ZoneInfoNotFoundError, ValueError):
            logger.info(
                "unknown_timezone_wall_clock_duration",
                extra={"component": "icalendar_normalizer", "tzids": [start.tzid, end.tzid]},
            )
        else:
            absolute_end = end.value.to_datetime().replace(tzinfo=end_zone)
            absolute_start = start.value.to_datetime().replace(tzinfo=start_zone)
            return absolute_end - absolute_start
    return duration_between(start.value, end.value)


def _apply_metadata(component: Any, event: Event) -> None:
    """created/updated/sequence, status, transparência e classificação."""
    for name, field in (("CREATED", "created"), ("LAST-MODIFIED", "updated")):
        prop = first_property(component, name)
        if prop is None:
            if has_error(component, name):
                log_fallback(logger, name, reason="malformed_datetime", uid=event.uid)
            continue
        setattr(event, field, utc_timestamp(prop))

    sequence = first_property(component, "SEQUENCE")
    if sequence is not None:
        try:
            value = int(raw_value(sequence))
        except ValueError:
            log_fallback(logger, "SEQUENCE", reason="malformed_integer", uid=event.uid)
        else:
            if value >= 0:
                event.sequence = value

    status = text_value(component, "STATUS")
    if status:
        event.status = import_status(status)

    transp = text_value(component, "TRANSP")
    if transp:
        event.free_busy_status = import_transparency(transp)

    ical_class = text_value(component, "CLASS")
    if ical_class:
        event.privacy = import_privacy(ical_class)


def _apply_categories(component: Any, event: Event) -> None:
    names: list[str] = []
    for prop in properties(component, "CATEGORIES"):
        cats = getattr(prop, "cats", None)
        if cats is None:
            cats = str(prop).split(",")
        names.extend(str(cat).strip() for cat in cats)
    categories = {name: True for name in names if name}
    if categories:
        event.categories = categories


def _apply_location_and_link(component: Any, event: Event) -> None:
    location = text_value(component, "LOCATION")
    if location is not None:
        event.locations = {FIRST_ENTRY_ID: new_location(location)}

    url = text_value(component, "URL")
    if url is not None:
        event.links = {FIRST_ENTRY_ID: new_link(url)}


def _extract_participants(component: Any) -> dict[str, Participant | None]:
    """Organizer e attendees unificados por endereço (papéis acumulam)."""
    participants: dict[str, Participant | None] = {}

    organizer = first_property(component, "ORGANIZER")
    if organizer is not None:
        address = strip_mailto(str(organizer))
        participants[address] = Participant(
            email=address,
            name=param(organizer, "CN"),
            roles=dict.fromkeys(ORGANIZER_ROLES, True),
        )

    for attendee in properties(component, "ATTENDEE"):
        address = strip_mailto(str(attendee))
        participant = participants.get(address)
        if participant is None:
            participant = Participant(
                email=address,
                roles=dict.fromkeys(DEFAULT_IMPORT_ROLES, True),
            )
            participants[address] = participant

        name = param(attendee, "CN")
        if name:
            participant.name = name

        partstat = param(attendee, "PARTSTAT")
        if partstat:
            participant.participation_status = partstat.lower()

        role = param(attendee, "ROLE")
        if role:
            for mapped in import_roles(role):
                participant.add_role(mapped)

    return participants


class ICalendarNormalizer:
    """Normalizer de VEVENT para Event (ComponentNormalizerProtocol)."""

    def normalize(self, component: Any) -> Event:
        return normalize_event(component)


__all__ = ["ICalendarNormalizer", "normalize_event"]
