"""Builder iCalendar: constrói o VEVENT correspondente a um Event.

Assimetrias da exportação:
- CATEGORIES sai em ordem alfabética
- só a primeira location (com nome) e o primeiro link saem
- DURATION é emitida no lugar de DTEND
- privacy "private" sai como CLASS:CONFIDENTIAL
- ROLE do attendee leva só o papel de maior prioridade
"""

from __future__ import annotations

import logging
from datetime import UTC
from typing import TYPE_CHECKING

from icalendar import Event as ICalEvent
from icalendar.prop import vCalAddress, vRecur

from api.connectors.icalendar.mappings import (
    export_privacy,
    export_role,
    export_status,
    export_transparency,
    to_mailto,
)
from api.connectors.icalendar.rrule import format_rrule
from app.constants.jscalendar import ParticipantRole
from app.domain.base import utcnow
from app.domain.duration import parse_duration
from config.logging import log_fallback
from config.settings import ICalendarSettings, get_icalendar_settings
from utils.errors import ConversionError, ParseError

if TYPE_CHECKING:
    from app.domain.entities import Participant
    from app.domain.event import Event

logger = logging.getLogger(__name__)

UTC_ZONES = frozenset({"UTC", "Etc/UTC", "Z"})


def build_event_component(
    event: Event,
    settings: ICalendarSettings | None = None,
) -> ICalEvent:
    """Constrói o VEVENT do Event.

    Raises:
        ConversionError: UID vazio, duração ou RRULE inválidas.
    """
    if not event.uid:
        raise ConversionError("event missing UID")
    settings = settings or get_icalendar_settings()

    vevent = ICalEvent()
    vevent.add("uid", event.uid)
    if settings.emit_dtstamp:
        vevent.add("dtstamp", utcnow())

    if event.title is not None:
        vevent.add("summary", event.title)
    if event.description is not None:
        vevent.add("description", event.description)

    _add_start(vevent, event, settings)
    _add_duration(vevent, event)
    _add_metadata(vevent, event)
    _add_location_and_link(vevent, event)
    _add_participants(vevent, event)
    _add_recurrence(vevent, event)
    return vevent


def _add_start(vevent: ICalEvent, event: Event, settings: ICalendarSettings) -> None:
    """DTSTART: data pura em dia inteiro, Z em UTC, TZID ou flutuante."""
    if event.start is None:
        return
    start = event.start.to_datetime()

    if event.is_all_day():
        vevent.add("dtstart", start.date())
        return

    time_zone = event.time_zone or settings.default_timezone
    if time_zone is None:
        vevent.add("dtstart", start)
    elif time_zone in UTC_ZONES:
        vevent.add("dtstart", start.replace(tzinfo=UTC))
    else:
        vevent.add("dtstart", start, parameters={"TZID": time_zone})


def _add_duration(vevent: ICalEvent, event: Event) -> None:
    if not event.duration:
        return
    try:
        delta = parse_duration(event.duration)
    except ParseError as exc:
        raise ConversionError(
            f"event {event.uid} has invalid duration: {exc}", uid=event.uid
        ) from exc
    vevent.add("duration", delta)


def _add_metadata(vevent: ICalEvent, event: Event) -> None:
    if event.created is not None:
        vevent.add("created", event.created)
    if event.updated is not None:
        vevent.add("last-modified", event.updated)
    if event.sequence is not None:
        vevent.add("sequence", event.sequence)
    if event.status is not None:
        vevent.add("status", export_status(event.status))
    if event.categories:
        vevent.add("categories", sorted(event.categories))
    if event.free_busy_status is not None:
        vevent.add("transp", export_transparency(event.free_busy_status))
    if event.privacy is not None:
        vevent.add("class", export_privacy(event.privacy))


def _add_location_and_link(vevent: ICalEvent, event: Event) -> None:
    for location in (event.locations or {}).values():
        if location is not None and location.name is not None:
            vevent.add("location", location.name)
            break

    for link in (event.links or {}).values():
        if link is not None:
            vevent.add("url", link.href)
            break


def _calendar_address(address: str, name: str | None) -> vCalAddress:
    value = vCalAddress(to_mailto(address))
    if name:
        value.params["CN"] = name
    return value


def _attendee(participant_id: str, participant: Participant) -> vCalAddress:
    """ATTENDEE com CN, PARTSTAT em maiúsculas e ROLE (quando há papéis)."""
    attendee = _calendar_address(participant.email or participant_id, participant.name)
    if participant.participation_status:
        attendee.params["PARTSTAT"] = participant.participation_status.upper()
    role = export_role(participant.roles)
    if role is not None:
        attendee.params["ROLE"] = role
    return attendee


def _add_participants(vevent: ICalEvent, event: Event) -> None:
    """ORGANIZER para owners e ATTENDEE para todo participante."""
    for participant_id, participant in (event.participants or {}).items():
        if participant is None:
            continue
        if participant.has_role(ParticipantRole.OWNER):
            organizer = _calendar_address(participant.email or participant_id, participant.name)
            vevent.add("organizer", organizer, encode=False)
        vevent.add("attendee", _attendee(participant_id, participant), encode=False)


def _add_recurrence(vevent: ICalEvent, event: Event) -> None:
    for index, rule in enumerate(event.recurrence_rules or []):
        if not rule.frequency:
            log_fallback(
                logger,
                f"recurrenceRules[{index}]",
                reason="missing_frequency",
                uid=event.uid,
            )
            continue
        literal = format_rrule(rule)
        try:
            recur = vRecur.from_ical(literal)
        except ValueError as exc:
            raise ConversionError(
                f"event {event.uid} has invalid recurrence rule: {literal}", uid=event.uid
            ) from exc
        vevent.add("rrule", recur)


class ICalendarComponentBuilder:
    """Builder de Event para VEVENT (ComponentBuilderProtocol)."""

    def __init__(self, settings: ICalendarSettings | None = None) -> None:
        self._settings = settings

    def build(self, event: Event) -> ICalEvent:
        return build_event_component(event, self._settings)


__all__ = ["ICalendarComponentBuilder", "build_event_component"]
