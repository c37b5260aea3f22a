"""Testes para api/payload_builders/icalendar (Event -> VEVENT)."""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime, timedelta

import pytest

from api.payload_builders.icalendar import ICalendarComponentBuilder, build_event_component
from app.domain.entities import Link, Location, NDay, Participant, RecurrenceRule
from app.domain.event import Event
from app.domain.local_datetime import LocalDateTime
from config.settings import ICalendarSettings
from utils.errors import ConversionError

NO_STAMP = ICalendarSettings(emit_dtstamp=False)


def _event(**fields) -> Event:
    return Event(uid="evt-1", start=LocalDateTime(2025, 1, 6, 9), **fields)


def _build(event: Event, settings: ICalendarSettings = NO_STAMP):
    return build_event_component(event, settings)


class TestBuildBasics:
    """UID, DTSTAMP, textos e duração."""

    def test_missing_uid(self) -> None:
        with pytest.raises(ConversionError, match="missing UID"):
            _build(Event(uid=""))

    def test_text_and_duration(self) -> None:
        event = _event(title="Reunião", description="Linha 1\nLinha 2", duration="PT1H30M")
        vevent = _build(event)
        assert str(vevent["UID"]) == "evt-1"
        assert str(vevent["SUMMARY"]) == "Reunião"
        assert str(vevent["DESCRIPTION"]) == "Linha 1\nLinha 2"
        assert vevent["DURATION"].dt == timedelta(hours=1, minutes=30)
        assert "DTEND" not in vevent

    def test_dtstamp_follows_settings(self) -> None:
        assert "DTSTAMP" not in _build(_event())
        assert "DTSTAMP" in _build(_event(), ICalendarSettings())

    def test_invalid_duration(self) -> None:
        with pytest.raises(ConversionError, match="invalid duration") as exc_info:
            _build(_event(duration="uma hora"))
        assert exc_info.value.uid == "evt-1"

    def test_builder_class(self) -> None:
        vevent = ICalendarComponentBuilder(NO_STAMP).build(_event(title="x"))
        assert str(vevent["SUMMARY"]) == "x"


class TestBuildStart:
    """DTSTART em cada forma de fuso."""

    def test_named_time_zone(self) -> None:
        vevent = _build(_event(time_zone="America/Sao_Paulo"))
        assert vevent["DTSTART"].params["TZID"] == "America/Sao_Paulo"
        assert vevent["DTSTART"].to_ical() == b"20250106T090000"

    def test_utc(self) -> None:
        vevent = _build(_event(time_zone="Etc/UTC"))
        assert vevent["DTSTART"].to_ical() == b"20250106T090000Z"

    def test_floating(self) -> None:
        vevent = _build(_event())
        assert vevent["DTSTART"].dt == datetime(2025, 1, 6, 9)
        assert "TZID" not in vevent["DTSTART"].params

    def test_default_time_zone_from_settings(self) -> None:
        settings = ICalendarSettings(emit_dtstamp=False, default_timezone="Europe/Lisbon")
        vevent = _build(_event(), settings)
        assert vevent["DTSTART"].params["TZID"] == "Europe/Lisbon"

    def test_all_day(self) -> None:
        vevent = _build(_event(show_without_time=True, duration="P1D"))
        assert vevent["DTSTART"].dt == date(2025, 1, 6)
        assert vevent["DTSTART"].to_ical() == b"20250106"

    def test_no_start(self) -> None:
        assert "DTSTART" not in _build(Event(uid="evt-1"))


class TestBuildMetadata:
    """Status, categorias, transparência, classificação e timestamps."""

    def test_metadata(self) -> None:
        created = datetime(2025, 1, 1, 12, tzinfo=UTC)
        vevent = _build(
            _event(
                created=created,
                updated=created,
                sequence=4,
                status="tentative",
                categories={"zeta": True, "alfa": True},
                free_busy_status="free",
                privacy="private",
            )
        )
        assert vevent["CREATED"].dt == created
        assert vevent["LAST-MODIFIED"].dt == created
        assert int(vevent["SEQUENCE"]) == 4
        assert str(vevent["STATUS"]) == "TENTATIVE"
        assert vevent["CATEGORIES"].cats == ["alfa", "zeta"]
        assert str(vevent["TRANSP"]) == "TRANSPARENT"
        assert str(vevent["CLASS"]) == "CONFIDENTIAL"

    def test_busy_and_public(self) -> None:
        vevent = _build(_event(free_busy_status="busy", privacy="public"))
        assert str(vevent["TRANSP"]) == "OPAQUE"
        assert str(vevent["CLASS"]) == "PUBLIC"

    def test_only_first_location_and_link(self) -> None:
        vevent = _build(
            _event(
                locations={"a": None, "b": Location(), "c": Location(name="Sala 2")},
                links={"l1": Link(href="https://example.com/1"), "l2": Link(href="x")},
            )
        )
        assert str(vevent["LOCATION"]) == "Sala 2"
        assert str(vevent["URL"]) == "https://example.com/1"


class TestBuildParticipants:
    """ORGANIZER e ATTENDEE."""

    def test_owner_is_organizer_and_attendee(self) -> None:
        ana = Participant(
            name="Ana",
            email="ana@example.com",
            roles={"owner": True, "attendee": True, "chair": True},
            participation_status="accepted",
        )
        vevent = _build(_event(participants={"ana": ana}))

        organizer = vevent["ORGANIZER"]
        assert str(organizer) == "mailto:ana@example.com"
        assert organizer.params["CN"] == "Ana"

        attendee = vevent["ATTENDEE"]
        assert str(attendee) == "mailto:ana@example.com"
        assert attendee.params["PARTSTAT"] == "ACCEPTED"
        assert attendee.params["ROLE"] == "CHAIR"

    def test_role_priority_and_default(self) -> None:
        vevent = _build(
            _event(
                participants={
                    "bob@example.com": Participant(roles={"optional": True, "informational": True}),
                    "carla@example.com": Participant(roles={"attendee": True}),
                    "dan@example.com": Participant(),
                }
            )
        )
        attendees = {str(a): a for a in vevent["ATTENDEE"]}
        assert "ORGANIZER" not in vevent
        assert attendees["mailto:bob@example.com"].params["ROLE"] == "OPT-PARTICIPANT"
        assert attendees["mailto:carla@example.com"].params["ROLE"] == "REQ-PARTICIPANT"
        assert "ROLE" not in attendees["mailto:dan@example.com"].params

    def test_absent_participants_are_skipped(self) -> None:
        assert "ATTENDEE" not in _build(_event(participants={"p1": None}))


class TestBuildRecurrence:
    """RRULE."""

    def test_rrule(self) -> None:
        rule = RecurrenceRule(
            frequency="weekly",
            interval=2,
            until=LocalDateTime(2025, 6, 30, 23, 59, 59),
            by_day=[NDay(day="mo"), NDay(day="we")],
        )
        recur = _build(_event(recurrence_rules=[rule]))["RRULE"]
        assert recur["FREQ"] == ["WEEKLY"]
        assert recur["INTERVAL"] == [2]
        assert recur["BYDAY"] == ["MO", "WE"]
        assert recur["UNTIL"] == [datetime(2025, 6, 30, 23, 59, 59, tzinfo=UTC)]

    def test_rule_without_frequency_is_skipped(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            vevent = _build(_event(recurrence_rules=[RecurrenceRule(frequency="")]))
        assert "RRULE" not in vevent
        assert any(getattr(r, "reason", None) == "missing_frequency" for r in caplog.records)

    def test_until_before_year_1000(self) -> None:
        rule = RecurrenceRule(frequency="yearly", until=LocalDateTime(999, 1, 1))
        recur = _build(_event(recurrence_rules=[rule]))["RRULE"]
        assert recur["FREQ"] == ["YEARLY"]
        assert "UNTIL" in recur

    def test_invalid_rule_is_conversion_error(self) -> None:
        rule = RecurrenceRule(frequency="daily", by_day=[NDay(day="xx")])
        with pytest.raises(ConversionError, match="invalid recurrence rule"):
            _build(_event(recurrence_rules=[rule]))
