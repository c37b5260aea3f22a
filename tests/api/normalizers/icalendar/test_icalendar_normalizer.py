"""Testes para api/normalizers/icalendar (VEVENT -> Event)."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

import pytest
from icalendar import Calendar

from api.normalizers.icalendar import ICalendarNormalizer, normalize_event
from api.normalizers.icalendar.extractor import parse_ical_datetime, utc_timestamp
from app.domain.entities import NDay
from app.domain.local_datetime import LocalDateTime
from utils.errors import ConversionError


def _vevent(*lines: str):
    """Monta um VCALENDAR com um VEVENT e devolve o componente."""
    text = "\r\n".join(
        ["BEGIN:VCALENDAR", "VERSION:2.0", "PRODID:-//test//EN", "BEGIN:VEVENT"]
        + list(lines)
        + ["END:VEVENT", "END:VCALENDAR", ""]
    )
    return Calendar.from_ical(text).walk("VEVENT")[0]


PLANNING_MEETING = (
    "UID:reuniao-001@example.com",
    "SUMMARY:Planejamento trimestral",
    "DESCRIPTION:Pauta:\\n- metas\\, prazos",
    "DTSTART;TZID=America/Sao_Paulo:20250106T090000",
    "DTEND;TZID=America/Sao_Paulo:20250106T103000",
    "CREATED:20250101T120000Z",
    "LAST-MODIFIED:20250102T080000Z",
    "SEQUENCE:3",
    "STATUS:CONFIRMED",
    "CATEGORIES:trabalho,planejamento",
    "CLASS:CONFIDENTIAL",
    "TRANSP:TRANSPARENT",
    "LOCATION:Sala 2",
    "URL:https://example.com/pauta",
    "ORGANIZER;CN=Ana:mailto:ana@example.com",
    "ATTENDEE;CN=Ana;ROLE=CHAIR;PARTSTAT=ACCEPTED:mailto:ana@example.com",
    "ATTENDEE;CN=Bob;ROLE=OPT-PARTICIPANT;PARTSTAT=TENTATIVE:mailto:bob@example.com",
    "RRULE:FREQ=WEEKLY;INTERVAL=2;BYDAY=MO,WE;UNTIL=20250630T235959Z",
)


class TestNormalizeFullEvent:
    """Mapeamento completo de um VEVENT realista."""

    @pytest.fixture
    def event(self):
        return normalize_event(_vevent(*PLANNING_MEETING))

    def test_text_fields(self, event) -> None:
        assert event.uid == "reuniao-001@example.com"
        assert event.title == "Planejamento trimestral"
        assert event.description == "Pauta:\n- metas, prazos"

    def test_start_time_zone_and_duration(self, event) -> None:
        assert event.start == LocalDateTime(2025, 1, 6, 9)
        assert event.time_zone == "America/Sao_Paulo"
        assert event.duration == "PT1H30M"
        assert event.show_without_time is None

    def test_metadata(self, event) -> None:
        assert event.created == datetime(2025, 1, 1, 12, tzinfo=UTC)
        assert event.updated == datetime(2025, 1, 2, 8, tzinfo=UTC)
        assert event.sequence == 3
        assert event.status == "confirmed"
        assert event.privacy == "private"
        assert event.free_busy_status == "free"
        assert event.categories == {"trabalho": True, "planejamento": True}

    def test_location_and_link(self, event) -> None:
        assert event.locations["1"].name == "Sala 2"
        assert event.links["1"].href == "https://example.com/pauta"

    def test_participants_unified_by_address(self, event) -> None:
        assert set(event.participants) == {"ana@example.com", "bob@example.com"}

        ana = event.participants["ana@example.com"]
        assert ana.name == "Ana"
        assert ana.email == "ana@example.com"
        assert set(ana.roles) == {"owner", "attendee", "chair"}
        assert ana.participation_status == "accepted"

        bob = event.participants["bob@example.com"]
        assert set(bob.roles) == {"attendee", "optional"}
        assert bob.participation_status == "tentative"

    def test_recurrence(self, event) -> None:
        (rule,) = event.recurrence_rules
        assert rule.frequency == "weekly"
        assert rule.interval == 2
        assert rule.by_day == [NDay(day="mo"), NDay(day="we")]
        assert rule.until == LocalDateTime(2025, 6, 30, 23, 59, 59)

    def test_result_is_valid(self, event) -> None:
        assert not event.validate()

    def test_normalizer_class(self) -> None:
        event = ICalendarNormalizer().normalize(_vevent(*PLANNING_MEETING))
        assert event.uid == "reuniao-001@example.com"


class TestNormalizeEdgeCases:
    """Bordas da importação."""

    def test_missing_uid_is_fatal(self) -> None:
        with pytest.raises(ConversionError, match="missing UID"):
            normalize_event(_vevent("SUMMARY:Sem UID", "DTSTART:20250101T100000"))

    def test_minimal_event(self) -> None:
        event = normalize_event(_vevent("UID:min-1"))
        assert event.uid == "min-1"
        assert event.start is None
        assert event.duration is None
        assert event.participants is None
        assert event.recurrence_rules is None

    def test_utc_start_has_no_time_zone(self) -> None:
        event = normalize_event(
            _vevent("UID:utc-1", "DTSTART:20250301T140000Z", "DTEND:20250301T150000Z")
        )
        assert event.start == LocalDateTime(2025, 3, 1, 14)
        assert event.time_zone is None
        assert event.duration == "PT1H"

    def test_all_day_event(self) -> None:
        event = normalize_event(
            _vevent(
                "UID:feriado-1",
                "DTSTART;VALUE=DATE:20250421",
                "DTEND;VALUE=DATE:20250422",
            )
        )
        assert event.start == LocalDateTime(2025, 4, 21)
        assert event.show_without_time is True
        assert event.duration == "P1D"

    def test_duration_property_without_dtend(self) -> None:
        event = normalize_event(
            _vevent("UID:dur-1", "DTSTART:20250101T100000", "DURATION:PT45M")
        )
        assert event.duration == "PT45M"
        assert event.time_zone is None

    def test_malformed_start_degrades_to_zero(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            event = normalize_event(
                _vevent("UID:bad-start", "DTSTART:amanha", "DTEND:20250101T100000")
            )
        assert event.start == LocalDateTime.ZERO
        assert event.duration is None
        assert any(getattr(r, "fallback_used", False) for r in caplog.records)

    def test_malformed_duration_is_fatal(self) -> None:
        with pytest.raises(ConversionError) as exc_info:
            normalize_event(
                _vevent("UID:bad-dur", "DTSTART:20250101T100000", "DURATION:uma hora")
            )
        assert exc_info.value.uid == "bad-dur"

    def test_malformed_rrule_is_fatal(self) -> None:
        with pytest.raises(ConversionError) as exc_info:
            normalize_event(_vevent("UID:bad-rule", "RRULE:FREQ=DAILY;BYDAY=XX"))
        assert exc_info.value.uid == "bad-rule"

    def test_attendee_without_role(self) -> None:
        event = normalize_event(_vevent("UID:a-1", "ATTENDEE:mailto:carla@example.com"))
        carla = event.participants["carla@example.com"]
        assert carla.roles == {"attendee": True}
        assert carla.participation_status is None
        assert carla.name is None

    def test_public_class_and_opaque(self) -> None:
        event = normalize_event(_vevent("UID:c-1", "CLASS:PUBLIC", "TRANSP:OPAQUE"))
        assert event.privacy == "public"
        assert event.free_busy_status == "busy"

    def test_multiple_rrules(self) -> None:
        event = normalize_event(
            _vevent("UID:r-2", "RRULE:FREQ=DAILY;COUNT=2", "RRULE:FREQ=MONTHLY;COUNT=1")
        )
        assert [rule.frequency for rule in event.recurrence_rules] == ["daily", "monthly"]


class TestExtractor:
    """Helpers de extração de data-hora."""

    def test_parse_utc_datetime(self) -> None:
        prop = _vevent("UID:x", "DTSTART:20250301T140000Z")["DTSTART"]
        parsed = parse_ical_datetime(prop, name="DTSTART")
        assert parsed.value == LocalDateTime(2025, 3, 1, 14)
        assert parsed.tzid == "UTC"
        assert parsed.all_day is False

    def test_parse_date(self) -> None:
        prop = _vevent("UID:x", "DTSTART;VALUE=DATE:20250421")["DTSTART"]
        parsed = parse_ical_datetime(prop, name="DTSTART")
        assert parsed.all_day is True
        assert parsed.tzid is None

    def test_parse_plain_string_fallback(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            parsed = parse_ical_datetime("31/12/2025", name="DTSTART", uid="x")
        assert parsed.is_zero
        assert any(getattr(r, "uid", None) == "x" for r in caplog.records)

    def test_utc_timestamp_treats_floating_as_utc(self) -> None:
        prop = _vevent("UID:x", "DTSTART:20250101T100000")["DTSTART"]
        assert utc_timestamp(prop) == datetime(2025, 1, 1, 10, tzinfo=UTC)

    def test_utc_timestamp_from_date(self) -> None:
        prop = _vevent("UID:x", "DTSTART;VALUE=DATE:20250101")["DTSTART"]
        assert utc_timestamp(prop) == datetime(2025, 1, 1, tzinfo=UTC)
