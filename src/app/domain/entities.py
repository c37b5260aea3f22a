"""Entidades aninhadas do JSCalendar (RFC 8984).

Participant, Location, VirtualLocation, Link, Alert, OffsetTrigger,
Relation, RecurrenceRule, NDay, TimeZone e TimeZoneRule.

Todos os campos são opcionais no modelo: a obrigatoriedade e as
faixas são verificadas pelo validador (api.validators.jscalendar), que
agrega as violações em vez de falhar no primeiro erro.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - usado em runtime pelo schema do Pydantic
from typing import Any

from pydantic import Field, JsonValue, field_serializer, field_validator

from app.constants.jscalendar import DayOfWeek, EntityType, ParticipantRole, ParticipationStatus
from app.domain.base import JSCalendarModel
from app.domain.local_datetime import LocalDateTime, coerce_local_datetime
from utils.errors import ParseError

# Documento de patch (localizations, recurrenceOverrides)
PatchObject = dict[str, JsonValue]


class Link(JSCalendarModel):
    """Referência externa (anexo, ícone, página)."""

    type: str = Field(EntityType.LINK, alias="@type")
    href: str = ""
    cid: str | None = None
    content_type: str | None = Field(None, alias="contentType")
    size: int | None = None
    rel: str | None = None
    display: str | None = None
    title: str | None = None


class Relation(JSCalendarModel):
    type: str = Field(EntityType.RELATION, alias="@type")
    relation: dict[str, bool] | None = None


class Participant(JSCalendarModel):
    """Participante do objeto; papéis são um conjunto de booleanos nomeados."""

    type: str = Field(EntityType.PARTICIPANT, alias="@type")
    name: str | None = None
    email: str | None = None
    kind: str | None = None
    roles: dict[str, bool] | None = None
    location_id: str | None = Field(None, alias="locationId")
    language: str | None = None
    participation_status: str | None = Field(None, alias="participationStatus")
    participation_comment: str | None = Field(None, alias="participationComment")
    expect_reply: bool | None = Field(None, alias="expectReply")
    schedule_agent: str | None = Field(None, alias="scheduleAgent")
    schedule_force_send: bool | None = Field(None, alias="scheduleForceSend")
    schedule_sequence: int | None = Field(None, alias="scheduleSequence")
    schedule_status: list[str] | None = Field(None, alias="scheduleStatus")
    schedule_updated: datetime | None = Field(None, alias="scheduleUpdated")
    invited_by: str | None = Field(None, alias="invitedBy")
    delegated_to: dict[str, bool] | None = Field(None, alias="delegatedTo")
    delegated_from: dict[str, bool] | None = Field(None, alias="delegatedFrom")
    member_of: dict[str, bool] | None = Field(None, alias="memberOf")
    links: dict[str, Link | None] | None = None
    progress: str | None = None
    progress_updated: datetime | None = Field(None, alias="progressUpdated")
    percent_complete: int | None = Field(None, alias="percentComplete")

    def has_role(self, role: str) -> bool:
        return bool(self.roles and self.roles.get(role))

    def add_role(self, role: str) -> None:
        """Acumula um papel sem remover os existentes."""
        if self.roles is None:
            self.roles = {}
        self.roles[role] = True


class Location(JSCalendarModel):
    type: str = Field(EntityType.LOCATION, alias="@type")
    name: str | None = None
    description: str | None = None
    location_types: dict[str, bool] | None = Field(None, alias="locationTypes")
    relative_to: str | None = Field(None, alias="relativeTo")
    time_zone: str | None = Field(None, alias="timeZone")
    coordinates: str | None = Field(None, description="URI geo: (RFC 5870).")
    links: dict[str, Link | None] | None = None


class VirtualLocation(JSCalendarModel):
    type: str = Field(EntityType.VIRTUAL_LOCATION, alias="@type")
    name: str | None = None
    description: str | None = None
    uri: str = ""
    features: dict[str, bool] | None = None


class OffsetTrigger(JSCalendarModel):
    type: str = Field(EntityType.OFFSET_TRIGGER, alias="@type")
    offset: str = Field("", description="Duração ISO 8601 relativa a relativeTo.")
    relative_to: str | None = Field(None, alias="relativeTo")


class Alert(JSCalendarModel):
    type: str = Field(EntityType.ALERT, alias="@type")
    trigger: OffsetTrigger | None = None
    acknowledged: datetime | None = None
    related_to: dict[str, Relation | None] | None = Field(None, alias="relatedTo")
    action: str | None = None


class NDay(JSCalendarModel):
    """Dia da semana com ocorrência opcional no período (ex.: -1 = último)."""

    type: str = Field(EntityType.NDAY, alias="@type")
    day: str = ""
    nth_of_period: int | None = Field(None, alias="nthOfPeriod")


class RecurrenceRule(JSCalendarModel):
    """Regra de recorrência; armazenada e validada, nunca expandida."""

    type: str = Field(EntityType.RECURRENCE_RULE, alias="@type")
    frequency: str = ""
    interval: int | None = None
    rscale: str | None = None
    skip: str | None = None
    first_day_of_week: int | None = Field(None, alias="firstDayOfWeek")
    by_day: list[NDay] | None = Field(None, alias="byDay")
    by_month_day: list[int] | None = Field(None, alias="byMonthDay")
    by_month: list[str] | None = Field(None, alias="byMonth")
    by_year_day: list[int] | None = Field(None, alias="byYearDay")
    by_week_no: list[int] | None = Field(None, alias="byWeekNo")
    by_hour: list[int] | None = Field(None, alias="byHour")
    by_minute: list[int] | None = Field(None, alias="byMinute")
    by_second: list[int] | None = Field(None, alias="bySecond")
    by_set_pos: list[int] | None = Field(None, alias="bySetPos")
    count: int | None = None
    until: LocalDateTime | None = None

    @field_validator("until", mode="before")
    @classmethod
    def parse_until(cls, value: Any) -> LocalDateTime | None:
        return coerce_local_datetime(value)

    @field_serializer("until", when_used="json")
    def serialize_until(self, value: LocalDateTime | None) -> str | None:
        return None if value is None else str(value)


class TimeZoneRule(JSCalendarModel):
    type: str = Field(EntityType.TIME_ZONE_RULE, alias="@type")
    start: LocalDateTime | None = None
    offset_from: str = Field("", alias="offsetFrom")
    offset_to: str = Field("", alias="offsetTo")
    recurrence_rules: list[RecurrenceRule] | None = Field(None, alias="recurrenceRules")
    recurrence_overrides: dict[str, PatchObject] | None = Field(None, alias="recurrenceOverrides")
    names: dict[str, str] | None = None
    comments: list[str] | None = None

    @field_validator("start", mode="before")
    @classmethod
    def parse_start(cls, value: Any) -> LocalDateTime | None:
        return coerce_local_datetime(value)

    @field_serializer("start", when_used="json")
    def serialize_start(self, value: LocalDateTime | None) -> str | None:
        return None if value is None else str(value)


class TimeZone(JSCalendarModel):
    """Definição customizada de fuso horário."""

    type: str = Field(EntityType.TIME_ZONE, alias="@type")
    tz_id: str = Field("", alias="tzId")
    updated: datetime | None = None
    url: str | None = None
    valid_until: datetime | None = Field(None, alias="validUntil")
    aliases: dict[str, bool] | None = None
    standard_offset: str | None = Field(None, alias="standardOffset")
    daylight_offset: str | None = Field(None, alias="daylightOffset")
    standard: list[TimeZoneRule] | None = None
    daylight: list[TimeZoneRule] | None = None


def new_participant(name: str, email: str) -> Participant:
    """Participante com papel attendee e convite pendente."""
    return Participant(
        name=name,
        email=email,
        roles={ParticipantRole.ATTENDEE: True},
        participation_status=ParticipationStatus.NEEDS_ACTION,
    )


def new_location(name: str) -> Location:
    return Location(name=name)


def new_virtual_location(name: str, uri: str) -> VirtualLocation:
    return VirtualLocation(name=name, uri=uri)


def new_link(href: str) -> Link:
    return Link(href=href)


def new_time_zone(tz_id: str) -> TimeZone:
    return TimeZone(tz_id=tz_id)


_DAY_NAMES: dict[str, DayOfWeek] = {
    "MONDAY": DayOfWeek.MONDAY,
    "TUESDAY": DayOfWeek.TUESDAY,
    "WEDNESDAY": DayOfWeek.WEDNESDAY,
    "THURSDAY": DayOfWeek.THURSDAY,
    "FRIDAY": DayOfWeek.FRIDAY,
    "SATURDAY": DayOfWeek.SATURDAY,
    "SUNDAY": DayOfWeek.SUNDAY,
}


def format_day_of_week(day: str) -> str:
    """Converte nome de dia (MONDAY, MO, mo) para o código de duas letras.

    Valores desconhecidos voltam apenas em minúsculas.
    """
    upper = day.upper()
    if upper in _DAY_NAMES:
        return _DAY_NAMES[upper].value
    for code in DayOfWeek:
        if upper == code.value.upper():
            return code.value
    return day.lower()


def parse_nday(token: str) -> NDay:
    """Decodifica token by-day `[±N]<DIA>` (ex.: `-1FR`, `MO`, `+2TU`).

    Raises:
        ParseError: token curto, prefixo não numérico ou dia desconhecido.
    """
    value = token.strip()
    if len(value) < 2:
        raise ParseError(f"invalid day value: {token}")

    prefix, day_part = value[:-2], value[-2:]
    nth_of_period: int | None = None
    if prefix:
        try:
            nth_of_period = int(prefix)
        except ValueError as exc:
            raise ParseError(f"invalid day value: {token}") from exc
        if nth_of_period == 0:
            raise ParseError(f"invalid day value: {token}")

    day = format_day_of_week(day_part)
    if day not in {code.value for code in DayOfWeek}:
        raise ParseError(f"invalid day: {token}")
    return NDay(day=day, nth_of_period=nth_of_period)
