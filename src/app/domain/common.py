"""Campos e operações compartilhados pelas variantes Event, Task e Group.

As operações de mutação (touch e add_*) alteram o próprio objeto e não
são seguras para escrita concorrente na mesma instância; o chamador
serializa as escritas.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - usado em runtime pelo schema do Pydantic
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from pydantic import Field, field_serializer, field_validator

from app.domain.base import JSCalendarModel, utcnow
from app.domain.duration import parse_duration
from app.domain.entities import (
    Alert,
    Link,
    Location,
    Participant,
    PatchObject,
    RecurrenceRule,
    Relation,
    TimeZone,
    VirtualLocation,
)
from app.domain.local_datetime import LocalDateTime, coerce_local_datetime

if TYPE_CHECKING:
    from api.validators.jscalendar.errors import ValidationErrors


class CalendarObjectBase(JSCalendarModel):
    """Metadados e descrição comuns a todo objeto de calendário."""

    type: str = Field(..., alias="@type", description="Event, Task ou Group.")
    uid: str = Field("", description="Identificador único global (<=255).")
    created: datetime | None = Field(None, description="Criação (UTC).")
    updated: datetime | None = Field(None, description="Última modificação (UTC).")
    sequence: int | None = Field(None, description="Número de revisão.")
    method: str | None = Field(None, description="Método iTIP.")
    prod_id: str | None = Field(None, alias="prodId")
    title: str | None = None
    description: str | None = None
    locale: str | None = None
    keywords: dict[str, bool] | None = None
    categories: dict[str, bool] | None = None
    color: str | None = None
    links: dict[str, Link | None] | None = None

    def touch(self) -> None:
        """Atualiza `updated` e incrementa `sequence`."""
        self.updated = utcnow()
        self.sequence = (self.sequence or 0) + 1

    def add_keyword(self, keyword: str) -> None:
        if self.keywords is None:
            self.keywords = {}
        self.keywords[keyword] = True
        self.touch()

    def add_category(self, category: str) -> None:
        if self.categories is None:
            self.categories = {}
        self.categories[category] = True
        self.touch()

    def add_link(self, link_id: str, link: Link) -> None:
        if self.links is None:
            self.links = {}
        self.links[link_id] = link
        self.touch()

    def validate(self) -> ValidationErrors:
        """Valida o objeto; coleção vazia significa sucesso."""
        from api.validators.jscalendar import validate

        return validate(self)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

    def to_pretty_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)

    def clone(self) -> Any:
        return self.model_copy(deep=True)


class ScheduledObjectBase(CalendarObjectBase):
    """Campos de agenda compartilhados por Event e Task."""

    description_content_type: str | None = Field(None, alias="descriptionContentType")
    show_without_time: bool | None = Field(
        None,
        alias="showWithoutTime",
        description="Objeto de dia inteiro.",
    )
    localizations: dict[str, PatchObject] | None = None
    start: LocalDateTime | None = None
    time_zone: str | None = Field(None, alias="timeZone", description="Identificador IANA.")
    time_zones: dict[str, TimeZone | None] | None = Field(None, alias="timeZones")
    recurrence_id: LocalDateTime | None = Field(None, alias="recurrenceId")
    recurrence_id_time_zone: str | None = Field(None, alias="recurrenceIdTimeZone")
    recurrence_rules: list[RecurrenceRule] | None = Field(None, alias="recurrenceRules")
    recurrence_overrides: dict[str, PatchObject] | None = Field(None, alias="recurrenceOverrides")
    excluded_recurrence_rules: list[RecurrenceRule] | None = Field(
        None, alias="excludedRecurrenceRules"
    )
    excluded: bool | None = None
    priority: int | None = None
    free_busy_status: str | None = Field(None, alias="freeBusyStatus")
    privacy: str | None = None
    reply_to: dict[str, str] | None = Field(None, alias="replyTo")
    sent_by: str | None = Field(None, alias="sentBy")
    participants: dict[str, Participant | None] | None = None
    request_status: str | None = Field(None, alias="requestStatus")
    use_default_alerts: bool | None = Field(None, alias="useDefaultAlerts")
    alerts: dict[str, Alert | None] | None = None
    locations: dict[str, Location | None] | None = None
    virtual_locations: dict[str, VirtualLocation | None] | None = Field(
        None, alias="virtualLocations"
    )
    related_to: dict[str, Relation | None] | None = Field(None, alias="relatedTo")
    status: str | None = None
    localized_strings: dict[str, dict[str, str]] | None = Field(None, alias="localizedStrings")

    @field_validator("start", "recurrence_id", mode="before")
    @classmethod
    def parse_local_datetime(cls, value: Any) -> LocalDateTime | None:
        return coerce_local_datetime(value)

    @field_serializer("start", "recurrence_id", when_used="json")
    def serialize_local_datetime(self, value: LocalDateTime | None) -> str | None:
        return None if value is None else str(value)

    def is_all_day(self) -> bool:
        return bool(self.show_without_time)

    def is_recurring(self) -> bool:
        return bool(self.recurrence_rules)

    def set_recurrence(self, rules: list[RecurrenceRule]) -> None:
        self.recurrence_rules = rules
        self.touch()

    def add_participant(self, participant_id: str, participant: Participant) -> None:
        if self.participants is None:
            self.participants = {}
        self.participants[participant_id] = participant
        self.touch()

    def add_location(self, location_id: str, location: Location) -> None:
        if self.locations is None:
            self.locations = {}
        self.locations[location_id] = location
        self.touch()

    def add_virtual_location(self, location_id: str, location: VirtualLocation) -> None:
        if self.virtual_locations is None:
            self.virtual_locations = {}
        self.virtual_locations[location_id] = location
        self.touch()

    def add_alert(self, alert_id: str, alert: Alert) -> None:
        if self.alerts is None:
            self.alerts = {}
        self.alerts[alert_id] = alert
        self.touch()


def parse_optional_duration(literal: str | None) -> timedelta | None:
    """Duração do literal, ou None quando ausente."""
    if literal is None:
        return None
    return parse_duration(literal)


def stamp_new(obj: CalendarObjectBase, now: datetime | None = None) -> None:
    """Carimba created/updated e inicia sequence em 0."""
    moment = now or utcnow()
    obj.created = moment
    obj.updated = moment
    obj.sequence = 0
