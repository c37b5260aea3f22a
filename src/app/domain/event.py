"""Variante Event do JSCalendar."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import Field

from app.constants.jscalendar import ObjectType
from app.domain.base import utcnow
from app.domain.common import ScheduledObjectBase, parse_optional_duration, stamp_new
from app.domain.local_datetime import LocalDateTime

if TYPE_CHECKING:
    from datetime import timedelta


class Event(ScheduledObjectBase):
    """Evento agendado com início e duração."""

    type: str = Field(ObjectType.EVENT, alias="@type")
    duration: str | None = Field(None, description="Duração ISO 8601.")

    def get_duration(self) -> timedelta | None:
        """Duração interpretada; None se ausente.

        Raises:
            ParseError: literal de duração malformado.
        """
        return parse_optional_duration(self.duration)

    def get_end_time(self) -> LocalDateTime | None:
        """Fim calculado como start + duration (None se faltar algum)."""
        if self.start is None:
            return None
        duration = self.get_duration()
        if duration is None:
            return None
        return self.start + duration


def new_event(uid: str, title: str) -> Event:
    """Cria Event com start no instante atual, created/updated e sequence 0."""
    now = utcnow()
    event = Event(uid=uid, title=title, start=LocalDateTime.from_datetime(now))
    stamp_new(event, now)
    return event
