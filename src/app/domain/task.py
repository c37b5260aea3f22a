"""Variante Task do JSCalendar."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import Field, field_serializer, field_validator

from app.constants.jscalendar import ObjectType, Progress
from app.domain.base import utcnow
from app.domain.common import ScheduledObjectBase, parse_optional_duration, stamp_new
from app.domain.local_datetime import LocalDateTime, coerce_local_datetime


class Task(ScheduledObjectBase):
    """Tarefa com prazo, estimativa e progresso."""

    type: str = Field(ObjectType.TASK, alias="@type")
    due: LocalDateTime | None = Field(None, description="Prazo (data-hora flutuante).")
    estimated_duration: str | None = Field(None, alias="estimatedDuration")
    percent_complete: int | None = Field(None, alias="percentComplete")
    progress: str | None = None
    progress_updated: datetime | None = Field(None, alias="progressUpdated")

    @field_validator("due", mode="before")
    @classmethod
    def parse_due(cls, value: Any) -> LocalDateTime | None:
        return coerce_local_datetime(value)

    @field_serializer("due", when_used="json")
    def serialize_due(self, value: LocalDateTime | None) -> str | None:
        return None if value is None else str(value)

    def is_completed(self) -> bool:
        return self.progress == Progress.COMPLETED

    def is_overdue(self, now: datetime | None = None) -> bool:
        """True se o prazo já passou e a tarefa não foi concluída.

        O prazo é flutuante; compara com o relógio de parede de `now`
        (UTC por padrão).
        """
        if self.due is None or self.is_completed():
            return False
        reference = LocalDateTime.from_datetime(now or datetime.now(UTC))
        return reference > self.due

    def set_progress(self, progress: str, percent_complete: int) -> None:
        self.progress = progress
        self.percent_complete = percent_complete
        self.progress_updated = utcnow()
        self.touch()

    def get_estimated_duration(self) -> timedelta | None:
        return parse_optional_duration(self.estimated_duration)

    def get_time_to_complete(self) -> timedelta | None:
        """Tempo restante proporcional ao percentual concluído."""
        if self.is_completed():
            return timedelta(0)
        estimated = self.get_estimated_duration()
        if estimated is None:
            return None
        if not self.percent_complete:
            return estimated
        remaining = 100 - self.percent_complete
        return estimated * remaining / 100


def new_task(uid: str, title: str) -> Task:
    """Cria Task pendente (needs-action) com created/updated e sequence 0."""
    task = Task(uid=uid, title=title, progress=Progress.NEEDS_ACTION)
    stamp_new(task)
    return task
