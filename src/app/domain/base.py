"""Base Pydantic compartilhada pelos modelos JSCalendar.

O schema é aberto: chaves JSON desconhecidas são preservadas
(extra="allow") e voltam na serialização. Os nomes Python são snake_case;
os aliases são os nomes camelCase do RFC 8984.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


def utcnow() -> datetime:
    return datetime.now(UTC)


class JSCalendarModel(BaseModel):
    """Modelo base com aliases camelCase e schema aberto."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow",
        arbitrary_types_allowed=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Serializa para dict JSON-compatível, omitindo campos ausentes."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
