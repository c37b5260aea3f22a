"""Settings da bridge iCalendar.

Centralizar a leitura de env aqui evita espalhar parse de configuracao
pelos conversores.
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PRODID = "-//jscal-bridge//JSCalendar Bridge//EN"


class ICalendarSettings(BaseModel):
    """Configuracoes usadas na exportacao para iCalendar."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    prodid: str = Field(
        default=DEFAULT_PRODID,
        min_length=1,
        description="PRODID emitido no VCALENDAR.",
    )
    version: str = Field(
        default="2.0",
        description="VERSION emitido no VCALENDAR.",
    )
    emit_dtstamp: bool = Field(
        default=True,
        description="Emite DTSTAMP em cada VEVENT exportado.",
    )
    default_timezone: str | None = Field(
        default=None,
        description="Fuso IANA usado quando o Event exportado nao tem timeZone.",
    )


def _read_optional_env(key: str) -> str | None:
    """Retorna valor opcional da env sem propagar string vazia."""
    raw_value = os.getenv(key)
    if raw_value is None:
        return None
    stripped_value = raw_value.strip()
    return stripped_value or None


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _load_icalendar_from_env() -> ICalendarSettings:
    """Carrega ICalendarSettings a partir de variaveis de ambiente."""
    return ICalendarSettings(
        prodid=os.getenv("JSCAL_ICAL_PRODID", DEFAULT_PRODID),
        version=os.getenv("JSCAL_ICAL_VERSION", "2.0"),
        emit_dtstamp=_parse_bool(os.getenv("JSCAL_ICAL_EMIT_DTSTAMP", "true")),
        default_timezone=_read_optional_env("JSCAL_ICAL_DEFAULT_TIMEZONE"),
    )


@lru_cache(maxsize=1)
def get_icalendar_settings() -> ICalendarSettings:
    """Retorna instancia cacheada de ICalendarSettings."""
    return _load_icalendar_from_env()


__all__ = ["DEFAULT_PRODID", "ICalendarSettings", "get_icalendar_settings"]
