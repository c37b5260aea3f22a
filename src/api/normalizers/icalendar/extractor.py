"""Extração estrutural de propriedades de um VEVENT (biblioteca icalendar).

Responsabilidades:
- Acessar propriedades simples ou repetidas de forma uniforme
- Ler valor bruto e parâmetros (TZID, VALUE, CN, PARTSTAT, ROLE)
- Decodificar data-hora iCalendar em LocalDateTime

Data-hora malformada não aborta: vira o instante zero e gera log de
fallback. Não faz mapeamento JSCalendar - apenas extração.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any

from app.domain.local_datetime import LocalDateTime
from config.logging import log_fallback

logger = logging.getLogger(__name__)

DATETIME_FORMATS: tuple[str, ...] = (
    "%Y%m%dT%H%M%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y%m%d",
    "%Y-%m-%d",
)

UTC_TZID = "UTC"


@dataclass(frozen=True, slots=True)
class ICalDateTime:
    """Data-hora extraída com marcador de dia inteiro e fuso."""

    value: LocalDateTime
    all_day: bool = False
    tzid: str | None = None

    @property
    def is_zero(self) -> bool:
        return self.value.is_zero


def properties(component: Any, name: str) -> list[Any]:
    """Todas as ocorrências da propriedade (a biblioteca usa lista quando repete)."""
    value = component.get(name)
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def first_property(component: Any, name: str) -> Any | None:
    values = properties(component, name)
    return values[0] if values else None


def text_value(component: Any, name: str) -> str | None:
    """Valor texto já sem escapes (vText é str)."""
    prop = first_property(component, name)
    if prop is None:
        return None
    return str(prop)


def raw_value(prop: Any) -> str:
    """Valor serializado como aparece no texto iCalendar."""
    to_ical = getattr(prop, "to_ical", None)
    if to_ical is None:
        return str(prop)
    raw = to_ical()
    return raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)


def param(prop: Any, key: str) -> str | None:
    """Primeiro valor do parâmetro (case-insensitive), ou None."""
    params = getattr(prop, "params", None)
    if not params:
        return None
    value = params.get(key)
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return str(value[0]) if value else None
    return str(value)


def has_error(component: Any, name: str) -> bool:
    """True se a biblioteca descartou a propriedade por valor inválido."""
    errors = getattr(component, "errors", None) or []
    return any(str(error_name).upper() == name for error_name, _ in errors)


def parse_ical_datetime(prop: Any, *, name: str, uid: str | None = None) -> ICalDateTime:
    """Decodifica DTSTART/DTEND/UNTIL em LocalDateTime.

    - sufixo Z: fuso UTC, removido do valor
    - VALUE=DATE ou valor de 8 dígitos: dia inteiro
    - TZID: mantido como identificador do fuso

    Valor malformado degrada para LocalDateTime.ZERO (com log).
    """
    value = raw_value(prop).strip()
    tzid = param(prop, "TZID")
    value_type = (param(prop, "VALUE") or "").upper()
    all_day = value_type == "DATE" or (len(value) == 8 and value.isdigit())

    if value.endswith("Z"):
        value = value[:-1]
        tzid = UTC_TZID

    for fmt in DATETIME_FORMATS:
        try:
            moment = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return ICalDateTime(LocalDateTime.from_datetime(moment), all_day, tzid)

    log_fallback(logger, name, reason="malformed_datetime", uid=uid)
    return ICalDateTime(LocalDateTime.ZERO, all_day, tzid)


def utc_timestamp(prop: Any) -> datetime | None:
    """CREATED/LAST-MODIFIED como datetime UTC; None se não for data-hora."""
    moment = getattr(prop, "dt", None)
    if isinstance(moment, datetime):
        if moment.tzinfo is None:
            return moment.replace(tzinfo=UTC)
        return moment.astimezone(UTC)
    if isinstance(moment, date):
        return datetime(moment.year, moment.month, moment.day, tzinfo=UTC)
    return None


__all__ = [
    "ICalDateTime",
    "first_property",
    "has_error",
    "param",
    "parse_ical_datetime",
    "properties",
    "raw_value",
    "text_value",
    "utc_timestamp",
]
