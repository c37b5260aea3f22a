"""Tradutor RRULE (RFC 5545) <-> RecurrenceRule (JSCalendar).

Partes suportadas nos dois sentidos: FREQ, INTERVAL, COUNT, UNTIL e
BYDAY. Qualquer outra parte (BYMONTH, BYSETPOS, WKST...) é descartada
em silêncio na importação e nunca é emitida na exportação.

COUNT e UNTIL juntos:
- importação mantém os dois e registra warning (o validador reporta);
- exportação emite só COUNT e registra o conflito.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import TYPE_CHECKING

from app.domain.entities import NDay, RecurrenceRule, parse_nday
from app.domain.local_datetime import LocalDateTime
from config.logging import log_fallback
from utils.errors import ParseError

if TYPE_CHECKING:
    from icalendar.prop import vRecur

logger = logging.getLogger(__name__)

SUPPORTED_PARTS = frozenset({"FREQ", "INTERVAL", "COUNT", "UNTIL", "BYDAY"})

# strftime("%Y") não completa anos < 1000 com zeros
UNTIL_FORMAT = (
    "{until.year:04d}{until.month:02d}{until.day:02d}"
    "T{until.hour:02d}{until.minute:02d}{until.second:02d}Z"
)

_UNTIL_DATETIME = re.compile(r"^(\d{8})T(\d{6})(Z?)$")
_UNTIL_DATE = re.compile(r"^\d{8}$")


def _literal(rrule: str | vRecur | bytes) -> str:
    if isinstance(rrule, bytes):
        return rrule.decode("utf-8")
    if isinstance(rrule, str):
        return rrule
    return rrule.to_ical().decode("utf-8")


def _split_parts(literal: str) -> dict[str, str]:
    parts: dict[str, str] = {}
    for chunk in literal.strip().split(";"):
        key, sep, value = chunk.partition("=")
        if not sep:
            continue
        parts[key.strip().upper()] = value.strip()
    return parts


def _positive_int(name: str, value: str) -> int | None:
    """Inteiro da parte; zero ou negativo é ignorado."""
    try:
        number = int(value)
    except ValueError as exc:
        raise ParseError(f"invalid RRULE {name} value: {value}") from exc
    return number if number > 0 else None


def _parse_until(value: str) -> LocalDateTime | None:
    """UNTIL em data-hora (Z opcional) ou data pura; malformado vira None."""
    match = _UNTIL_DATETIME.match(value)
    if match:
        text, fmt = match.group(1) + match.group(2), "%Y%m%d%H%M%S"
    elif _UNTIL_DATE.match(value):
        text, fmt = value, "%Y%m%d"
    else:
        return None
    try:
        return LocalDateTime.from_datetime(datetime.strptime(text, fmt))
    except ValueError:
        # dígitos no formato certo, mas fora de faixa (mês 13, dia 40)
        return None


def parse_rrule(rrule: str | vRecur | bytes) -> RecurrenceRule:
    """Decodifica uma RRULE em RecurrenceRule.

    Aceita o literal (`FREQ=DAILY;COUNT=5`) ou o vRecur da biblioteca
    icalendar, que é reserializado antes da leitura.

    Raises:
        ParseError: FREQ ausente, INTERVAL/COUNT não inteiros ou token
            BYDAY inválido.
    """
    literal = _literal(rrule)
    parts = _split_parts(literal)

    frequency = parts.get("FREQ")
    if not frequency:
        raise ParseError(f"RRULE missing FREQ: {literal}")

    rule = RecurrenceRule(frequency=frequency.lower())

    if "INTERVAL" in parts:
        rule.interval = _positive_int("INTERVAL", parts["INTERVAL"])
    if "COUNT" in parts:
        rule.count = _positive_int("COUNT", parts["COUNT"])

    if "UNTIL" in parts:
        until = _parse_until(parts["UNTIL"])
        if until is None:
            log_fallback(logger, "RRULE.UNTIL", reason="malformed_datetime")
        rule.until = until

    if parts.get("BYDAY"):
        rule.by_day = [parse_nday(token) for token in parts["BYDAY"].split(",") if token.strip()]

    dropped = sorted(set(parts) - SUPPORTED_PARTS)
    if dropped:
        logger.debug(
            "rrule_parts_dropped",
            extra={"component": "icalendar_rrule", "parts": dropped},
        )

    if rule.count is not None and rule.until is not None:
        logger.warning(
            "rrule_count_and_until",
            extra={
                "component": "icalendar_rrule",
                "action": "import",
                "result": "kept_both",
            },
        )
    return rule


def format_nday(nday: NDay) -> str:
    """Token BYDAY `[±N]<DIA>` em maiúsculas (ex.: `-1FR`)."""
    day = nday.day.upper()
    if nday.nth_of_period is None:
        return day
    return f"{nday.nth_of_period}{day}"


def format_until(until: LocalDateTime) -> str:
    """UNTIL no formato UTC `YYYYMMDDTHHMMSSZ`."""
    return UNTIL_FORMAT.format(until=until)


def format_rrule(rule: RecurrenceRule) -> str:
    """Codifica a RecurrenceRule no literal RRULE.

    INTERVAL só sai quando > 1; UNTIL só sai sem COUNT.
    """
    parts: list[str] = []
    if rule.frequency:
        parts.append(f"FREQ={rule.frequency.upper()}")

    if rule.interval is not None and rule.interval > 1:
        parts.append(f"INTERVAL={rule.interval}")

    if rule.count is not None:
        parts.append(f"COUNT={rule.count}")
        if rule.until is not None:
            logger.warning(
                "rrule_count_and_until",
                extra={
                    "component": "icalendar_rrule",
                    "action": "export",
                    "result": "until_dropped",
                },
            )
    elif rule.until is not None:
        parts.append(f"UNTIL={format_until(rule.until)}")

    if rule.by_day:
        parts.append("BYDAY=" + ",".join(format_nday(nday) for nday in rule.by_day))

    return ";".join(parts)


__all__ = [
    "SUPPORTED_PARTS",
    "format_nday",
    "format_rrule",
    "format_until",
    "parse_nday",
    "parse_rrule",
]
