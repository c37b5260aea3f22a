"""Codec de duração ISO 8601 (`[-]P[nY][nM][nW][nD][T[nH][nM][nS]]`).

Política de aproximação (com perda): 1 ano = 365 dias, 1 mês = 30 dias,
1 semana = 7 dias. Quem precisa de aritmética exata de ano/mês de
calendário não deve usar este codec para essas unidades.

A formatação decompõe em dias inteiros + H/M/S e não reproduz as
unidades do literal original, apenas o tempo total.
"""

from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal
from typing import TYPE_CHECKING

from utils.errors import ParseError

if TYPE_CHECKING:
    from app.domain.local_datetime import LocalDateTime

DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30
DAYS_PER_WEEK = 7

_MICROS_PER_SECOND = 1_000_000
_MICROS_PER_DAY = 86_400 * _MICROS_PER_SECOND

_NUMBER = r"\d+(?:\.\d+)?"

DURATION_REGEX = re.compile(
    rf"^(?P<sign>-)?P"
    rf"(?:(?P<years>{_NUMBER})Y)?"
    rf"(?:(?P<months>{_NUMBER})M)?"
    rf"(?:(?P<weeks>{_NUMBER})W)?"
    rf"(?:(?P<days>{_NUMBER})D)?"
    rf"(?:T"
    rf"(?:(?P<hours>{_NUMBER})H)?"
    rf"(?:(?P<minutes>{_NUMBER})M)?"
    rf"(?:(?P<seconds>{_NUMBER})S)?"
    rf")?$"
)

# Microssegundos por unidade do literal
_UNIT_MICROS: dict[str, int] = {
    "years": DAYS_PER_YEAR * _MICROS_PER_DAY,
    "months": DAYS_PER_MONTH * _MICROS_PER_DAY,
    "weeks": DAYS_PER_WEEK * _MICROS_PER_DAY,
    "days": _MICROS_PER_DAY,
    "hours": 3600 * _MICROS_PER_SECOND,
    "minutes": 60 * _MICROS_PER_SECOND,
    "seconds": _MICROS_PER_SECOND,
}


def is_duration(literal: str) -> bool:
    """True se o literal segue a gramática de duração."""
    return isinstance(literal, str) and DURATION_REGEX.match(literal) is not None


def parse_duration(literal: str) -> timedelta:
    """Converte literal ISO 8601 em timedelta.

    `P` e `PT` são válidos e valem zero. O sinal vale para o literal todo.

    Raises:
        ParseError: literal vazio, sem `P` inicial ou fora da gramática.
    """
    if not literal:
        raise ParseError("empty duration string")
    if not literal.lstrip("-").startswith("P"):
        raise ParseError(f"duration must start with 'P': {literal}")

    match = DURATION_REGEX.match(literal)
    if match is None:
        raise ParseError(f"invalid ISO 8601 duration format: {literal}")

    total = Decimal(0)
    for unit, micros in _UNIT_MICROS.items():
        value = match.group(unit)
        if value is not None:
            total += Decimal(value) * micros

    delta = timedelta(microseconds=int(total))
    return -delta if match.group("sign") else delta


def format_duration(delta: timedelta) -> str:
    """Formata timedelta como `[-]P[nD][T[nH][nM][nS]]`; zero vira `PT0S`."""
    total = (delta.days * 86_400 + delta.seconds) * _MICROS_PER_SECOND + delta.microseconds
    if total == 0:
        return "PT0S"

    sign = "-" if total < 0 else ""
    total = abs(total)

    days, rest = divmod(total, _MICROS_PER_DAY)
    hours, rest = divmod(rest, 3600 * _MICROS_PER_SECOND)
    minutes, rest = divmod(rest, 60 * _MICROS_PER_SECOND)
    seconds, micros = divmod(rest, _MICROS_PER_SECOND)

    parts = [f"{sign}P"]
    if days:
        parts.append(f"{days}D")
    if hours or minutes or seconds or micros:
        parts.append("T")
        if hours:
            parts.append(f"{hours}H")
        if minutes:
            parts.append(f"{minutes}M")
        if micros:
            fraction = f"{micros:06d}".rstrip("0")
            parts.append(f"{seconds}.{fraction}S")
        elif seconds:
            parts.append(f"{seconds}S")
    return "".join(parts)


def duration_between(start: LocalDateTime, end: LocalDateTime) -> timedelta:
    """Diferença `end - start` entre dois LocalDateTime."""
    return end.sub(start)
