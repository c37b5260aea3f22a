"""LocalDateTime: data-hora flutuante (sem fuso) do JSCalendar.

Representa apenas os campos de calendário de um instante de relógio de
parede. Construir a partir de um datetime com tzinfo descarta o offset;
a serialização nunca emite designador de fuso.

Valores ausentes (None) se comportam como o instante zero
(0001-01-01T00:00:00) nos helpers de módulo: or_zero, is_zero, equal,
before e after.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, ClassVar

from utils.errors import ParseError

_NANOS_PER_SECOND = 1_000_000_000
_SECONDS_PER_DAY = 86_400

_LOCAL_DATETIME_REGEX = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d{1,9}))?"
    r"(?:Z|[+-]\d{2}:\d{2})?$"
)


@dataclass(frozen=True, order=True)
class LocalDateTime:
    """Instante de relógio de parede sem fuso.

    Igualdade e ordenação comparam os campos de calendário, na ordem
    ano, mês, dia, hora, minuto, segundo e nanossegundo.
    """

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    nanosecond: int = 0

    ZERO: ClassVar[LocalDateTime]

    def __post_init__(self) -> None:
        # datetime() valida faixas de data e hora
        datetime(self.year, self.month, self.day, self.hour, self.minute, self.second)
        if not 0 <= self.nanosecond < _NANOS_PER_SECOND:
            raise ValueError(f"nanosecond out of range: {self.nanosecond}")

    @classmethod
    def from_datetime(cls, value: datetime | date) -> LocalDateTime:
        """Captura os campos de calendário, ignorando qualquer tzinfo."""
        if not isinstance(value, datetime):
            return cls(value.year, value.month, value.day)
        return cls(
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            value.second,
            value.microsecond * 1000,
        )

    @classmethod
    def parse(cls, text: str) -> LocalDateTime:
        """Interpreta `YYYY-MM-DDTHH:MM:SS[.fração]`.

        Um sufixo `Z` ou `±HH:MM` é aceito e descartado.

        Raises:
            ParseError: literal sem separador `T` ou fora da gramática.
        """
        match = _LOCAL_DATETIME_REGEX.match(text.strip()) if isinstance(text, str) else None
        if match is None:
            raise ParseError(f"invalid LocalDateTime format: {text}")

        fraction = match.group("fraction") or ""
        nanosecond = int(fraction.ljust(9, "0")) if fraction else 0
        try:
            return cls(
                int(match.group("year")),
                int(match.group("month")),
                int(match.group("day")),
                int(match.group("hour")),
                int(match.group("minute")),
                int(match.group("second")),
                nanosecond,
            )
        except ValueError as exc:
            raise ParseError(f"invalid LocalDateTime format: {text}") from exc

    def to_datetime(self) -> datetime:
        """Retorna datetime ingênuo (nanossegundos truncados para µs)."""
        return datetime(
            self.year,
            self.month,
            self.day,
            self.hour,
            self.minute,
            self.second,
            self.nanosecond // 1000,
        )

    def isoformat(self) -> str:
        base = (
            f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
            f"T{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        )
        if not self.nanosecond:
            return base
        return f"{base}.{self.nanosecond:09d}".rstrip("0")

    def __str__(self) -> str:
        return self.isoformat()

    @property
    def is_zero(self) -> bool:
        return self == LocalDateTime.ZERO

    def _to_nanos(self) -> int:
        days = date(self.year, self.month, self.day).toordinal()
        seconds = days * _SECONDS_PER_DAY + self.hour * 3600 + self.minute * 60 + self.second
        return seconds * _NANOS_PER_SECOND + self.nanosecond

    @classmethod
    def _from_nanos(cls, total: int) -> LocalDateTime:
        seconds, nanosecond = divmod(total, _NANOS_PER_SECOND)
        days, seconds = divmod(seconds, _SECONDS_PER_DAY)
        try:
            day = date.fromordinal(days)
        except ValueError as exc:
            raise OverflowError("LocalDateTime out of range") from exc
        hour, seconds = divmod(seconds, 3600)
        minute, second = divmod(seconds, 60)
        return cls(day.year, day.month, day.day, hour, minute, second, nanosecond)

    def add(self, delta: timedelta) -> LocalDateTime:
        """Soma uma duração diretamente sobre os campos armazenados."""
        return LocalDateTime._from_nanos(self._to_nanos() + _timedelta_to_nanos(delta))

    def sub(self, other: LocalDateTime) -> timedelta:
        """Diferença entre dois instantes flutuantes."""
        nanos = self._to_nanos() - other._to_nanos()
        return timedelta(microseconds=nanos // 1000)

    def __add__(self, other: Any) -> LocalDateTime:
        if isinstance(other, timedelta):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: Any) -> Any:
        if isinstance(other, timedelta):
            return self.add(-other)
        if isinstance(other, LocalDateTime):
            return self.sub(other)
        return NotImplemented


LocalDateTime.ZERO = LocalDateTime(1, 1, 1)


def _timedelta_to_nanos(delta: timedelta) -> int:
    return ((delta.days * _SECONDS_PER_DAY + delta.seconds) * 1_000_000 + delta.microseconds) * 1000


def coerce_local_datetime(value: Any) -> LocalDateTime | None:
    """Converte str/datetime/date em LocalDateTime (usado pelos modelos)."""
    if value is None or isinstance(value, LocalDateTime):
        return value
    if isinstance(value, (datetime, date)):
        return LocalDateTime.from_datetime(value)
    if isinstance(value, str):
        return LocalDateTime.parse(value)
    raise ParseError(f"invalid LocalDateTime value: {value!r}")


def or_zero(value: LocalDateTime | None) -> LocalDateTime:
    """Retorna o valor ou o instante zero quando ausente."""
    return LocalDateTime.ZERO if value is None else value


def is_zero(value: LocalDateTime | None) -> bool:
    return or_zero(value).is_zero


def equal(left: LocalDateTime | None, right: LocalDateTime | None) -> bool:
    """Compara por campos; ausente equivale ao instante zero."""
    return or_zero(left) == or_zero(right)


def before(left: LocalDateTime | None, right: LocalDateTime | None) -> bool:
    return or_zero(left) < or_zero(right)


def after(left: LocalDateTime | None, right: LocalDateTime | None) -> bool:
    return or_zero(left) > or_zero(right)
