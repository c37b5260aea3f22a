"""Validador de RecurrenceRule.

Caminhos relativos à regra; o chamador prefixa com `recurrenceRules[i]`.
A violação cruzada count/until fica no próprio prefixo (campo vazio).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from api.validators.jscalendar.errors import ValidationError
from app.constants.jscalendar import (
    FIRST_DAY_OF_WEEK_MAX,
    FIRST_DAY_OF_WEEK_MIN,
    DayOfWeek,
    EntityType,
    Frequency,
    RScale,
    Skip,
    enum_values,
)

if TYPE_CHECKING:
    from app.domain.entities import RecurrenceRule

_FREQUENCIES = enum_values(Frequency)
_RSCALES = enum_values(RScale)
_SKIPS = enum_values(Skip)
_DAYS = enum_values(DayOfWeek)


def validate_recurrence_rule(rule: RecurrenceRule | None) -> list[ValidationError]:
    """Valida frequência, modificadores numéricos, enums e tokens by-day."""
    if rule is None:
        return []

    errors: list[ValidationError] = []
    if rule.type != EntityType.RECURRENCE_RULE:
        errors.append(ValidationError("@type", "must be 'RecurrenceRule'", rule.type))

    if not rule.frequency:
        errors.append(ValidationError("frequency", "is required"))
    elif rule.frequency not in _FREQUENCIES:
        errors.append(ValidationError("frequency", "invalid frequency", rule.frequency))

    if rule.interval is not None and rule.interval <= 0:
        errors.append(ValidationError("interval", "must be positive", rule.interval))

    if rule.count is not None and rule.count <= 0:
        errors.append(ValidationError("count", "must be positive", rule.count))

    if rule.count is not None and rule.until is not None:
        errors.append(ValidationError("", "cannot have both count and until"))

    if rule.rscale and rule.rscale not in _RSCALES:
        errors.append(ValidationError("rscale", "invalid rscale", rule.rscale))

    if rule.skip and rule.skip not in _SKIPS:
        errors.append(ValidationError("skip", "invalid skip", rule.skip))

    first_day = rule.first_day_of_week
    if first_day is not None and not FIRST_DAY_OF_WEEK_MIN <= first_day <= FIRST_DAY_OF_WEEK_MAX:
        errors.append(ValidationError("firstDayOfWeek", "invalid firstDayOfWeek", first_day))

    for index, nday in enumerate(rule.by_day or []):
        if nday.day not in _DAYS:
            errors.append(ValidationError(f"byDay[{index}].day", "invalid day", nday.day))

    return errors
