"""Validador de schema JSCalendar (RFC 8984).

Uso:
    from api.validators.jscalendar import validate

    errors = validate(event)
    if errors:
        for error in errors:
            print(error.field, error.message)
"""

from api.validators.jscalendar.entities import (
    validate_alert,
    validate_link,
    validate_location,
    validate_participant,
    validate_relation,
    validate_virtual_location,
)
from api.validators.jscalendar.errors import ValidationError, ValidationErrors
from api.validators.jscalendar.limits import (
    MAX_DESCRIPTION_LENGTH,
    MAX_TITLE_LENGTH,
    MAX_UID_LENGTH,
)
from api.validators.jscalendar.objects import validate_event, validate_group, validate_task
from api.validators.jscalendar.recurrence import validate_recurrence_rule
from api.validators.jscalendar.validator_dispatcher import JSCalendarValidator, validate

__all__ = [
    "MAX_DESCRIPTION_LENGTH",
    "MAX_TITLE_LENGTH",
    "MAX_UID_LENGTH",
    "JSCalendarValidator",
    "ValidationError",
    "ValidationErrors",
    "validate",
    "validate_alert",
    "validate_event",
    "validate_group",
    "validate_link",
    "validate_location",
    "validate_participant",
    "validate_recurrence_rule",
    "validate_relation",
    "validate_task",
    "validate_virtual_location",
]
