"""Validadores das variantes Event, Task e Group.

Passeio em duas fases por objeto:
1. checagens escalares, de faixa e de obrigatoriedade dos próprios campos;
2. para cada coleção, delega ao validador da entidade e junta as
   violações com o caminho prefixado.

Chaves JSON desconhecidas nunca são sinalizadas.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from api.validators.jscalendar.entities import (
    validate_alert,
    validate_links,
    validate_location,
    validate_participant,
    validate_related_to,
    validate_virtual_location,
)
from api.validators.jscalendar.errors import ValidationError, ValidationErrors, prefixed
from api.validators.jscalendar.limits import (
    MAX_DESCRIPTION_LENGTH,
    MAX_TITLE_LENGTH,
    MAX_UID_LENGTH,
)
from api.validators.jscalendar.patterns import COLOR_PATTERN, DURATION_PATTERN, TIMEZONE_PATTERN
from api.validators.jscalendar.recurrence import validate_recurrence_rule
from app.constants.jscalendar import (
    PERCENT_COMPLETE_MAX,
    PERCENT_COMPLETE_MIN,
    PRIORITY_MAX,
    PRIORITY_MIN,
    DescriptionContentType,
    EventStatus,
    FreeBusyStatus,
    Method,
    ObjectType,
    Privacy,
    Progress,
    TaskStatus,
    enum_values,
)
from app.domain.event import Event
from app.domain.group import Group
from app.domain.task import Task

if TYPE_CHECKING:
    from app.domain.common import CalendarObjectBase, ScheduledObjectBase

_EVENT_STATUSES = enum_values(EventStatus)
_TASK_STATUSES = enum_values(TaskStatus)
_PROGRESS_VALUES = enum_values(Progress)
_FREE_BUSY = enum_values(FreeBusyStatus)
_PRIVACY = enum_values(Privacy)
_METHODS = enum_values(Method)
_CONTENT_TYPES = enum_values(DescriptionContentType)


def _validate_identity(obj: CalendarObjectBase, expected_type: str) -> list[ValidationError]:
    """@type, uid, title, description e sequence (comuns às três variantes)."""
    errors: list[ValidationError] = []
    if obj.type != expected_type:
        errors.append(ValidationError("@type", f"must be '{expected_type}'", obj.type))

    if not obj.uid:
        errors.append(ValidationError("uid", "is required", obj.uid))
    elif len(obj.uid) > MAX_UID_LENGTH:
        errors.append(
            ValidationError(
                "uid", f"exceeds maximum length of {MAX_UID_LENGTH} characters", obj.uid
            )
        )

    if obj.title is not None and len(obj.title) > MAX_TITLE_LENGTH:
        errors.append(
            ValidationError("title", f"exceeds maximum length of {MAX_TITLE_LENGTH} characters")
        )

    if obj.description is not None and len(obj.description) > MAX_DESCRIPTION_LENGTH:
        errors.append(
            ValidationError(
                "description",
                f"exceeds maximum length of {MAX_DESCRIPTION_LENGTH} characters",
            )
        )

    if obj.sequence is not None and obj.sequence < 0:
        errors.append(ValidationError("sequence", "cannot be negative", obj.sequence))
    return errors


def _validate_schedule(obj: ScheduledObjectBase) -> list[ValidationError]:
    """Campos escalares compartilhados por Event e Task."""
    errors: list[ValidationError] = []
    if obj.time_zone is not None and not TIMEZONE_PATTERN.match(obj.time_zone):
        errors.append(
            ValidationError("timeZone", "invalid IANA timezone identifier", obj.time_zone)
        )

    if obj.color is not None and not COLOR_PATTERN.match(obj.color):
        errors.append(ValidationError("color", "invalid CSS color value", obj.color))

    if obj.free_busy_status is not None and obj.free_busy_status not in _FREE_BUSY:
        errors.append(
            ValidationError("freeBusyStatus", "invalid freeBusyStatus", obj.free_busy_status)
        )

    if obj.privacy is not None and obj.privacy not in _PRIVACY:
        errors.append(ValidationError("privacy", "invalid privacy", obj.privacy))

    if obj.priority is not None and not PRIORITY_MIN <= obj.priority <= PRIORITY_MAX:
        errors.append(
            ValidationError(
                "priority", f"must be between {PRIORITY_MIN} and {PRIORITY_MAX}", obj.priority
            )
        )

    if obj.method is not None and obj.method not in _METHODS:
        errors.append(ValidationError("method", "invalid method value", obj.method))

    content_type = obj.description_content_type
    if content_type is not None and content_type not in _CONTENT_TYPES:
        errors.append(
            ValidationError("descriptionContentType", "must be text/plain or text/html", content_type)
        )
    return errors


def _validate_collections(obj: ScheduledObjectBase) -> list[ValidationError]:
    """Fase 2: delega a cada entidade e prefixa o caminho."""
    errors: list[ValidationError] = []
    for participant_id, participant in (obj.participants or {}).items():
        errors.extend(
            prefixed(validate_participant(participant), f"participants[{participant_id}]")
        )
    for location_id, location in (obj.locations or {}).items():
        errors.extend(prefixed(validate_location(location), f"locations[{location_id}]"))
    for location_id, virtual in (obj.virtual_locations or {}).items():
        errors.extend(
            prefixed(validate_virtual_location(virtual), f"virtualLocations[{location_id}]")
        )
    for alert_id, alert in (obj.alerts or {}).items():
        errors.extend(prefixed(validate_alert(alert), f"alerts[{alert_id}]"))
    errors.extend(validate_links(obj.links))
    errors.extend(validate_related_to(obj.related_to))
    for index, rule in enumerate(obj.recurrence_rules or []):
        errors.extend(prefixed(validate_recurrence_rule(rule), f"recurrenceRules[{index}]"))
    return errors


def validate_event(event: Event | None) -> ValidationErrors:
    """Valida um Event; coleção vazia significa sucesso."""
    if event is None:
        return ValidationErrors([ValidationError("event", "event is absent")])

    errors = ValidationErrors(_validate_identity(event, ObjectType.EVENT))
    if event.start is None:
        errors.append(ValidationError("start", "is required"))

    if event.duration is not None and not DURATION_PATTERN.match(event.duration):
        errors.append(
            ValidationError("duration", "invalid ISO 8601 duration format", event.duration)
        )

    errors.extend(_validate_schedule(event))

    if event.status is not None and event.status not in _EVENT_STATUSES:
        errors.append(ValidationError("status", "invalid status", event.status))

    errors.extend(_validate_collections(event))
    return errors


def validate_task(task: Task | None) -> ValidationErrors:
    """Valida uma Task, incluindo progresso e prazo >= início."""
    if task is None:
        return ValidationErrors([ValidationError("task", "task is absent")])

    errors = ValidationErrors(_validate_identity(task, ObjectType.TASK))
    if task.progress is not None and task.progress not in _PROGRESS_VALUES:
        errors.append(ValidationError("progress", "invalid progress value", task.progress))

    percent = task.percent_complete
    if percent is not None and not PERCENT_COMPLETE_MIN <= percent <= PERCENT_COMPLETE_MAX:
        errors.append(
            ValidationError(
                "percentComplete",
                f"must be between {PERCENT_COMPLETE_MIN} and {PERCENT_COMPLETE_MAX}",
                percent,
            )
        )

    estimated = task.estimated_duration
    if estimated is not None and not DURATION_PATTERN.match(estimated):
        errors.append(
            ValidationError("estimatedDuration", "invalid ISO 8601 duration format", estimated)
        )

    if task.due is not None and task.start is not None and task.due < task.start:
        errors.append(ValidationError("due", "due date cannot be before start date", task.due))

    if task.status is not None and task.status not in _TASK_STATUSES:
        errors.append(ValidationError("status", "invalid status", task.status))

    errors.extend(_validate_schedule(task))
    errors.extend(_validate_collections(task))
    return errors


def validate_group(group: Group | None) -> ValidationErrors:
    """Valida um Group e cada entrada, com prefixo `entries[i]`."""
    if group is None:
        return ValidationErrors([ValidationError("group", "group is absent")])

    errors = ValidationErrors(_validate_identity(group, ObjectType.GROUP))
    if group.color is not None and not COLOR_PATTERN.match(group.color):
        errors.append(ValidationError("color", "invalid color format", group.color))

    errors.extend(validate_links(group.links))

    seen_uids: set[str] = set()
    for index, entry in enumerate(group.entries):
        prefix = f"entries[{index}]"
        if entry is None:
            errors.append(ValidationError(prefix, "entry cannot be absent"))
            continue

        if entry.uid in seen_uids:
            errors.append(
                ValidationError(prefix, f"duplicate UID '{entry.uid}' in group entries", entry.uid)
            )
        seen_uids.add(entry.uid)

        match entry:
            case Event():
                errors.extend(prefixed(validate_event(entry), prefix))
            case Task():
                errors.extend(prefixed(validate_task(entry), prefix))
            case _:
                errors.append(
                    ValidationError(f"{prefix}.@type", "must be 'Event' or 'Task'", entry.type)
                )

    for index, entry in enumerate(group.entries):
        if entry is not None and entry.uid == group.uid:
            errors.append(
                ValidationError(f"entries[{index}]", "group cannot contain itself", entry.uid)
            )
    return errors
