"""Validadores de entidades aninhadas.

Cada função devolve violações com caminho relativo à entidade
(ex: `email`, `roles[foo]`); o objeto pai aplica o prefixo
(`participants[bob@x].`) ao juntar na sua lista.

Entidade ausente (None) é válida e não produz violações.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from api.validators.jscalendar.errors import ValidationError, prefixed
from api.validators.jscalendar.patterns import DURATION_PATTERN, GEO_URI_PREFIX, TIMEZONE_PATTERN
from app.constants.jscalendar import (
    AlertAction,
    EntityType,
    ParticipantKind,
    ParticipantRole,
    ParticipationStatus,
    RelationType,
    RelativeTo,
    ScheduleAgent,
    enum_values,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.domain.entities import (
        Alert,
        Link,
        Location,
        Participant,
        Relation,
        VirtualLocation,
    )

_PARTICIPATION_STATUSES = enum_values(ParticipationStatus)
_SCHEDULE_AGENTS = enum_values(ScheduleAgent)
_KINDS = enum_values(ParticipantKind)
_ROLES = enum_values(ParticipantRole)
_RELATIVE_TO = enum_values(RelativeTo)
_ALERT_ACTIONS = enum_values(AlertAction)
_RELATION_TYPES = enum_values(RelationType)


def is_valid_uri(value: str) -> bool:
    """Checagem sintática mínima: sem caracteres de controle e parseável."""
    if any(ord(char) < 32 or ord(char) == 127 for char in value):
        return False
    try:
        urlsplit(value)
    except ValueError:
        return False
    return True


def validate_links(links: Mapping[str, Link | None] | None) -> list[ValidationError]:
    """Valida um mapa de links, prefixando com `links[id]`."""
    errors: list[ValidationError] = []
    for link_id, link in (links or {}).items():
        errors.extend(prefixed(validate_link(link), f"links[{link_id}]"))
    return errors


def validate_related_to(
    related_to: Mapping[str, Relation | None] | None,
) -> list[ValidationError]:
    """Valida um mapa relatedTo, prefixando com `relatedTo[uid]`."""
    errors: list[ValidationError] = []
    for related_uid, relation in (related_to or {}).items():
        errors.extend(prefixed(validate_relation(relation), f"relatedTo[{related_uid}]"))
    return errors


def validate_relation(relation: Relation | None) -> list[ValidationError]:
    """Tipos de relação conhecidos; o conjunto só admite true."""
    if relation is None:
        return []

    errors: list[ValidationError] = []
    if relation.type != EntityType.RELATION:
        errors.append(ValidationError("@type", "must be 'Relation'", relation.type))
    for kind, enabled in (relation.relation or {}).items():
        if kind not in _RELATION_TYPES:
            errors.append(ValidationError(f"relation[{kind}]", "invalid relation type", kind))
        elif not enabled:
            errors.append(
                ValidationError(f"relation[{kind}]", "relation value must be true", enabled)
            )
    return errors


def validate_link(link: Link | None) -> list[ValidationError]:
    if link is None:
        return []
    if not link.href:
        return [ValidationError("href", "is required", link.href)]
    if not is_valid_uri(link.href):
        return [ValidationError("href", "invalid URL format", link.href)]
    return []


def validate_participant(participant: Participant | None) -> list[ValidationError]:
    """Valida email, enums e papéis de um participante."""
    if participant is None:
        return []

    errors: list[ValidationError] = []
    if participant.email and "@" not in participant.email:
        errors.append(ValidationError("email", "invalid email format", participant.email))

    status = participant.participation_status
    if status is not None and status not in _PARTICIPATION_STATUSES:
        errors.append(ValidationError("participationStatus", "invalid participationStatus", status))

    agent = participant.schedule_agent
    if agent is not None and agent not in _SCHEDULE_AGENTS:
        errors.append(ValidationError("scheduleAgent", "invalid scheduleAgent", agent))

    if participant.kind is not None and participant.kind not in _KINDS:
        errors.append(ValidationError("kind", "invalid kind", participant.kind))

    for role in participant.roles or {}:
        if role not in _ROLES:
            errors.append(ValidationError(f"roles[{role}]", "invalid role", role))

    errors.extend(validate_links(participant.links))
    return errors


def validate_location(location: Location | None) -> list[ValidationError]:
    if location is None:
        return []

    errors: list[ValidationError] = []
    coordinates = location.coordinates
    if coordinates is not None and not coordinates.startswith(GEO_URI_PREFIX):
        errors.append(ValidationError("coordinates", "must be a geo: URI", coordinates))

    relative_to = location.relative_to
    if relative_to is not None and relative_to not in _RELATIVE_TO:
        errors.append(ValidationError("relativeTo", "invalid relativeTo", relative_to))

    time_zone = location.time_zone
    if time_zone is not None and not TIMEZONE_PATTERN.match(time_zone):
        errors.append(ValidationError("timeZone", "invalid IANA timezone identifier", time_zone))

    errors.extend(validate_links(location.links))
    return errors


def validate_virtual_location(location: VirtualLocation | None) -> list[ValidationError]:
    if location is None:
        return []

    errors: list[ValidationError] = []
    if location.type != EntityType.VIRTUAL_LOCATION:
        errors.append(ValidationError("@type", "must be 'VirtualLocation'", location.type))

    if not location.uri:
        errors.append(ValidationError("uri", "is required", location.uri))
    elif not is_valid_uri(location.uri):
        errors.append(ValidationError("uri", "invalid URI format", location.uri))

    # features é um conjunto String[Boolean]: só true é permitido
    for feature, enabled in (location.features or {}).items():
        if not enabled:
            errors.append(
                ValidationError(f"features[{feature}]", "feature value must be true", enabled)
            )
    return errors


def validate_alert(alert: Alert | None) -> list[ValidationError]:
    """Valida tipo, gatilho (offset obrigatório) e ação do alerta."""
    if alert is None:
        return []

    errors: list[ValidationError] = []
    if alert.type != EntityType.ALERT:
        errors.append(ValidationError("@type", "must be 'Alert'", alert.type))

    trigger = alert.trigger
    if trigger is None:
        errors.append(ValidationError("trigger", "is required"))
    else:
        if trigger.type != EntityType.OFFSET_TRIGGER:
            errors.append(ValidationError("trigger.@type", "must be 'OffsetTrigger'", trigger.type))
        if not trigger.offset:
            errors.append(ValidationError("trigger", "must have either offset or when"))
        elif not DURATION_PATTERN.match(trigger.offset):
            errors.append(
                ValidationError("trigger.offset", "invalid ISO 8601 duration format", trigger.offset)
            )
        relative_to = trigger.relative_to
        if relative_to is not None and relative_to not in _RELATIVE_TO:
            errors.append(ValidationError("trigger.relativeTo", "invalid relativeTo", relative_to))

    if alert.action is not None and alert.action not in _ALERT_ACTIONS:
        errors.append(ValidationError("action", "invalid action", alert.action))
    errors.extend(validate_related_to(alert.related_to))
    return errors
