"""Tabelas de mapeamento de propriedades iCalendar <-> JSCalendar.

Assimetrias intencionais:
- CLASS:CONFIDENTIAL importa como "private" e "private" exporta como
  CONFIDENTIAL (PRIVATE do iCalendar também importa como "private").
- ROLE na exportação usa prioridade fixa chair > optional >
  informational > REQ-PARTICIPANT; só o papel de maior prioridade sai.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.constants.jscalendar import FreeBusyStatus, ParticipantRole, Privacy

if TYPE_CHECKING:
    from collections.abc import Mapping

MAILTO_PREFIX = "mailto:"

# ROLE (iCalendar) -> papéis JSCalendar acumulados
ROLE_IMPORT_MAP: dict[str, tuple[str, ...]] = {
    "CHAIR": (ParticipantRole.CHAIR, ParticipantRole.ATTENDEE),
    "REQ-PARTICIPANT": (ParticipantRole.ATTENDEE,),
    "OPT-PARTICIPANT": (ParticipantRole.OPTIONAL,),
    "NON-PARTICIPANT": (ParticipantRole.INFORMATIONAL,),
}
DEFAULT_IMPORT_ROLES: tuple[str, ...] = (ParticipantRole.ATTENDEE,)

# Prioridade de exportação: primeiro papel presente vence
ROLE_EXPORT_PRIORITY: tuple[tuple[str, str], ...] = (
    (ParticipantRole.CHAIR, "CHAIR"),
    (ParticipantRole.OPTIONAL, "OPT-PARTICIPANT"),
    (ParticipantRole.INFORMATIONAL, "NON-PARTICIPANT"),
)
DEFAULT_EXPORT_ROLE = "REQ-PARTICIPANT"

ORGANIZER_ROLES: tuple[str, ...] = (ParticipantRole.OWNER, ParticipantRole.ATTENDEE)

TRANSPARENT = "TRANSPARENT"
OPAQUE = "OPAQUE"
CONFIDENTIAL = "CONFIDENTIAL"


def import_roles(ical_role: str | None) -> tuple[str, ...]:
    if not ical_role:
        return DEFAULT_IMPORT_ROLES
    return ROLE_IMPORT_MAP.get(ical_role.upper(), DEFAULT_IMPORT_ROLES)


def export_role(roles: Mapping[str, bool] | None) -> str | None:
    """ROLE de maior prioridade, ou None se o participante não tem papéis."""
    if not roles:
        return None
    for role, ical_role in ROLE_EXPORT_PRIORITY:
        if roles.get(role):
            return ical_role
    return DEFAULT_EXPORT_ROLE


def import_privacy(ical_class: str) -> str:
    value = ical_class.lower()
    if value == "confidential":
        return Privacy.PRIVATE
    return value


def export_privacy(privacy: str) -> str:
    if privacy == Privacy.PRIVATE:
        return CONFIDENTIAL
    return privacy.upper()


def import_transparency(transp: str) -> str:
    return FreeBusyStatus.FREE if transp.upper() == TRANSPARENT else FreeBusyStatus.BUSY


def export_transparency(free_busy_status: str) -> str:
    return TRANSPARENT if free_busy_status == FreeBusyStatus.FREE else OPAQUE


def import_status(status: str) -> str:
    return status.lower()


def export_status(status: str) -> str:
    return status.upper()


def strip_mailto(address: str) -> str:
    """Remove o prefixo `mailto:` (sem diferenciar maiúsculas)."""
    value = address.strip()
    if value.lower().startswith(MAILTO_PREFIX):
        return value[len(MAILTO_PREFIX):]
    return value


def to_mailto(address: str) -> str:
    if address.lower().startswith(MAILTO_PREFIX):
        return address
    return f"{MAILTO_PREFIX}{address}"
