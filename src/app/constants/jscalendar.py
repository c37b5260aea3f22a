"""Enums de domínio para o modelo JSCalendar (RFC 8984).

Cada conceito enumerado tem uma única fonte canônica aqui; o validador
e a bridge iCalendar derivam suas allowlists destes enums.
"""

from __future__ import annotations

from enum import StrEnum


class ObjectType(StrEnum):
    """Variantes de objeto de calendário (valor de @type)."""

    EVENT = "Event"
    TASK = "Task"
    GROUP = "Group"


class EntityType(StrEnum):
    """Tipos de entidades aninhadas (valor de @type)."""

    PARTICIPANT = "Participant"
    LOCATION = "Location"
    VIRTUAL_LOCATION = "VirtualLocation"
    LINK = "Link"
    ALERT = "Alert"
    OFFSET_TRIGGER = "OffsetTrigger"
    RELATION = "Relation"
    RECURRENCE_RULE = "RecurrenceRule"
    NDAY = "NDay"
    TIME_ZONE = "TimeZone"
    TIME_ZONE_RULE = "TimeZoneRule"


class EventStatus(StrEnum):
    """Status de um Event."""

    CONFIRMED = "confirmed"
    TENTATIVE = "tentative"
    CANCELLED = "cancelled"


class TaskStatus(StrEnum):
    """Status de uma Task."""

    NEEDS_ACTION = "needs-action"
    IN_PROCESS = "in-process"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Progress(StrEnum):
    """Progresso de Task ou de participante."""

    NEEDS_ACTION = "needs-action"
    IN_PROCESS = "in-process"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class FreeBusyStatus(StrEnum):
    """Disponibilidade durante o objeto."""

    FREE = "free"
    BUSY = "busy"
    TENTATIVE = "tentative"
    UNAVAILABLE = "unavailable"


class Privacy(StrEnum):
    """Nível de privacidade."""

    PUBLIC = "public"
    PRIVATE = "private"
    SECRET = "secret"


class ParticipationStatus(StrEnum):
    """Resposta do participante ao convite."""

    NEEDS_ACTION = "needs-action"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    TENTATIVE = "tentative"
    DELEGATED = "delegated"


class ParticipantRole(StrEnum):
    """Papéis possíveis de um participante."""

    OWNER = "owner"
    ATTENDEE = "attendee"
    OPTIONAL = "optional"
    INFORMATIONAL = "informational"
    CHAIR = "chair"
    CONTACT = "contact"


class ParticipantKind(StrEnum):
    """Tipo de entidade representada pelo participante."""

    INDIVIDUAL = "individual"
    GROUP = "group"
    RESOURCE = "resource"
    LOCATION = "location"
    UNKNOWN = "unknown"


class ScheduleAgent(StrEnum):
    """Quem envia mensagens de agendamento ao participante."""

    SERVER = "server"
    CLIENT = "client"
    NONE = "none"


class Method(StrEnum):
    """Métodos iTIP."""

    PUBLISH = "publish"
    REQUEST = "request"
    REPLY = "reply"
    ADD = "add"
    CANCEL = "cancel"
    REFRESH = "refresh"
    COUNTER = "counter"
    DECLINE_COUNTER = "declineCounter"


class DescriptionContentType(StrEnum):
    """Tipos MIME aceitos para a descrição."""

    TEXT_PLAIN = "text/plain"
    TEXT_HTML = "text/html"


class RelativeTo(StrEnum):
    """Âncora de alerta ou de localização."""

    START = "start"
    END = "end"


class AlertAction(StrEnum):
    """Ação disparada por um alerta."""

    DISPLAY = "display"
    EMAIL = "email"


class Frequency(StrEnum):
    """Frequência de uma regra de recorrência."""

    YEARLY = "yearly"
    MONTHLY = "monthly"
    WEEKLY = "weekly"
    DAILY = "daily"
    HOURLY = "hourly"
    MINUTELY = "minutely"
    SECONDLY = "secondly"


class DayOfWeek(StrEnum):
    """Códigos de dia da semana em duas letras."""

    MONDAY = "mo"
    TUESDAY = "tu"
    WEDNESDAY = "we"
    THURSDAY = "th"
    FRIDAY = "fr"
    SATURDAY = "sa"
    SUNDAY = "su"


class Skip(StrEnum):
    """Política para datas inválidas no calendário em uso."""

    OMIT = "omit"
    BACKWARD = "backward"
    FORWARD = "forward"


class RScale(StrEnum):
    """Sistemas de calendário (rscale) aceitos."""

    GREGORIAN = "gregorian"
    CHINESE = "chinese"
    HEBREW = "hebrew"
    ISLAMIC = "islamic"
    ISLAMIC_CIVIL = "islamic-civil"
    ISLAMIC_TBLA = "islamic-tbla"
    PERSIAN = "persian"
    ETHIOPIC = "ethiopic"
    COPTIC = "coptic"
    JAPANESE = "japanese"
    BUDDHIST = "buddhist"
    INDIAN = "indian"


class RelationType(StrEnum):
    """Tipos de relação entre objetos."""

    FIRST = "first"
    NEXT = "next"
    CHILD = "child"
    PARENT = "parent"
    SIBLING = "sibling"
    PRIOR = "prior"


def enum_values(enum_cls: type[StrEnum]) -> frozenset[str]:
    """Retorna o conjunto de valores de um enum (allowlist)."""
    return frozenset(member.value for member in enum_cls)


# Limites de faixa numérica
PRIORITY_MIN = 0
PRIORITY_MAX = 9
PERCENT_COMPLETE_MIN = 0
PERCENT_COMPLETE_MAX = 100
FIRST_DAY_OF_WEEK_MIN = 0
FIRST_DAY_OF_WEEK_MAX = 6
