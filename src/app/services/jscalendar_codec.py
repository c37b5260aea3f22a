"""Codec JSON de objetos JSCalendar.

Decodifica bytes/str JSON em Event, Task ou Group espiando o campo
`@type`, valida o resultado e serializa de volta (aliases camelCase,
campos ausentes omitidos).

Erros:
- ParseError: JSON malformado, `@type` ausente/desconhecido ou campo
  com tipo incompatível;
- ValidationErrors: objeto decodificado viola o schema.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import ValidationError as PydanticValidationError

from api.validators.jscalendar import ValidationErrors, validate
from api.validators.jscalendar.errors import prefixed
from app.constants.jscalendar import ObjectType
from app.domain.event import Event
from app.domain.group import CalendarObject, Group
from app.domain.task import Task
from utils.errors import ParseError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

logger = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", Event, Task, Group)


def _load_json(data: bytes | str) -> Any:
    try:
        return json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ParseError(f"failed to parse JSON: {exc}") from exc


def _decode(model_cls: type[_ModelT], payload: Any) -> _ModelT:
    try:
        return model_cls.model_validate(payload)
    except PydanticValidationError as exc:
        raise ParseError(f"failed to parse JSCalendar {model_cls.__name__} JSON: {exc}") from exc


def _checked(obj: _ModelT) -> _ModelT:
    errors = validate(obj)
    if errors:
        logger.info(
            "jscalendar_validation_failed",
            extra={
                "component": "jscalendar_codec",
                "object_type": obj.type,
                "error_count": len(errors),
            },
        )
        raise errors
    return obj


def _parse_object(payload: Any) -> CalendarObject:
    object_type = payload.get("@type") if isinstance(payload, dict) else None
    if not isinstance(object_type, str):
        raise ParseError("missing or invalid @type field")

    match object_type:
        case ObjectType.EVENT:
            return _checked(_decode(Event, payload))
        case ObjectType.TASK:
            return _checked(_decode(Task, payload))
        case ObjectType.GROUP:
            return _checked(_decode(Group, payload))
        case _:
            raise ParseError(f"unknown @type: {object_type}")


def _parse_array(data: bytes | str, parse_item: Callable[[Any], _ModelT]) -> list[_ModelT]:
    payload = _load_json(data)
    if not isinstance(payload, list):
        raise ParseError("failed to parse JSON array: expected a JSON array")

    objects: list[_ModelT] = []
    for index, item in enumerate(payload):
        try:
            objects.append(parse_item(item))
        except ValidationErrors as exc:
            raise ValidationErrors(prefixed(exc, f"[{index}]")) from exc
        except ParseError as exc:
            raise ParseError(f"failed to parse object at index {index}: {exc}") from exc
    return objects


def parse(data: bytes | str) -> CalendarObject:
    """Decodifica qualquer objeto JSCalendar pelo `@type`."""
    return _parse_object(_load_json(data))


def parse_all(data: bytes | str) -> list[CalendarObject]:
    """Decodifica um array JSON de objetos de tipos variados."""
    return _parse_array(data, _parse_object)


def parse_event(data: bytes | str) -> Event:
    return _checked(_decode(Event, _load_json(data)))


def parse_task(data: bytes | str) -> Task:
    return _checked(_decode(Task, _load_json(data)))


def parse_group(data: bytes | str) -> Group:
    return _checked(_decode(Group, _load_json(data)))


def parse_all_events(data: bytes | str) -> list[Event]:
    return _parse_array(data, lambda item: _checked(_decode(Event, item)))


def parse_all_tasks(data: bytes | str) -> list[Task]:
    return _parse_array(data, lambda item: _checked(_decode(Task, item)))


def parse_all_groups(data: bytes | str) -> list[Group]:
    return _parse_array(data, lambda item: _checked(_decode(Group, item)))


def to_json(obj: CalendarObject | Sequence[CalendarObject]) -> str:
    """Serializa um objeto (ou lista) em JSON compacto."""
    return json.dumps(_to_payload(obj), ensure_ascii=False, separators=(",", ":"))


def to_pretty_json(obj: CalendarObject | Sequence[CalendarObject]) -> str:
    """Serializa um objeto (ou lista) em JSON indentado (2 espaços)."""
    return json.dumps(_to_payload(obj), ensure_ascii=False, indent=2)


def _to_payload(obj: CalendarObject | Sequence[CalendarObject]) -> Any:
    if isinstance(obj, (Event, Task, Group)):
        return obj.to_dict()
    return [item.to_dict() for item in obj]
