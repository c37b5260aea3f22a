"""Serviços de aplicação.

Unidades reutilizáveis sem IO direto: codec JSON de objetos JSCalendar.
"""

from app.services.jscalendar_codec import (
    parse,
    parse_all,
    parse_all_events,
    parse_all_groups,
    parse_all_tasks,
    parse_event,
    parse_group,
    parse_task,
    to_json,
    to_pretty_json,
)

__all__ = [
    "parse",
    "parse_all",
    "parse_all_events",
    "parse_all_groups",
    "parse_all_tasks",
    "parse_event",
    "parse_group",
    "parse_task",
    "to_json",
    "to_pretty_json",
]
