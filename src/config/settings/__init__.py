"""Agregador de settings do jscal_bridge.

Re-exporta todas as settings e funções de cada módulo.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    DEFAULT_SERVICE_NAME,
    BaseSettings,
    Environment,
    get_base_settings,
)

# iCalendar bridge settings
from config.settings.icalendar import (
    DEFAULT_PRODID,
    ICalendarSettings,
    get_icalendar_settings,
)

__all__ = [
    # Constants
    "DEFAULT_PRODID",
    "DEFAULT_SERVICE_NAME",
    # Base
    "BaseSettings",
    "Environment",
    # iCalendar
    "ICalendarSettings",
    "get_base_settings",
    "get_icalendar_settings",
]
