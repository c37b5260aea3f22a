"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ConversionError,
    JSCalendarError,
    ParseError,
)

__all__ = [
    "ConversionError",
    "JSCalendarError",
    "ParseError",
]
