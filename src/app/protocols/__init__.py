"""Protocolos e contratos do core da aplicação."""

from .converter import CalendarConverterProtocol
from .normalizer import ComponentNormalizerProtocol
from .payload_builder import ComponentBuilderProtocol
from .validator import CalendarValidatorProtocol

__all__ = [
    "CalendarConverterProtocol",
    "CalendarValidatorProtocol",
    "ComponentBuilderProtocol",
    "ComponentNormalizerProtocol",
]
