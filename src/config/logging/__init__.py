"""Configuração de logging estruturado.

Re-exporta funções e classes para configuração de logging JSON.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="jscal_bridge")
    logger = get_logger(__name__)

Campos obrigatórios em todo log:
- correlation_id
- service
- level
- logger
- message
- asctime
"""

from config.logging.config import (
    DEFAULT_SERVICE_NAME,
    VALID_LOG_LEVELS,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
    log_fallback,
)
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "DEFAULT_SERVICE_NAME",
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "VALID_LOG_LEVELS",
    # Filters
    "CorrelationIdFilter",
    # Configuração principal
    "configure_logging",
    "configure_logging_from_settings",
    # Formatters
    "create_json_formatter",
    "get_logger",
    "log_fallback",
]
