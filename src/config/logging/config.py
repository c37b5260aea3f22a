"""Configuração centralizada de logging.

Logging estruturado JSON com:
- Campos obrigatórios (correlation_id, service, level, logger, message)
- Formatação padronizada
- Nível configurável por ambiente

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização do processo
    configure_logging(level="INFO", service_name="jscal_bridge")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("conversion_done", extra={"event_count": 3})

Logs nunca carregam conteúdo de calendário (títulos, descrições,
endereços): apenas uid, contagens e motivos.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

    from config.settings.base import BaseSettings

# Níveis de log válidos
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# Nome padrão do serviço
DEFAULT_SERVICE_NAME = "jscal_bridge"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função opcional que retorna o correlation_id
            do contexto atual (ex: de ContextVar).

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]


def configure_logging_from_settings(settings: BaseSettings) -> None:
    """Configura logging a partir de BaseSettings, com correlation_id do contexto."""
    from app.observability import get_correlation_id

    configure_logging(
        level=settings.log_level,
        service_name=settings.service_name,
        correlation_id_getter=get_correlation_id,
    )


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado.

    O filter injeta automaticamente service e correlation_id.
    """
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    uid: str | None = None,
) -> None:
    """Log observável de degradação aplicada (sem PII).

    Registra quando a conversão seguiu com um valor padrão em vez de
    falhar (ex: data-hora malformada virou o instante zero).

    Args:
        logger: Logger instance.
        component: Propriedade ou componente afetado (ex: "DTSTART").
        reason: Razão do fallback (ex: "malformed_datetime").
        uid: UID do objeto em conversão, quando conhecido.
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    if uid:
        extra["uid"] = uid

    logger.warning(
        "Fallback applied for %s",
        component,
        extra=extra,
    )
