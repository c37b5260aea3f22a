"""Formatter de logging estruturado JSON.

Campos obrigatórios: asctime, level, logger, message, correlation_id,
service. Campos passados via `extra` (uid, component, reason, contagens)
entram no JSON como chaves adicionais.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

# Nomes de campo no JSON final
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2025-03-01 10:30:00,123",
            "level": "WARNING",
            "logger": "api.normalizers.icalendar.normalizer",
            "message": "Fallback applied for DTSTART",
            "correlation_id": "abc-123",
            "service": "jscal_bridge",
            "reason": "malformed_datetime"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)
