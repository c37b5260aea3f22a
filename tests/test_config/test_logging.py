"""Testes para config.logging.

Cobre: configure_logging, configure_logging_from_settings, get_logger,
log_fallback, CorrelationIdFilter, create_json_formatter.
"""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock

import pytest

from app.observability import correlation_scope
from config.logging import (
    DEFAULT_SERVICE_NAME,
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    VALID_LOG_LEVELS,
    CorrelationIdFilter,
    configure_logging,
    configure_logging_from_settings,
    create_json_formatter,
    get_logger,
    log_fallback,
)
from config.settings import BaseSettings


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def _record(msg: str = "message", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestConfigureLogging:
    """Testes para configure_logging."""

    def test_default_level_is_info(self) -> None:
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("DEBUG", logging.DEBUG),
            ("warning", logging.WARNING),
            ("CRITICAL", logging.CRITICAL),
        ],
    )
    def test_level_is_case_insensitive(self, level: str, expected: int) -> None:
        configure_logging(level=level)
        assert logging.getLogger().level == expected

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="VERBOSE")

    def test_replaces_existing_handlers(self) -> None:
        """Não acumula handlers em chamadas repetidas."""
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]
        configure_logging()
        assert len(root.handlers) == 1
        assert any(isinstance(f, CorrelationIdFilter) for f in root.handlers[0].filters)

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "jscal_bridge"


class TestConfigureLoggingFromSettings:
    """Configuração derivada de BaseSettings."""

    def test_uses_settings_level_and_service(self) -> None:
        settings = BaseSettings(
            environment="development",
            service_name="bridge_test",
            log_level="DEBUG",
        )
        configure_logging_from_settings(settings)

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        record = _record()
        root.handlers[0].filters[0].filter(record)
        assert record.service == "bridge_test"

    def test_correlation_id_comes_from_context(self) -> None:
        configure_logging_from_settings(BaseSettings())
        filter_ = logging.getLogger().handlers[0].filters[0]

        with correlation_scope("batch-42"):
            record = _record()
            filter_.filter(record)
        assert record.correlation_id == "batch-42"


class TestGetLogger:
    """Testes para get_logger."""

    def test_returns_named_logger(self) -> None:
        logger = get_logger("test.module")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.module"

    def test_same_name_returns_same_instance(self) -> None:
        assert get_logger("same.module") is get_logger("same.module")


class TestLogFallback:
    """Testes para log_fallback."""

    def test_logs_warning_with_lazy_template(self) -> None:
        logger = MagicMock(spec=logging.Logger)
        log_fallback(logger, "DTSTART")

        logger.warning.assert_called_once()
        args, kwargs = logger.warning.call_args
        assert args == ("Fallback applied for %s", "DTSTART")
        assert kwargs["extra"] == {"fallback_used": True, "component": "DTSTART"}

    def test_includes_reason_and_uid(self) -> None:
        logger = MagicMock(spec=logging.Logger)
        log_fallback(logger, "DTEND", reason="malformed_datetime", uid="evt-1")
        extra = logger.warning.call_args[1]["extra"]
        assert extra["reason"] == "malformed_datetime"
        assert extra["uid"] == "evt-1"

    def test_omits_empty_optional_fields(self) -> None:
        logger = MagicMock(spec=logging.Logger)
        log_fallback(logger, "SEQUENCE", reason=None, uid="")
        extra = logger.warning.call_args[1]["extra"]
        assert "reason" not in extra
        assert "uid" not in extra


class TestCorrelationIdFilter:
    """Testes para CorrelationIdFilter."""

    def test_adds_correlation_id_from_getter(self) -> None:
        filter_ = CorrelationIdFilter("my_service", lambda: "corr-123")
        record = _record()
        assert filter_.filter(record) is True
        assert record.correlation_id == "corr-123"
        assert record.service == "my_service"

    def test_preserves_explicit_correlation_id(self) -> None:
        filter_ = CorrelationIdFilter("svc", lambda: "from-getter")
        record = _record()
        record.correlation_id = "explicit-id"
        filter_.filter(record)
        assert record.correlation_id == "explicit-id"

    def test_empty_string_without_getter(self) -> None:
        filter_ = CorrelationIdFilter("service_name")
        record = _record(level=logging.ERROR)
        assert filter_.filter(record) is True
        assert record.correlation_id == ""


class TestCreateJsonFormatter:
    """Testes para create_json_formatter e constantes."""

    def test_required_fields(self) -> None:
        expected = {"asctime", "levelname", "name", "message", "correlation_id", "service"}
        assert set(REQUIRED_LOG_FIELDS) == expected

    def test_field_rename_map(self) -> None:
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_formats_record_as_json_with_extras(self) -> None:
        formatter = create_json_formatter()
        record = logging.LogRecord(
            name="api.normalizers.icalendar.normalizer",
            level=logging.WARNING,
            pathname="",
            lineno=0,
            msg="Fallback applied for %s",
            args=("DTSTART",),
            exc_info=None,
        )
        record.correlation_id = "abc-123"
        record.service = "jscal_bridge"
        record.reason = "malformed_datetime"

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "Fallback applied for DTSTART"
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "api.normalizers.icalendar.normalizer"
        assert payload["correlation_id"] == "abc-123"
        assert payload["reason"] == "malformed_datetime"
