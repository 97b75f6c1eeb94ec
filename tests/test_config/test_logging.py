"""Testes para config.logging.

Cobre: configure_logging, log_fallback, RequestContextFilter,
create_json_formatter.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    RequestContextFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
    log_fallback,
)


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("app.test", logging.INFO, __file__, 1, "webhook_processed", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestConfigureLogging:
    """Testes para configure_logging."""

    def test_level_is_case_insensitive(self) -> None:
        """Aceita nível em minúsculas."""
        configure_logging(level="warning")
        assert logging.getLogger().level == logging.WARNING

    def test_invalid_level_raises(self) -> None:
        """Nível inválido levanta ValueError."""
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="VERBOSE")

    def test_replaces_handlers_with_context_filter(self) -> None:
        """Substitui handlers existentes por um handler JSON com filtro de contexto."""
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]

        configure_logging(service_name="svc", tenant_id_getter=lambda: "t1")

        assert len(root.handlers) == 1
        assert any(isinstance(f, RequestContextFilter) for f in root.handlers[0].filters)

    def test_get_logger(self) -> None:
        assert get_logger("app.x").name == "app.x"


class TestRequestContextFilter:
    """Testes para RequestContextFilter."""

    def test_injects_context(self) -> None:
        record = _record()

        RequestContextFilter("svc", lambda: "corr-1", lambda: "tenant-1").filter(record)

        assert record.correlation_id == "corr-1"
        assert record.tenant_id == "tenant-1"
        assert record.service == "svc"

    def test_explicit_values_are_preserved(self) -> None:
        record = _record(correlation_id="explicit", tenant_id="t-explicit")

        RequestContextFilter("svc", lambda: "corr-1", lambda: "tenant-1").filter(record)

        assert record.correlation_id == "explicit"
        assert record.tenant_id == "t-explicit"

    def test_without_getters_uses_empty_strings(self) -> None:
        record = _record()

        assert RequestContextFilter("svc").filter(record) is True
        assert record.correlation_id == ""
        assert record.tenant_id == ""


class TestJsonFormatter:
    """Testes para create_json_formatter."""

    def test_output_has_required_fields_renamed(self) -> None:
        record = _record(events=2)
        RequestContextFilter("pyloto-ingest", lambda: "c1", lambda: "t1").filter(record)

        output = json.loads(create_json_formatter().format(record))

        assert output["level"] == "INFO"
        assert output["logger"] == "app.test"
        assert output["message"] == "webhook_processed"
        assert output["correlation_id"] == "c1"
        assert output["tenant_id"] == "t1"
        assert output["service"] == "pyloto-ingest"
        assert output["events"] == 2

    def test_constants(self) -> None:
        assert "correlation_id" in REQUIRED_LOG_FIELDS
        assert "tenant_id" in REQUIRED_LOG_FIELDS
        assert FIELD_RENAME_MAP["levelname"] == "level"


class TestLogFallback:
    """Testes para log_fallback."""

    def test_logs_warning_with_context(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("app.fallback_test")

        with caplog.at_level(logging.WARNING, logger="app.fallback_test"):
            log_fallback(logger, "customer_resolution", reason="Timeout", platform="FACEBOOK")

        [record] = caplog.records
        assert record.getMessage() == "fallback_applied"
        assert record.fallback_used is True
        assert record.component == "customer_resolution"
        assert record.reason == "Timeout"
        assert record.platform == "FACEBOOK"

    def test_reason_is_optional(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("app.fallback_test")

        with caplog.at_level(logging.WARNING, logger="app.fallback_test"):
            log_fallback(logger, "account_last_sync")

        assert not hasattr(caplog.records[0], "reason")
