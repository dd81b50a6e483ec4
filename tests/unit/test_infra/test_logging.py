"""Unit tests for structured logging helpers."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from catalog_service.infra.logging import (
    ContextInjectingFilter,
    JSONFormatter,
    clear_log_context,
    configure_logging,
    get_lazy_logger,
    get_log_context,
    set_log_context,
    shutdown,
)


def make_record(msg: str = "Listed %d projects", *args, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="catalog_service.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args or (5,),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def _clean_context():
    clear_log_context()
    yield
    clear_log_context()


class TestJSONFormatter:
    def test_formats_one_json_line(self):
        formatter = JSONFormatter(static={"service": "catalog-service"})

        output = formatter.format(make_record(rows=5))
        data = json.loads(output)

        assert "\n" not in output
        assert data["level"] == "INFO"
        assert data["logger"] == "catalog_service.test"
        assert data["message"] == "Listed 5 projects"
        assert data["service"] == "catalog-service"
        assert data["rows"] == 5
        assert data["timestamp"].endswith("Z")

    def test_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = make_record()
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))

        assert "RuntimeError: boom" in data["exception"]

    def test_no_trace_ids_outside_spans(self):
        data = json.loads(JSONFormatter().format(make_record()))

        assert "trace_id" not in data
        assert "span_id" not in data

    def test_unserializable_extras_are_stringified(self):
        data = json.loads(JSONFormatter().format(make_record(payload=object())))

        assert data["payload"].startswith("<object object")


class TestLogContext:
    def test_set_get_clear(self):
        set_log_context(request_id="abc-123")
        set_log_context(project="afrika-korps")

        assert get_log_context() == {"request_id": "abc-123", "project": "afrika-korps"}

        clear_log_context()
        assert get_log_context() == {}

    def test_filter_injects_without_overwriting(self):
        set_log_context(request_id="abc-123", rows=99)
        record = make_record(rows=5)

        assert ContextInjectingFilter().filter(record) is True
        assert record.request_id == "abc-123"
        assert record.rows == 5


class TestLazyLogger:
    def test_skips_callable_when_disabled(self, caplog: pytest.LogCaptureFixture):
        calls = []
        lazy = get_lazy_logger("catalog_service.test.lazy")

        with caplog.at_level(logging.INFO, logger="catalog_service.test.lazy"):
            lazy.debug(lambda: calls.append("built") or "expensive")

        assert calls == []
        assert caplog.records == []

    def test_evaluates_callable_when_enabled(self, caplog: pytest.LogCaptureFixture):
        lazy = get_lazy_logger("catalog_service.test.lazy")

        with caplog.at_level(logging.DEBUG, logger="catalog_service.test.lazy"):
            lazy.debug(lambda: "fetched 6 rows")

        assert [record.getMessage() for record in caplog.records] == ["fetched 6 rows"]


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_root(self):
        root = logging.getLogger()
        level = root.level
        yield
        shutdown()
        root.setLevel(level)

    def test_file_output_carries_request_context(self, tmp_path):
        log_file = tmp_path / "logs" / "catalog.log"
        configure_logging(
            log_level="INFO",
            console_enabled=False,
            file_path=log_file,
            service_name="catalog-test",
        )

        set_log_context(request_id="req-7")
        logging.getLogger("catalog_service.test.file").info("Listed projects", extra={"rows": 5})
        shutdown()

        lines = log_file.read_text(encoding="utf-8").splitlines()
        data = json.loads(lines[-1])
        assert data["message"] == "Listed projects"
        assert data["service"] == "catalog-test"
        assert data["request_id"] == "req-7"
        assert data["rows"] == 5

    def test_without_handlers_installs_nothing(self):
        before = list(logging.getLogger().handlers)

        configure_logging(console_enabled=False, file_path=None)

        assert logging.getLogger().handlers == before
