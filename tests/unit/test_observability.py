"""Unit tests for logging, tracing and metrics helpers."""

import json
import logging
import sys

from prometheus_client import REGISTRY
import pytest

from concordance.observability.context import get_trace_context, set_trace_context
from concordance.observability.logging import JsonFormatter, configure_logging
from concordance.observability.metrics import SEARCH_LATENCY, get_metrics, track_latency
from concordance.observability.tracing import create_span


def _record(message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("concordance.service_layer.services", logging.INFO, __file__, 1, message, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def test_emits_trace_correlated_json(self):
        set_trace_context("a" * 32, "b" * 16)
        payload = json.loads(JsonFormatter().format(_record("Ingested 'test'")))

        assert payload["message"] == "Ingested 'test'"
        assert payload["level"] == "INFO"
        assert payload["component"] == "services"
        assert payload["trace_id"] == "a" * 32
        assert payload["span_id"] == "b" * 16

    def test_extra_fields_are_serialized(self):
        payload = json.loads(JsonFormatter().format(_record("msg", document="test", words={"b", "a"})))
        assert payload["document"] == "test"
        assert payload["words"] == ["a", "b"]

    def test_long_messages_are_truncated(self):
        payload = json.loads(JsonFormatter().format(_record("x" * 5000)))
        assert len(payload["message"]) == JsonFormatter.MAX_MESSAGE_LEN + 3


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)
        logging.getLogger("concordance.search").setLevel(logging.NOTSET)

    def test_installs_single_handler(self):
        configure_logging("debug", json_output=True, logger_levels={"concordance.search": "warning"})
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("concordance.search").level == logging.WARNING

    def test_logs_go_to_stderr_not_stdout(self):
        configure_logging("info")
        handler = logging.getLogger().handlers[0]
        assert handler.stream is sys.stderr
        assert handler.stream is not sys.stdout


class TestTracing:
    def test_span_updates_log_context(self):
        with create_span("concordance.test", attributes={"document.name": "test"}) as span:
            span_context = span.get_span_context()
            assert get_trace_context()["trace_id"] == format(span_context.trace_id, "032x")
            assert get_trace_context()["span_id"] == format(span_context.span_id, "016x")

    def test_errors_propagate(self):
        with pytest.raises(ValueError, match="bad"):
            with create_span("concordance.failing"):
                raise ValueError("bad")


class TestMetrics:
    def test_track_latency_observes_once(self):
        before = REGISTRY.get_sample_value("concordance_search_latency_seconds_count") or 0.0
        with track_latency(SEARCH_LATENCY):
            pass
        assert REGISTRY.get_sample_value("concordance_search_latency_seconds_count") == before + 1

    def test_exposition_contains_concordance_metrics(self):
        text = get_metrics().decode("utf-8")
        assert "concordance_contexts_written_total" in text
        assert "concordance_search_latency_seconds" in text
