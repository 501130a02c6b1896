"""Observability: logging, tracing spans and Prometheus metrics."""

from concordance.observability.context import get_trace_context, set_trace_context, trace_context
from concordance.observability.logging import JsonFormatter, configure_logging
from concordance.observability.metrics import (
    CONTEXTS_WRITTEN,
    DOCUMENTS_INGESTED,
    SEARCH_LATENCY,
    get_metrics,
    track_latency,
)
from concordance.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "CONTEXTS_WRITTEN",
    "DOCUMENTS_INGESTED",
    "SEARCH_LATENCY",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_tracer",
    "get_trace_context",
    "init_tracing",
    "set_trace_context",
    "trace_context",
    "track_latency",
]
