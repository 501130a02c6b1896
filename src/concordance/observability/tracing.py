"""OpenTelemetry spans around ingestion and search.

Only the SDK tracer provider is installed; there is no exporter, so spans
exist to carry ids into log records and to record failures.
"""

from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.trace import SpanKind, Status, StatusCode

from concordance.observability.context import set_trace_context


if TYPE_CHECKING:
    from collections.abc import Iterator

    from opentelemetry.trace import Span, Tracer

logger = logging.getLogger(__name__)

SERVICE_NAME = "kwic-concordance"

_state: dict[str, Tracer | None] = {"tracer": None}


def init_tracing(service_name: str = SERVICE_NAME, **resource_attributes: str) -> TracerProvider:
    """Install an SDK tracer provider tagged with ``service.name``."""
    resource = Resource.create({"service.name": service_name, **resource_attributes})
    provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(provider)
    _state["tracer"] = trace.get_tracer("concordance")
    logger.debug("Tracer provider installed for %s", service_name)
    return provider


def get_tracer() -> Tracer:
    tracer = _state["tracer"]
    if tracer is None:
        init_tracing()
        tracer = _state["tracer"]
    return tracer  # type: ignore[return-value]


@contextmanager
def create_span(
    name: str,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: dict[str, Any] | None = None,
) -> Iterator[Span]:
    """Open a span, expose its ids to logging, and mark it failed on error."""
    with get_tracer().start_as_current_span(
        name,
        kind=kind,
        attributes=attributes,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        span_context = span.get_span_context()
        set_trace_context(format(span_context.trace_id, "032x"), format(span_context.span_id, "016x"))
        try:
            yield span
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            raise
