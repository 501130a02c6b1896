"""Per-context trace ids read by the JSON log formatter.

Outside any span (e.g. while the CLI parses arguments) a random pair of ids
is minted once so every record of a run still shares a trace id.
"""

from __future__ import annotations

from contextvars import ContextVar
import secrets


trace_context: ContextVar[dict[str, str] | None] = ContextVar("concordance_trace_context", default=None)


def get_trace_context() -> dict[str, str]:
    current = trace_context.get()
    if not current or not current.get("trace_id"):
        current = {"trace_id": secrets.token_hex(16), "span_id": secrets.token_hex(8)}
        trace_context.set(current)
    return current


def set_trace_context(trace_id: str, span_id: str, **extra: str) -> None:
    trace_context.set({"trace_id": trace_id, "span_id": span_id, **extra})
