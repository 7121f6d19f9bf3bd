"""OpenTelemetry tracer and span vocabulary.

Only the API package is used here: spans are no-ops until the host
process installs a ``TracerProvider``.  Baggage works without one, so
the conversation id of a turn reaches every log record emitted inside it.

Usage::

    from webagent.infra.telemetry import SPAN_TOOL_CALL, tracer

    with tracer.start_as_current_span(SPAN_TOOL_CALL) as span:
        span.set_attribute(ATTR_TOOL_ID, "scrape")
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from opentelemetry import baggage, context, trace
from opentelemetry.trace import format_trace_id

tracer = trace.get_tracer("webagent")

# ---------------------------------------------------------------------------
# Span names
# ---------------------------------------------------------------------------

SPAN_TOOL_CALL = "tool.call"
SPAN_AGENT_TURN = "agent.turn"
SPAN_HISTORY_LOAD = "history.load"

# ---------------------------------------------------------------------------
# Span attribute keys
# ---------------------------------------------------------------------------

ATTR_TOOL_ID = "tool.id"
ATTR_TOOL_INPUT = "tool.input"
ATTR_TOOL_ERROR = "tool.error"

ATTR_AGENT_CONVERSATION_ID = "agent.conversation_id"

ATTR_HISTORY_CONVERSATION_ID = "history.conversation_id"
ATTR_HISTORY_MESSAGE_COUNT = "history.message_count"

# Baggage key carrying the conversation id to logs emitted during a turn.
BAGGAGE_CONVERSATION_ID = "webagent.conversation_id"


def get_current_trace_id() -> str | None:
    """Return the active trace ID as a 32-char hex string, or ``None``."""
    span = trace.get_current_span()
    ctx = span.get_span_context()
    if ctx is None or not ctx.is_valid:
        return None
    return format_trace_id(ctx.trace_id)


@contextmanager
def conversation_context(conversation_id: str) -> Iterator[None]:
    """Expose *conversation_id* as baggage for the duration of the block."""
    token = context.attach(
        baggage.set_baggage(BAGGAGE_CONVERSATION_ID, conversation_id)
    )
    try:
        yield
    finally:
        context.detach(token)


def get_current_conversation_id() -> str | None:
    """Return the conversation id of the enclosing agent turn, if any."""
    value = baggage.get_baggage(BAGGAGE_CONVERSATION_ID)
    return str(value) if value is not None else None
