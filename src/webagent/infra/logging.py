"""Structured logging bootstrap.

Configures the root logger so every ``logging.getLogger(__name__)`` call
emits either:

* **JSON lines** (``json_output=True``, default) - machine-parseable.
* **Human-readable** (``json_output=False``) - timestamp-prefixed lines
  for local development.

The current OpenTelemetry ``trace_id`` / ``span_id`` and the
``conversation_id`` of the enclosing agent turn are injected into every
record, so tool-call and history logs can be grouped per conversation.
"""

from __future__ import annotations

import logging
import sys

from opentelemetry import trace

from webagent.configs.system import LoggingConfig
from webagent.infra.telemetry import get_current_conversation_id


class _TraceContextFilter(logging.Filter):
    """Injects OTEL trace/span IDs and the agent conversation id."""

    def filter(self, record: logging.LogRecord) -> bool:
        span = trace.get_current_span()
        ctx = span.get_span_context()
        if ctx and ctx.is_valid:
            record.trace_id = format(ctx.trace_id, "032x")  # type: ignore[attr-defined]
            record.span_id = format(ctx.span_id, "016x")  # type: ignore[attr-defined]
        else:
            record.trace_id = ""  # type: ignore[attr-defined]
            record.span_id = ""  # type: ignore[attr-defined]
        record.conversation_id = get_current_conversation_id() or ""  # type: ignore[attr-defined]
        return True


_DEV_FORMAT = "%(levelname)-8s %(asctime)s %(name)s [%(conversation_id)s]  %(message)s"
_DEV_DATEFMT = "%H:%M:%S"


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure the root logger (call once at startup)."""
    if config is None:
        config = LoggingConfig()

    root = logging.getLogger()
    root.setLevel(config.level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(_TraceContextFilter())

    formatter: logging.Formatter
    if config.json_output:
        from pythonjsonlogger.json import JsonFormatter

        formatter = JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s "
            "%(trace_id)s %(span_id)s %(conversation_id)s",
            rename_fields={
                "asctime": "timestamp",
                "levelname": "level",
                "name": "logger",
            },
            defaults={"trace_id": "", "span_id": "", "conversation_id": ""},
        )
    else:
        formatter = logging.Formatter(fmt=_DEV_FORMAT, datefmt=_DEV_DATEFMT)

    handler.setFormatter(formatter)
    root.handlers = [handler]

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
