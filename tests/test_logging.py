"""Tests for the logging bootstrap and per-conversation log context."""

import io
import json
import logging

import pytest

from webagent.configs.system import LoggingConfig
from webagent.infra.logging import setup_logging
from webagent.infra.telemetry import conversation_context, get_current_conversation_id


@pytest.fixture
def captured_root():
    """Run ``setup_logging`` against a throwaway stream; restore root after."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level

    def _setup(config: LoggingConfig) -> io.StringIO:
        setup_logging(config)
        stream = io.StringIO()
        root.handlers[0].setStream(stream)
        return stream

    yield _setup
    root.handlers = saved_handlers
    root.setLevel(saved_level)


class TestConversationContext:
    def test_scoped_to_block(self):
        assert get_current_conversation_id() is None
        with conversation_context("conv_abc"):
            assert get_current_conversation_id() == "conv_abc"
            with conversation_context("conv_inner"):
                assert get_current_conversation_id() == "conv_inner"
            assert get_current_conversation_id() == "conv_abc"
        assert get_current_conversation_id() is None


class TestSetupLogging:
    def test_json_lines_carry_conversation_id(self, captured_root):
        stream = captured_root(LoggingConfig(level="INFO", json_output=True))
        log = logging.getLogger("webagent.test")

        with conversation_context("conv_123"):
            log.info("inside turn")
        log.info("outside turn")

        inside, outside = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert inside["message"] == "inside turn"
        assert inside["conversation_id"] == "conv_123"
        assert inside["level"] == "INFO"
        assert inside["logger"] == "webagent.test"
        assert outside["conversation_id"] == ""

    def test_dev_output_is_plain_text(self, captured_root):
        stream = captured_root(LoggingConfig(level="DEBUG", json_output=False))

        with conversation_context("conv_dev"):
            logging.getLogger("webagent.test").debug("hello")

        line = stream.getvalue().strip()
        assert "[conv_dev]" in line
        assert line.endswith("hello")

    def test_noisy_loggers_quieted(self, captured_root):
        captured_root(LoggingConfig(level="DEBUG"))
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("aiosqlite").level == logging.WARNING
