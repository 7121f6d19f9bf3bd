"""Shared constants for the chat_messages persistence layer."""

from .models import (
    EXTRA_TOOL_CALL_ID,
    EXTRA_TOOL_CALLS,
    EXTRA_TOOL_NAME,
    EXTRA_TOOL_STATUS,
    ROLE_AI,
    ROLE_HUMAN,
    ROLE_SYSTEM,
    ROLE_TOOL,
)

__all__ = [
    "ROLE_AI",
    "ROLE_HUMAN",
    "ROLE_SYSTEM",
    "ROLE_TOOL",
    "EXTRA_TOOL_CALL_ID",
    "EXTRA_TOOL_CALLS",
    "EXTRA_TOOL_NAME",
    "EXTRA_TOOL_STATUS",
    "DEFAULT_MAX_MESSAGES",
    "DEFAULT_TOOL_NAME",
    "ID_PREFIX_MESSAGE",
]

DEFAULT_MAX_MESSAGES = 100
DEFAULT_TOOL_NAME = "unknown"
ID_PREFIX_MESSAGE = "msg"
