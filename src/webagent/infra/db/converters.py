"""BaseMessage converters for the memory store.

- DB row      -> BaseMessage  (history read)
- BaseMessage -> ChatMessage  (history write)
"""

from typing import Any

from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    HumanMessage,
    ToolMessage,
)

from webagent.infra.id_utils import generate_id

from .constants import (
    DEFAULT_TOOL_NAME,
    EXTRA_TOOL_CALL_ID,
    EXTRA_TOOL_CALLS,
    EXTRA_TOOL_NAME,
    EXTRA_TOOL_STATUS,
    ID_PREFIX_MESSAGE,
    ROLE_AI,
    ROLE_HUMAN,
    ROLE_SYSTEM,
    ROLE_TOOL,
)
from .models import ChatMessage, StoredToolCall

_VALID_ROLES = (ROLE_SYSTEM, ROLE_HUMAN, ROLE_AI, ROLE_TOOL)


# ------------------------------------------------------------------
# Row -> BaseMessage
# ------------------------------------------------------------------


def row_to_message(row: Any) -> BaseMessage | None:
    """Convert a ``(message_id, role, content, extra)`` row to a message.

    Returns ``None`` for roles that are not replayed (system).
    """
    message_id: str = row[0]
    role: str = row[1]
    content: str = row[2] or ""
    extra: dict[str, Any] = row[3] or {}

    if role == ROLE_HUMAN:
        return HumanMessage(content=content, id=message_id)
    if role == ROLE_AI:
        tool_calls = [
            StoredToolCall(name=tc["name"], args=tc["args"], id=tc["id"])
            for tc in extra.get(EXTRA_TOOL_CALLS, [])
        ]
        return AIMessage(content=content, id=message_id, tool_calls=tool_calls)
    if role == ROLE_TOOL:
        return ToolMessage(
            content=content,
            id=message_id,
            tool_call_id=extra.get(EXTRA_TOOL_CALL_ID, ""),
            name=extra.get(EXTRA_TOOL_NAME, DEFAULT_TOOL_NAME),
            status=extra.get(EXTRA_TOOL_STATUS, "success"),
        )
    return None


# ------------------------------------------------------------------
# BaseMessage -> Row
# ------------------------------------------------------------------


def message_to_extra(msg: BaseMessage) -> dict[str, Any] | None:
    """Build the ``extra`` JSON dict from a BaseMessage."""
    extra: dict[str, Any] = {}
    if isinstance(msg, AIMessage) and msg.tool_calls:
        extra[EXTRA_TOOL_CALLS] = [
            StoredToolCall(
                name=tc["name"],
                args=tc.get("args", {}),
                id=tc.get("id"),
            )
            for tc in msg.tool_calls
        ]
    if isinstance(msg, ToolMessage):
        extra[EXTRA_TOOL_NAME] = msg.name or DEFAULT_TOOL_NAME
        if msg.tool_call_id:
            extra[EXTRA_TOOL_CALL_ID] = msg.tool_call_id
        if msg.status != "success":
            extra[EXTRA_TOOL_STATUS] = msg.status
    return extra or None


def message_to_chat_message(
    msg: BaseMessage,
    conversation_id: str,
    trace_id: str,
) -> ChatMessage:
    """Build a ChatMessage ORM instance from a BaseMessage and its scope."""
    return ChatMessage(
        conversation_id=conversation_id,
        trace_id=trace_id,
        message_id=msg.id or generate_id(ID_PREFIX_MESSAGE),
        role=msg.type if msg.type in _VALID_ROLES else ROLE_HUMAN,
        content=msg.content if isinstance(msg.content, str) else None,
        extra=message_to_extra(msg),
    )
