"""SQLAlchemy ORM models for the conversation memory store.

Tables are created by ``init_db`` on startup; the store is a single
SQLite file.
"""

from typing import Any, Literal

from sqlalchemy import JSON, DateTime, Index, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from typing_extensions import NotRequired, TypedDict


class Base(DeclarativeBase):
    """Shared declarative base."""


# ---------------------------------------------------------------------------
# Role constants & type
# ---------------------------------------------------------------------------

ROLE_SYSTEM: Literal["system"] = "system"
ROLE_HUMAN: Literal["human"] = "human"
ROLE_AI: Literal["ai"] = "ai"
ROLE_TOOL: Literal["tool"] = "tool"

Role = Literal["system", "human", "ai", "tool"]


# ---------------------------------------------------------------------------
# Extra JSON key constants and shapes
# ---------------------------------------------------------------------------

EXTRA_TOOL_CALLS = "tool_calls"
EXTRA_TOOL_NAME = "tool_name"
EXTRA_TOOL_CALL_ID = "tool_call_id"
EXTRA_TOOL_STATUS = "status"


class StoredToolCall(TypedDict):
    """A single tool call as persisted in the ``extra`` column."""

    name: str
    args: dict[str, Any]
    id: str | None


class ToolExtra(TypedDict):
    """``extra`` shape for tool-result messages."""

    tool_name: str
    tool_call_id: NotRequired[str]
    status: NotRequired[str]


# ---------------------------------------------------------------------------
# Chat messages table
# ---------------------------------------------------------------------------


class ChatMessage(Base):
    """A single message in a conversation.

    Human, AI and tool messages are stored as equal rows.  Messages from
    one agent turn share a ``trace_id``; insertion order (``id``) is the
    conversation order.
    """

    __tablename__ = "chat_messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    conversation_id: Mapped[str] = mapped_column(String, nullable=False)
    trace_id: Mapped[str] = mapped_column(String, nullable=False)
    message_id: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    content: Mapped[str | None] = mapped_column(String, nullable=True)
    extra: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[Any] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("ix_chat_messages_conversation_id_id", "conversation_id", "id"),
        Index("ix_chat_messages_trace_id", "trace_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<ChatMessage(id={self.id}, conversation_id={self.conversation_id!r}, "
            f"trace_id={self.trace_id!r}, role={self.role!r})>"
        )
