"""Conversation memory store: engine, ORM model, converters, history."""

from .engine import (
    create_engine,
    create_session_factory,
    get_chat_message_history_factory,
    init_db,
)
from .history import ChatMessageHistoryFactory, SqliteChatMessageHistory
from .models import Base, ChatMessage

__all__ = [
    "Base",
    "ChatMessage",
    "ChatMessageHistoryFactory",
    "SqliteChatMessageHistory",
    "create_engine",
    "create_session_factory",
    "get_chat_message_history_factory",
    "init_db",
]
