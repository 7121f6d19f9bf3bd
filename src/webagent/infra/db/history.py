"""LangChain BaseChatMessageHistory backed by the SQLite memory store.

Provides load (``aget_messages``), write (``aadd_messages``) and clear
(``aclear``) over the ``chat_messages`` table.  The agent loads history
before each turn and appends the turn's new messages afterwards.
"""

import logging
from collections.abc import Callable, Sequence

from langchain_core.chat_history import BaseChatMessageHistory
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from webagent.infra.telemetry import (
    ATTR_HISTORY_CONVERSATION_ID,
    ATTR_HISTORY_MESSAGE_COUNT,
    SPAN_HISTORY_LOAD,
    tracer,
)

from .constants import DEFAULT_MAX_MESSAGES, ROLE_SYSTEM
from .converters import message_to_chat_message, row_to_message
from .models import ChatMessage

logger = logging.getLogger(__name__)

ChatMessageHistoryFactory = Callable[
    [str, str | None],
    BaseChatMessageHistory,
]


class SqliteChatMessageHistory(BaseChatMessageHistory):
    """SQLite-backed chat message history (LangChain compatible).

    Scoped to a conversation_id; trace_id is required for writes.
    max_messages limits the read window.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        conversation_id: str,
        trace_id: str | None = None,
        max_messages: int | None = None,
    ) -> None:
        super().__init__()
        self._session_factory = session_factory
        self.conversation_id = conversation_id
        self.trace_id = trace_id
        self._max_messages = max_messages

    async def aget_messages(self) -> list[BaseMessage]:
        """Load recent messages for this conversation, oldest-first."""
        with tracer.start_as_current_span(SPAN_HISTORY_LOAD) as span:
            span.set_attribute(ATTR_HISTORY_CONVERSATION_ID, self.conversation_id)
            lim = self._max_messages or DEFAULT_MAX_MESSAGES
            stmt = (
                select(
                    ChatMessage.message_id,
                    ChatMessage.role,
                    ChatMessage.content,
                    ChatMessage.extra,
                )
                .where(
                    ChatMessage.conversation_id == self.conversation_id,
                    ChatMessage.role != ROLE_SYSTEM,
                )
                .order_by(ChatMessage.id.desc())
                .limit(lim)
            )
            try:
                async with self._session_factory() as session:
                    rows = (await session.execute(stmt)).all()
            except Exception:
                logger.warning(
                    "Failed to load conversation history for %s",
                    self.conversation_id,
                    exc_info=True,
                )
                return []
            messages = [
                m for row in reversed(rows) if (m := row_to_message(row)) is not None
            ]
            messages = self._drop_leading_partial_turn(messages)
            messages = self._strip_orphaned_tool_calls(messages)
            span.set_attribute(ATTR_HISTORY_MESSAGE_COUNT, len(messages))
            logger.debug(
                "Loaded %d messages for conversation %s",
                len(messages),
                self.conversation_id,
            )
            return messages

    @staticmethod
    def _drop_leading_partial_turn(
        messages: list[BaseMessage],
    ) -> list[BaseMessage]:
        """Start the window at a HumanMessage.

        A window cut mid-turn can begin with ToolMessages whose
        tool-call AIMessage fell outside it; the model API rejects those.
        """
        for index, message in enumerate(messages):
            if isinstance(message, HumanMessage):
                if index:
                    logger.debug(
                        "Dropping %d leading message(s) of a truncated turn", index
                    )
                return messages[index:]
        return []

    @staticmethod
    def _strip_orphaned_tool_calls(
        messages: list[BaseMessage],
    ) -> list[BaseMessage]:
        """Strip trailing AIMessages whose tool_calls lack ToolMessage results.

        A turn that failed mid-tool-loop leaves an AIMessage carrying
        ``tool_calls`` with no following ``ToolMessage``; the model API
        rejects such a history.
        """
        while (
            messages and isinstance(messages[-1], AIMessage) and messages[-1].tool_calls
        ):
            logger.warning(
                "Stripping orphaned tool-call AIMessage (id=%s) from history",
                messages[-1].id,
            )
            messages.pop()
        return messages

    async def aadd_messages(self, messages: Sequence[BaseMessage]) -> None:
        """Append messages in order; requires trace_id. Logs on error."""
        if not self.trace_id:
            raise ValueError("trace_id is required for aadd_messages")
        rows = [
            message_to_chat_message(msg, self.conversation_id, self.trace_id)
            for msg in messages
        ]
        if not rows:
            return
        try:
            async with self._session_factory() as session:
                session.add_all(rows)
                await session.commit()
        except Exception:
            logger.warning(
                "Failed to record %d message(s) for trace %s",
                len(rows),
                self.trace_id,
                exc_info=True,
            )

    def clear(self) -> None:
        """Sync clear is not supported; use aclear() instead."""
        raise NotImplementedError("Use aclear() for async history clearing")

    async def aclear(self) -> None:
        """Remove all messages for this conversation."""
        try:
            async with self._session_factory() as session:
                await session.execute(
                    delete(ChatMessage).where(
                        ChatMessage.conversation_id == self.conversation_id
                    )
                )
                await session.commit()
        except Exception:
            logger.warning(
                "Failed to clear history for %s",
                self.conversation_id,
                exc_info=True,
            )
