"""Async SQLAlchemy engine, session factory and history factory.

The memory store is an embedded SQLite file reached through
``aiosqlite``.  ``init_db`` creates the tables; nothing else here
touches the database.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from webagent.configs.system import MemoryConfig

from .history import ChatMessageHistoryFactory, SqliteChatMessageHistory
from .models import Base


def create_engine(config: MemoryConfig) -> AsyncEngine:
    """Create the async engine for the configured database URL."""
    return create_async_engine(config.database_url)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def init_db(engine: AsyncEngine) -> None:
    """Create any missing tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def get_chat_message_history_factory(
    session_factory: async_sessionmaker[AsyncSession],
    max_messages: int | None = None,
) -> ChatMessageHistoryFactory:
    """Return a factory that creates a history per conversation/trace."""

    def factory(
        conversation_id: str,
        trace_id: str | None = None,
    ) -> SqliteChatMessageHistory:
        return SqliteChatMessageHistory(
            session_factory,
            conversation_id,
            trace_id=trace_id,
            max_messages=max_messages,
        )

    return factory
