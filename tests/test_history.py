"""Tests for the SQLite-backed chat message history."""

from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage

from webagent.configs.system import MemoryConfig
from webagent.infra.db import (
    create_engine,
    create_session_factory,
    get_chat_message_history_factory,
    SqliteChatMessageHistory,
    init_db,
)
from webagent.infra.db.converters import message_to_chat_message, row_to_message


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = create_engine(
        MemoryConfig(database_url=f"sqlite+aiosqlite:///{tmp_path / 'memory.db'}")
    )
    await init_db(engine)
    yield create_session_factory(engine)
    await engine.dispose()


def _tool_turn() -> list:
    return [
        HumanMessage(content="price of the widget?", id="msg_h1"),
        AIMessage(
            content="",
            id="run_ai1",
            tool_calls=[
                {"name": "amazonProduct", "args": {"url": "https://a.co/dp/B0"}, "id": "call_1"}
            ],
        ),
        ToolMessage(content='{"price": 9.99}', tool_call_id="call_1", name="amazonProduct", id="msg_t1"),
        AIMessage(content="It costs $9.99.", id="run_ai2"),
    ]


class TestSqliteChatMessageHistory:
    @pytest.mark.asyncio
    async def test_round_trip_in_order(self, session_factory):
        factory = get_chat_message_history_factory(session_factory)
        await factory("conv_1", "trace_1").aadd_messages(_tool_turn())

        loaded = await factory("conv_1").aget_messages()

        assert [type(m) for m in loaded] == [HumanMessage, AIMessage, ToolMessage, AIMessage]
        assert loaded[1].tool_calls[0]["name"] == "amazonProduct"
        assert loaded[1].tool_calls[0]["args"] == {"url": "https://a.co/dp/B0"}
        assert loaded[2].tool_call_id == "call_1"
        assert loaded[2].name == "amazonProduct"
        assert loaded[3].content == "It costs $9.99."

    @pytest.mark.asyncio
    async def test_conversations_isolated(self, session_factory):
        factory = get_chat_message_history_factory(session_factory)
        await factory("conv_a", "t").aadd_messages([HumanMessage(content="a", id="m_a")])
        await factory("conv_b", "t").aadd_messages([HumanMessage(content="b", id="m_b")])

        loaded = await factory("conv_a").aget_messages()
        assert [m.content for m in loaded] == ["a"]

    @pytest.mark.asyncio
    async def test_window_keeps_most_recent(self, session_factory):
        writer = get_chat_message_history_factory(session_factory)("conv", "t")
        await writer.aadd_messages(
            [HumanMessage(content=str(i), id=f"m_{i}") for i in range(5)]
        )
        reader = get_chat_message_history_factory(session_factory, max_messages=2)("conv")
        assert [m.content for m in await reader.aget_messages()] == ["3", "4"]

    @pytest.mark.asyncio
    async def test_window_never_starts_mid_turn(self, session_factory):
        await get_chat_message_history_factory(session_factory)(
            "conv", "t"
        ).aadd_messages(_tool_turn())
        reader = get_chat_message_history_factory(session_factory, max_messages=2)("conv")

        loaded = await reader.aget_messages()

        # the window held [ToolMessage, AIMessage]; neither starts a turn
        assert loaded == []

    @pytest.mark.asyncio
    async def test_window_resumes_at_next_human_message(self, session_factory):
        writer = get_chat_message_history_factory(session_factory)("conv", "t")
        await writer.aadd_messages(_tool_turn())
        await writer.aadd_messages(
            [
                HumanMessage(content="and shipping?", id="msg_h2"),
                AIMessage(content="Free.", id="run_ai3"),
            ]
        )
        reader = get_chat_message_history_factory(session_factory, max_messages=4)("conv")

        loaded = await reader.aget_messages()

        assert [m.content for m in loaded] == ["and shipping?", "Free."]
        assert not isinstance(loaded[0], ToolMessage)

    @pytest.mark.asyncio
    async def test_orphaned_tool_call_stripped(self, session_factory):
        factory = get_chat_message_history_factory(session_factory)
        await factory("conv", "t").aadd_messages(_tool_turn()[:2])
        loaded = await factory("conv").aget_messages()
        assert [type(m) for m in loaded] == [HumanMessage]

    @pytest.mark.asyncio
    async def test_write_requires_trace_id(self, session_factory):
        history = get_chat_message_history_factory(session_factory)("conv")
        with pytest.raises(ValueError, match="trace_id"):
            await history.aadd_messages([HumanMessage(content="x")])

    @pytest.mark.asyncio
    async def test_aclear(self, session_factory):
        history = get_chat_message_history_factory(session_factory)("conv", "t")
        await history.aadd_messages(_tool_turn())
        await history.aclear()
        assert await history.aget_messages() == []

    def test_sync_clear_not_supported(self):
        history = SqliteChatMessageHistory(MagicMock(), "conv")
        with pytest.raises(NotImplementedError):
            history.clear()


class TestConverters:
    def test_system_rows_not_replayed(self):
        assert row_to_message(("m", "system", "be nice", None)) is None

    def test_generated_id_when_missing(self):
        row = message_to_chat_message(HumanMessage(content="hi"), "conv", "trace")
        assert row.message_id.startswith("msg_")
        assert row.role == "human"
        assert row.extra is None

    def test_system_message_role_kept(self):
        row = message_to_chat_message(SystemMessage(content="sys", id="s1"), "c", "t")
        assert row.role == "system"
