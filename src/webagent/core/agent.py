"""Agent assembly: binds the Bright Data tools, the model and memory.

``assemble_web_agent`` refuses a registry that lacks any expected tool;
the agent's instructions assume the full tool surface.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from langchain.agents import create_agent
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_core.tools import BaseTool

from webagent.infra.db.history import ChatMessageHistoryFactory
from webagent.infra.id_utils import generate_id
from webagent.infra.telemetry import (
    ATTR_AGENT_CONVERSATION_ID,
    SPAN_AGENT_TURN,
    conversation_context,
    get_current_trace_id,
    tracer,
)

from .errors import MissingToolsError
from .tools.model import ToolId

logger = logging.getLogger(__name__)

REQUIRED_TOOLS: tuple[ToolId, ...] = (
    ToolId.SEARCH,
    ToolId.SCRAPE,
    ToolId.AMAZON_PRODUCT,
    ToolId.LINKEDIN_COLLECT_PROFILES,
)

LANGGRAPH_INPUT_KEY_MESSAGES = "messages"
ID_PREFIX_CONVERSATION = "conv"
ID_PREFIX_TRACE = "trace"
ID_PREFIX_MESSAGE = "msg"


@dataclass(frozen=True)
class AgentReply:
    """Result of one agent turn."""

    conversation_id: str
    content: str
    messages: list[BaseMessage] = field(default_factory=list)


def _message_text(message: BaseMessage) -> str:
    if isinstance(message.content, str):
        return message.content
    parts: list[str] = []
    for part in message.content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class WebAgent:
    """Conversational web research agent with persistent memory."""

    def __init__(
        self,
        *,
        name: str,
        instructions: str,
        llm: BaseChatModel,
        tools: Mapping[ToolId, BaseTool],
        history_factory: ChatMessageHistoryFactory,
    ) -> None:
        self.name = name
        self.instructions = instructions
        self.tools = dict(tools)
        self._history_factory = history_factory
        self._graph: Any = create_agent(
            model=llm,
            tools=list(self.tools.values()),
            system_prompt=instructions,
        )

    async def ainvoke(
        self, query: str, conversation_id: str | None = None
    ) -> AgentReply:
        """Answer *query* within a conversation, persisting the turn.

        A new conversation id is generated when none is supplied.  Tool
        and model errors propagate; nothing is persisted for a failed
        turn.
        """
        conversation_id = conversation_id or generate_id(ID_PREFIX_CONVERSATION)
        trace_id = get_current_trace_id() or generate_id(ID_PREFIX_TRACE)
        history = self._history_factory(conversation_id, trace_id)

        with (
            conversation_context(conversation_id),
            tracer.start_as_current_span(SPAN_AGENT_TURN) as span,
        ):
            span.set_attribute(ATTR_AGENT_CONVERSATION_ID, conversation_id)
            past = await history.aget_messages()
            human = HumanMessage(content=query, id=generate_id(ID_PREFIX_MESSAGE))
            result = await self._graph.ainvoke(
                {LANGGRAPH_INPUT_KEY_MESSAGES: [*past, human]}
            )
            new_messages: list[BaseMessage] = list(
                result[LANGGRAPH_INPUT_KEY_MESSAGES][len(past):]
            )
            await history.aadd_messages(new_messages)
            logger.info("Agent turn done: messages=%d", len(new_messages))

        answers = [m for m in new_messages if isinstance(m, AIMessage)]
        content = _message_text(answers[-1]) if answers else ""
        return AgentReply(
            conversation_id=conversation_id,
            content=content,
            messages=new_messages,
        )


def find_missing_tools(
    tools: Mapping[ToolId, BaseTool],
    required: Sequence[ToolId] = REQUIRED_TOOLS,
) -> list[str]:
    """Return every required identifier absent from *tools*, in order."""
    return [tool_id.value for tool_id in required if tools.get(tool_id) is None]


def assemble_web_agent(
    tools: Mapping[ToolId, BaseTool],
    llm: BaseChatModel,
    history_factory: ChatMessageHistoryFactory,
    *,
    name: str = "Web Agent",
    instructions: str,
) -> WebAgent:
    """Check the registry is complete, then bind it into a ``WebAgent``.

    Raises ``MissingToolsError`` naming every missing tool.
    """
    missing = find_missing_tools(tools)
    if missing:
        raise MissingToolsError(missing)
    return WebAgent(
        name=name,
        instructions=instructions,
        llm=llm,
        tools={tool_id: tools[tool_id] for tool_id in REQUIRED_TOOLS},
        history_factory=history_factory,
    )
