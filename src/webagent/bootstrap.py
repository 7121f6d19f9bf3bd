"""Composition root: configuration -> tool registry -> memory -> agent.

Usage::

    async with open_web_agent() as agent:
        reply = await agent.ainvoke("Latest news on quantum computing?")
        followup = await agent.ainvoke("Summarize the top result", reply.conversation_id)
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import partial

from langchain_core.language_models import BaseChatModel

from webagent.configs.config import AppConfig, get_app_config
from webagent.core.agent import WebAgent, assemble_web_agent
from webagent.core.llm import get_llm
from webagent.core.tools.registry import ClientFactory, build_tool_registry_from_config
from webagent.infra.brightdata import create_brightdata_client
from webagent.infra.db import (
    create_engine,
    create_session_factory,
    get_chat_message_history_factory,
    init_db,
)
from webagent.infra.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_web_agent(
    config: AppConfig | None = None,
    *,
    llm: BaseChatModel | None = None,
    client_factory: ClientFactory | None = None,
    configure_logging: bool = True,
) -> AsyncIterator[WebAgent]:
    """Build the agent and release its resources on exit.

    The tool registry (and its provider client) and the memory engine
    live exactly as long as the context.  *llm* and *client_factory*
    replace the configured model and provider client.
    """
    if config is None:
        config = get_app_config()
    if configure_logging:
        setup_logging(config.logging)
    if client_factory is None:
        client_factory = partial(create_brightdata_client, config=config.brightdata)

    registry = await build_tool_registry_from_config(
        config.tools_config(), client_factory=client_factory
    )
    engine = None
    try:
        engine = create_engine(config.memory)
        await init_db(engine)
        history_factory = get_chat_message_history_factory(
            create_session_factory(engine),
            max_messages=config.memory.max_messages,
        )
        agent = assemble_web_agent(
            registry,
            llm if llm is not None else get_llm(config.llm),
            history_factory,
            name=config.agent.name,
            instructions=config.agent.instructions,
        )
        logger.info("%s ready with tools: %s", agent.name, ", ".join(agent.tools))
        yield agent
    finally:
        await registry.aclose()
        if engine is not None:
            await engine.dispose()
