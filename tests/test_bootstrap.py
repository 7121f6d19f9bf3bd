"""Tests for the composition root."""

from unittest.mock import MagicMock

import pytest
from langchain_core.language_models.fake_chat_models import GenericFakeChatModel
from langchain_core.messages import AIMessage

from webagent.bootstrap import open_web_agent
from webagent.configs.config import AppConfig
from webagent.configs.system import BrightDataConfig, MemoryConfig
from webagent.core.errors import (
    CapabilityUnavailableError,
    MissingToolsError,
    ToolConfigurationError,
)
from webagent.core.tools import ToolId

from .conftest import make_fake_client


class _ScriptedModel(GenericFakeChatModel):
    def bind_tools(self, tools, **kwargs):
        return self


def _config(tmp_path, **brightdata) -> AppConfig:
    return AppConfig.model_construct(
        brightdata=BrightDataConfig(api_key="secret", **brightdata),
        memory=MemoryConfig(
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'bootstrap.db'}"
        ),
    )


@pytest.mark.asyncio
async def test_agent_ready_and_client_closed(tmp_path):
    client = make_fake_client()
    factory = MagicMock(return_value=client)
    llm = _ScriptedModel(messages=iter([AIMessage(content="hi there")]))

    async with open_web_agent(
        _config(tmp_path), llm=llm, client_factory=factory, configure_logging=False
    ) as agent:
        assert list(agent.tools) == list(ToolId)
        reply = await agent.ainvoke("hello")
        assert reply.content == "hi there"

    factory.assert_called_once_with("secret")
    client.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_exclusion_fails_assembly_and_releases_client(tmp_path):
    client = make_fake_client()
    config = _config(tmp_path, exclude_tools=["scrape"])

    with pytest.raises(MissingToolsError, match=r"\(scrape\)"):
        async with open_web_agent(
            config,
            llm=_ScriptedModel(messages=iter([])),
            client_factory=MagicMock(return_value=client),
            configure_logging=False,
        ):
            pass

    client.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_missing_key_fails_before_client(tmp_path):
    factory = MagicMock()
    config = _config(tmp_path)
    config.brightdata.api_key = "  "

    with pytest.raises(ToolConfigurationError):
        async with open_web_agent(config, client_factory=factory, configure_logging=False):
            pass

    factory.assert_not_called()


@pytest.mark.asyncio
async def test_unavailable_dataset_releases_client(tmp_path):
    client = make_fake_client(amazon=False)

    with pytest.raises(CapabilityUnavailableError, match="Amazon"):
        async with open_web_agent(
            _config(tmp_path),
            llm=_ScriptedModel(messages=iter([])),
            client_factory=MagicMock(return_value=client),
            configure_logging=False,
        ):
            pass

    client.aclose.assert_awaited_once()
