"""Tool registry: turns a credential + exclusion set into tool instances."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping

from langchain_core.tools import BaseTool

from webagent.configs.tools import ToolsConfig
from webagent.core.errors import ToolConfigurationError
from webagent.infra.brightdata import BrightDataClient, create_brightdata_client

from .brightdata_tools import (
    AmazonProductTool,
    BrightDataTool,
    LinkedinCollectProfilesTool,
    ScrapeTool,
    SearchTool,
)
from .model import ToolId

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], BrightDataClient]


class ToolRegistry(Mapping[ToolId, BaseTool]):
    """Read-only mapping of ``ToolId`` to the tools built for one config.

    Excluded tools are absent, not present-but-disabled.  The registry
    owns the provider client its tools share.
    """

    _known_tools: dict[ToolId, type[BrightDataTool]] = {
        cls.tool_id: cls
        for cls in [SearchTool, ScrapeTool, AmazonProductTool, LinkedinCollectProfilesTool]
    }

    def __init__(
        self,
        client: BrightDataClient,
        exclude_tools: Iterable[ToolId] = (),
    ) -> None:
        excluded = frozenset(ToolId(t) for t in exclude_tools)
        self.client = client
        self._tools: dict[ToolId, BaseTool] = {}

        for tool_id in ToolId:
            if tool_id in excluded:
                logger.info("Tool %s excluded by configuration", tool_id)
                continue
            tool_cls = self._known_tools.get(tool_id)
            if tool_cls is None:
                raise NotImplementedError(f"Tool '{tool_id}' is not supported.")
            self._tools[tool_id] = tool_cls.from_client(client)

    def __getitem__(self, tool_id: ToolId) -> BaseTool:
        return self._tools[tool_id]

    def __iter__(self) -> Iterator[ToolId]:
        return iter(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def get_tools(self) -> list[BaseTool]:
        """Get loaded tools in ``ToolId`` order."""
        return list(self._tools.values())

    async def aclose(self) -> None:
        """Close the shared provider client."""
        await self.client.aclose()


async def build_tool_registry(
    api_key: str,
    exclude_tools: Iterable[ToolId | str] = (),
    *,
    client_factory: ClientFactory = create_brightdata_client,
) -> ToolRegistry:
    """Build the registry for *api_key*, leaving out *exclude_tools*.

    Raises ``ToolConfigurationError`` for a blank key before any client
    is constructed.  Errors from tool construction propagate after the
    client is closed.
    """
    api_key = (api_key or "").strip()
    if not api_key:
        raise ToolConfigurationError(
            "Bright Data API key is required to initialize tools."
        )
    excluded = [ToolId(t) for t in exclude_tools]
    client = client_factory(api_key)
    try:
        registry = ToolRegistry(client, excluded)
    except BaseException:
        await client.aclose()
        raise
    logger.info("Tool registry built: %s", ", ".join(registry) or "(empty)")
    return registry


async def build_tool_registry_from_config(
    config: ToolsConfig,
    *,
    client_factory: ClientFactory = create_brightdata_client,
) -> ToolRegistry:
    """``build_tool_registry`` for a ``ToolsConfig``."""
    return await build_tool_registry(
        config.api_key, config.exclude_tools, client_factory=client_factory
    )
