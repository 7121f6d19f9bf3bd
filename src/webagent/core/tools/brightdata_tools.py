"""Bright Data tools exposed to the agent.

Each tool wraps one provider operation on a shared ``BrightDataClient``:
it validates input through its ``args_schema``, maps the arguments to
the provider call, normalizes the result to text, and wraps provider
failures in ``ProviderCallError``.

Dataset-backed tools resolve their dataset once, at construction time;
building one on a client without that dataset raises
``CapabilityUnavailableError``.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from typing import Any, ClassVar, Self

from langchain_core.tools import BaseTool
from pydantic import BaseModel, PrivateAttr

from webagent.core.errors import CapabilityUnavailableError, ProviderCallError
from webagent.infra.brightdata import AmazonDataset, BrightDataClient, LinkedinDataset
from webagent.infra.telemetry import (
    ATTR_TOOL_ERROR,
    ATTR_TOOL_ID,
    ATTR_TOOL_INPUT,
    SPAN_TOOL_CALL,
    tracer,
)

from .model import ToolId, normalize_result
from .schemas import (
    AmazonProductInput,
    LinkedinProfilesInput,
    ScrapeInput,
    SearchInput,
)

logger = logging.getLogger(__name__)

_RESPONSE_FORMAT_RAW = "raw"
_DATA_FORMAT_MARKDOWN = "markdown"
_DATASET_FORMAT_JSON = "json"


class BrightDataTool(BaseTool):
    """Base class: one provider operation on an injected client."""

    tool_id: ClassVar[ToolId]
    operation: ClassVar[str]

    _client: BrightDataClient = PrivateAttr()

    def __init__(self, *, client: BrightDataClient, **data: Any) -> None:
        super().__init__(**data)
        self._client = client

    # ---- subclass hooks --------------------------------------------------

    @abstractmethod
    def _key_input(self, request: Any) -> str:
        """The input that identifies this request in errors and spans."""

    @abstractmethod
    async def _call(self, request: Any) -> Any:
        """Perform the provider call for an already-validated request."""

    # ---- LangChain interface ---------------------------------------------

    def _run(self, *args: Any, **kwargs: Any) -> str:
        raise NotImplementedError(f"{self.name} is async only; use ainvoke()")

    async def _arun(self, **kwargs: Any) -> str:
        """Validate (applying defaults), call the provider, normalize."""
        schema: type[BaseModel] = self.args_schema  # type: ignore[assignment]
        request = schema.model_validate(kwargs)
        key = self._key_input(request)
        with tracer.start_as_current_span(SPAN_TOOL_CALL) as span:
            span.set_attribute(ATTR_TOOL_ID, self.name)
            span.set_attribute(ATTR_TOOL_INPUT, key)
            logger.debug("Tool call: %s %s", self.name, key)
            try:
                result = await self._call(request)
            except Exception as exc:
                span.set_attribute(ATTR_TOOL_ERROR, type(exc).__name__)
                logger.warning("Tool %s failed for %s: %s", self.name, key, exc)
                raise ProviderCallError(self.name, self.operation, key, exc) from exc
        return normalize_result(result)

    # ---- Factory ---------------------------------------------------------

    @classmethod
    def from_client(cls, client: BrightDataClient) -> Self:
        """Build this tool bound to *client*."""
        return cls(client=client)


def _lower(country_code: str | None) -> str | None:
    return country_code.lower() if country_code else None


class SearchTool(BrightDataTool):
    tool_id: ClassVar[ToolId] = ToolId.SEARCH
    operation: ClassVar[str] = "search"

    name: str = ToolId.SEARCH.value
    description: str = (
        "Search the web using Google, Bing, or Yandex. "
        "Returns search results with anti-bot protection bypass."
    )
    args_schema: type[BaseModel] = SearchInput

    def _key_input(self, request: SearchInput) -> str:
        return request.query

    async def _call(self, request: SearchInput) -> Any:
        # result_format picks the content format; transport is always raw
        return await self._client.search(
            request.query,
            search_engine=request.engine,
            data_format=request.result_format,
            response_format=_RESPONSE_FORMAT_RAW,
            country=_lower(request.country_code),
        )


class ScrapeTool(BrightDataTool):
    tool_id: ClassVar[ToolId] = ToolId.SCRAPE
    operation: ClassVar[str] = "scrape"

    name: str = ToolId.SCRAPE.value
    description: str = (
        "Scrape website content and return it in clean markdown format. "
        "Bypasses anti-bot protection and CAPTCHAs."
    )
    args_schema: type[BaseModel] = ScrapeInput

    def _key_input(self, request: ScrapeInput) -> str:
        return request.url

    async def _call(self, request: ScrapeInput) -> Any:
        return await self._client.scrape(
            request.url,
            data_format=_DATA_FORMAT_MARKDOWN,
            response_format=_RESPONSE_FORMAT_RAW,
            country=_lower(request.country_code),
        )


class AmazonProductTool(BrightDataTool):
    tool_id: ClassVar[ToolId] = ToolId.AMAZON_PRODUCT
    operation: ClassVar[str] = "Amazon product lookup"

    name: str = ToolId.AMAZON_PRODUCT.value
    description: str = (
        "Get detailed Amazon product information including price, ratings, "
        "reviews, and specifications. Requires a valid Amazon product URL."
    )
    args_schema: type[BaseModel] = AmazonProductInput

    _dataset: AmazonDataset = PrivateAttr()

    def __init__(self, *, client: BrightDataClient, **data: Any) -> None:
        super().__init__(client=client, **data)
        dataset = client.datasets.amazon
        if dataset is None:
            raise CapabilityUnavailableError(
                "Bright Data Amazon dataset client is not available."
            )
        self._dataset = dataset

    def _key_input(self, request: AmazonProductInput) -> str:
        return request.url

    async def _call(self, request: AmazonProductInput) -> Any:
        item = {"url": request.url}
        zip_code = (request.zip_code or "").strip()
        if zip_code:
            item["zipcode"] = zip_code
        return await self._dataset.collect_products(
            [item], output_format=_DATASET_FORMAT_JSON, deferred=False
        )


class LinkedinCollectProfilesTool(BrightDataTool):
    tool_id: ClassVar[ToolId] = ToolId.LINKEDIN_COLLECT_PROFILES
    operation: ClassVar[str] = "LinkedIn profile collection"

    name: str = ToolId.LINKEDIN_COLLECT_PROFILES.value
    description: str = (
        "Fetch LinkedIn profile data for one or more profile URLs. "
        "Returns work experience, education, skills, and more."
    )
    args_schema: type[BaseModel] = LinkedinProfilesInput

    _dataset: LinkedinDataset = PrivateAttr()

    def __init__(self, *, client: BrightDataClient, **data: Any) -> None:
        super().__init__(client=client, **data)
        dataset = client.datasets.linkedin
        if dataset is None:
            raise CapabilityUnavailableError(
                "Bright Data LinkedIn dataset client is not available."
            )
        self._dataset = dataset

    def _key_input(self, request: LinkedinProfilesInput) -> str:
        return ", ".join(request.urls)

    async def _call(self, request: LinkedinProfilesInput) -> Any:
        return await self._dataset.collect_profiles(
            request.urls, output_format=request.output_format, deferred=False
        )


# ---------------------------------------------------------------------------
# Factory functions
# ---------------------------------------------------------------------------


def create_search_tool(client: BrightDataClient) -> SearchTool:
    return SearchTool.from_client(client)


def create_scrape_tool(client: BrightDataClient) -> ScrapeTool:
    return ScrapeTool.from_client(client)


def create_amazon_product_tool(client: BrightDataClient) -> AmazonProductTool:
    return AmazonProductTool.from_client(client)


def create_linkedin_collect_profiles_tool(
    client: BrightDataClient,
) -> LinkedinCollectProfilesTool:
    return LinkedinCollectProfilesTool.from_client(client)
