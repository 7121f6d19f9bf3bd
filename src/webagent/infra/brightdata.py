"""Async Bright Data REST client.

One ``BrightDataClient`` is created per tool registry and shared by all
tools built from it.  Construction is synchronous and performs no
network I/O; when ``auto_create_zones`` is set, the unlocker and SERP
zones are provisioned lazily before the first request, once per client.

Dataset collection is an explicit capability: ``client.datasets.amazon``
and ``client.datasets.linkedin`` are ``None`` when no dataset id is
configured for them.

Usage::

    async with create_brightdata_client(api_key) as client:
        page = await client.scrape("https://example.com", country="us")
        products = await client.datasets.amazon.collect_products(
            [{"url": "https://www.amazon.com/dp/B0TEST"}]
        )
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal, Self
from urllib.parse import quote_plus

import httpx

from webagent.configs.system import BrightDataConfig

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.brightdata.com"
DEFAULT_TIMEOUT = 120.0

PATH_REQUEST = "/request"
PATH_ACTIVE_ZONES = "/zone/get_active_zones"
PATH_ZONE = "/zone"
PATH_DATASET_SCRAPE = "/datasets/v3/scrape"
PATH_DATASET_TRIGGER = "/datasets/v3/trigger"

ZONE_TYPE_UNBLOCKER = "unblocker"
ZONE_TYPE_SERP = "serp"

SEARCH_URLS: dict[str, str] = {
    "google": "https://www.google.com/search?q={query}",
    "bing": "https://www.bing.com/search?q={query}",
    "yandex": "https://yandex.com/search/?text={query}",
}

DATA_FORMAT_MARKDOWN = "markdown"

ResponseFormat = Literal["raw", "json"]
DatasetFormat = Literal["json", "jsonl"]


class BrightDataClient:
    """Thin async wrapper over the Bright Data REST API."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        auto_create_zones: bool = True,
        unlocker_zone: str = "sdk_unlocker",
        serp_zone: str = "sdk_serp",
        amazon_dataset_id: str = "",
        linkedin_dataset_id: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.auto_create_zones = auto_create_zones
        self.unlocker_zone = unlocker_zone
        self.serp_zone = serp_zone
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=timeout,
            transport=transport,
        )
        self._zones_ready = False
        self._zones_lock = asyncio.Lock()
        self.datasets = DatasetClients(
            amazon=AmazonDataset(self, amazon_dataset_id) if amazon_dataset_id else None,
            linkedin=LinkedinDataset(self, linkedin_dataset_id) if linkedin_dataset_id else None,
        )

    # ---- lifecycle -------------------------------------------------------

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ---- zones -----------------------------------------------------------

    async def ensure_zones(self) -> None:
        """Create the unlocker / SERP zones if they are not active yet."""
        if not self.auto_create_zones or self._zones_ready:
            return
        async with self._zones_lock:
            if self._zones_ready:
                return
            response = await self._http.get(PATH_ACTIVE_ZONES)
            response.raise_for_status()
            active = {zone.get("name") for zone in response.json() or []}
            for name, zone_type in (
                (self.unlocker_zone, ZONE_TYPE_UNBLOCKER),
                (self.serp_zone, ZONE_TYPE_SERP),
            ):
                if name not in active:
                    await self._create_zone(name, zone_type)
            self._zones_ready = True

    async def _create_zone(self, name: str, zone_type: str) -> None:
        if zone_type == ZONE_TYPE_SERP:
            plan: dict[str, Any] = {"type": ZONE_TYPE_UNBLOCKER, "serp": True}
        else:
            plan = {"type": zone_type}
        logger.info("Creating Bright Data zone %s (%s)", name, zone_type)
        response = await self._http.post(
            PATH_ZONE,
            json={"zone": {"name": name, "type": zone_type}, "plan": plan},
        )
        # 409: created concurrently by another client
        if response.status_code == httpx.codes.CONFLICT:
            logger.debug("Zone %s already exists", name)
            return
        response.raise_for_status()

    # ---- unlocker / SERP -------------------------------------------------

    async def _request(
        self,
        zone: str,
        url: str,
        *,
        response_format: ResponseFormat,
        data_format: str | None,
        country: str | None,
    ) -> Any:
        await self.ensure_zones()
        payload: dict[str, Any] = {
            "zone": zone,
            "url": url,
            "format": response_format,
            "method": "GET",
        }
        if data_format:
            payload["data_format"] = data_format
        if country:
            payload["country"] = country
        logger.debug("Bright Data request zone=%s url=%s", zone, url)
        response = await self._http.post(PATH_REQUEST, json=payload)
        response.raise_for_status()
        if response_format == "json":
            return response.json()
        return response.text

    async def search(
        self,
        query: str,
        *,
        search_engine: str = "google",
        country: str | None = None,
        data_format: str = DATA_FORMAT_MARKDOWN,
        response_format: ResponseFormat = "raw",
    ) -> Any:
        """Run *query* on *search_engine* through the SERP zone.

        ``data_format="markdown"`` asks the provider to convert the
        results page; ``"html"`` returns it untouched.
        """
        template = SEARCH_URLS.get(search_engine)
        if template is None:
            raise ValueError(f"Unsupported search engine: {search_engine!r}")
        return await self._request(
            self.serp_zone,
            template.format(query=quote_plus(query)),
            response_format=response_format,
            data_format=data_format if data_format == DATA_FORMAT_MARKDOWN else None,
            country=country,
        )

    async def scrape(
        self,
        url: str,
        *,
        country: str | None = None,
        data_format: str = DATA_FORMAT_MARKDOWN,
        response_format: ResponseFormat = "raw",
    ) -> Any:
        """Fetch *url* through the unlocker zone."""
        return await self._request(
            self.unlocker_zone,
            url,
            response_format=response_format,
            data_format=data_format,
            country=country,
        )

    # ---- datasets --------------------------------------------------------

    async def collect_dataset(
        self,
        dataset_id: str,
        inputs: Sequence[dict[str, Any]],
        *,
        output_format: DatasetFormat = "json",
        deferred: bool = False,
    ) -> Any:
        """Collect *inputs* from a dataset.

        Synchronous collection returns the records (parsed for ``json``,
        text for ``jsonl``).  Deferred collection returns the snapshot
        descriptor; so does a synchronous call the provider turned into
        a snapshot (HTTP 202).
        """
        path = PATH_DATASET_TRIGGER if deferred else PATH_DATASET_SCRAPE
        params = {
            "dataset_id": dataset_id,
            "format": output_format,
            "include_errors": "true",
        }
        logger.debug(
            "Bright Data dataset %s: %d input(s), deferred=%s",
            dataset_id,
            len(inputs),
            deferred,
        )
        response = await self._http.post(path, params=params, json=list(inputs))
        response.raise_for_status()
        if deferred or response.status_code == httpx.codes.ACCEPTED:
            return response.json()
        if output_format == "jsonl":
            return response.text
        return response.json()


class Dataset:
    """One dataset reachable through a client."""

    def __init__(self, client: BrightDataClient, dataset_id: str) -> None:
        self._client = client
        self.dataset_id = dataset_id

    async def collect(
        self,
        inputs: Sequence[dict[str, Any]],
        *,
        output_format: DatasetFormat = "json",
        deferred: bool = False,
    ) -> Any:
        return await self._client.collect_dataset(
            self.dataset_id,
            inputs,
            output_format=output_format,
            deferred=deferred,
        )


class AmazonDataset(Dataset):
    """Amazon product pages keyed by ``url`` (plus optional ``zipcode``)."""

    async def collect_products(
        self,
        requests: Sequence[dict[str, str]],
        *,
        output_format: DatasetFormat = "json",
        deferred: bool = False,
    ) -> Any:
        return await self.collect(
            requests, output_format=output_format, deferred=deferred
        )


class LinkedinDataset(Dataset):
    """LinkedIn public profiles keyed by profile URL."""

    async def collect_profiles(
        self,
        urls: Sequence[str],
        *,
        output_format: DatasetFormat = "json",
        deferred: bool = False,
    ) -> Any:
        return await self.collect(
            [{"url": url} for url in urls],
            output_format=output_format,
            deferred=deferred,
        )


@dataclass(frozen=True)
class DatasetClients:
    """Dataset capabilities of a client; ``None`` means unavailable."""

    amazon: AmazonDataset | None = None
    linkedin: LinkedinDataset | None = None


def create_brightdata_client(
    api_key: str,
    config: BrightDataConfig | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> BrightDataClient:
    """Build the client shared by one tool registry.

    *api_key* must already be trimmed and non-empty; the registry
    builder checks that before calling here.
    """
    if config is None:
        config = BrightDataConfig()
    return BrightDataClient(
        api_key,
        base_url=config.base_url,
        auto_create_zones=config.auto_create_zones,
        unlocker_zone=config.unlocker_zone,
        serp_zone=config.serp_zone,
        amazon_dataset_id=config.amazon_dataset_id,
        linkedin_dataset_id=config.linkedin_dataset_id,
        timeout=config.timeout.total_seconds(),
        transport=transport,
    )
