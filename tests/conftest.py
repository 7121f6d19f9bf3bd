"""Shared fixtures: a substitutable fake Bright Data client."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from webagent.infra.brightdata import DatasetClients


def make_fake_client(*, amazon: bool = True, linkedin: bool = True) -> MagicMock:
    """Fake ``BrightDataClient`` with async provider methods."""
    client = MagicMock(name="BrightDataClient")
    client.search = AsyncMock(return_value="# search results")
    client.scrape = AsyncMock(return_value="# page content")
    client.aclose = AsyncMock()

    amazon_dataset = None
    if amazon:
        amazon_dataset = MagicMock(name="AmazonDataset")
        amazon_dataset.collect_products = AsyncMock(
            return_value=[{"title": "Widget", "price": 9.99}]
        )
    linkedin_dataset = None
    if linkedin:
        linkedin_dataset = MagicMock(name="LinkedinDataset")
        linkedin_dataset.collect_profiles = AsyncMock(
            return_value=[{"name": "Ada Lovelace"}]
        )
    client.datasets = DatasetClients(amazon=amazon_dataset, linkedin=linkedin_dataset)
    return client


@pytest.fixture
def fake_client() -> MagicMock:
    return make_fake_client()
