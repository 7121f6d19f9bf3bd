"""Unit tests for the tool argument schemas."""

import pytest
from pydantic import ValidationError

from webagent.core.tools.schemas import (
    AmazonProductInput,
    LinkedinProfilesInput,
    ScrapeInput,
    SearchInput,
)


class TestSearchInput:
    def test_defaults_applied(self):
        request = SearchInput.model_validate({"query": "quantum computing"})
        assert request.engine == "google"
        assert request.result_format == "markdown"
        assert request.country_code is None

    def test_empty_query_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            SearchInput(query="")
        assert exc_info.value.errors()[0]["loc"] == ("query",)

    def test_unknown_engine_rejected(self):
        with pytest.raises(ValidationError, match="engine"):
            SearchInput(query="q", engine="duckduckgo")

    def test_country_code_must_be_two_letters(self):
        with pytest.raises(ValidationError, match="Country code must be two letters"):
            SearchInput(query="q", country_code="usa")

    def test_explicit_values_kept(self):
        request = SearchInput(
            query="q", engine="bing", country_code="DE", result_format="html"
        )
        assert request.engine == "bing"
        assert request.country_code == "DE"
        assert request.result_format == "html"


class TestScrapeInput:
    def test_not_a_url_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ScrapeInput.model_validate({"url": "not a url"})
        error = exc_info.value.errors()[0]
        assert error["loc"] == ("url",)
        assert "A valid URL is required" in error["msg"]

    def test_url_spelling_preserved(self):
        request = ScrapeInput(url="https://example.com")
        assert request.url == "https://example.com"

    def test_country_code_optional(self):
        assert ScrapeInput(url="https://example.com").country_code is None


class TestAmazonProductInput:
    def test_dp_path_accepted(self):
        request = AmazonProductInput(url="https://www.amazon.com/Widget/dp/B000TEST01")
        assert request.zip_code is None

    def test_gp_product_path_accepted(self):
        AmazonProductInput(url="https://www.amazon.com/gp/product/B000TEST01")

    def test_other_path_rejected(self):
        with pytest.raises(ValidationError, match="URL must contain /dp/ or /gp/product/"):
            AmazonProductInput.model_validate({"url": "https://amazon.com/some/other/path"})

    def test_invalid_url_rejected(self):
        with pytest.raises(ValidationError, match="A valid URL is required"):
            AmazonProductInput(url="dp/B000TEST01")


class TestLinkedinProfilesInput:
    def test_empty_list_rejected(self):
        with pytest.raises(ValidationError, match="Provide at least one LinkedIn profile URL"):
            LinkedinProfilesInput.model_validate({"urls": []})

    def test_invalid_member_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            LinkedinProfilesInput(urls=["https://www.linkedin.com/in/a", "nope"])
        assert exc_info.value.errors()[0]["loc"] == ("urls", 1)

    def test_order_and_default_format(self):
        urls = [
            "https://www.linkedin.com/in/b",
            "https://www.linkedin.com/in/a",
        ]
        request = LinkedinProfilesInput(urls=urls)
        assert request.urls == urls
        assert request.output_format == "json"

    def test_unknown_format_rejected(self):
        with pytest.raises(ValidationError, match="output_format"):
            LinkedinProfilesInput(urls=["https://www.linkedin.com/in/a"], output_format="csv")
