"""Argument schemas for the Bright Data tools.

These are the ``args_schema`` models handed to LangChain; field
descriptions are shown to the model.  Validation is pure: no I/O and no
side effects.  Defaults (``engine``, ``result_format``,
``output_format``) are applied when a field is omitted.
"""

from __future__ import annotations

import re
from typing import Annotated, Literal

from pydantic import AfterValidator, AnyHttpUrl, BaseModel, Field, TypeAdapter, field_validator

SearchEngine = Literal["google", "bing", "yandex"]
ResultFormat = Literal["html", "markdown"]
OutputFormat = Literal["json", "jsonl"]

AMAZON_PRODUCT_PATH = re.compile(r"/(dp|gp/product)/")

ERR_URL_REQUIRED = "A valid URL is required"
ERR_COUNTRY_CODE = "Country code must be two letters"
ERR_AMAZON_PATH = "URL must contain /dp/ or /gp/product/"
ERR_LINKEDIN_EMPTY = "Provide at least one LinkedIn profile URL"

_URL_ADAPTER: TypeAdapter[AnyHttpUrl] = TypeAdapter(AnyHttpUrl)


def _check_url(value: str) -> str:
    """Validate *value* as an http(s) URL but keep the caller's spelling."""
    try:
        _URL_ADAPTER.validate_python(value)
    except ValueError as exc:
        raise ValueError(ERR_URL_REQUIRED) from exc
    return value


def _check_country_code(value: str) -> str:
    if len(value) != 2:
        raise ValueError(ERR_COUNTRY_CODE)
    return value


UrlString = Annotated[str, AfterValidator(_check_url)]
CountryCode = Annotated[str, AfterValidator(_check_country_code)]


class SearchInput(BaseModel):
    query: str = Field(..., min_length=1, description="The search query")
    engine: SearchEngine = Field(
        default="google", description="Search engine to use"
    )
    country_code: CountryCode | None = Field(
        default=None,
        description="Two-letter country code for localized results",
    )
    result_format: ResultFormat = Field(
        default="markdown", description="Format of returned search results"
    )


class ScrapeInput(BaseModel):
    url: UrlString = Field(..., description="The URL of the website to scrape")
    country_code: CountryCode | None = Field(
        default=None,
        description='Two-letter country code for proxy location (e.g., "us", "gb", "de")',
    )


class AmazonProductInput(BaseModel):
    url: UrlString = Field(
        ...,
        description="Amazon product URL (must contain /dp/ or /gp/product/)",
    )
    zip_code: str | None = Field(
        default=None,
        description="ZIP code for location-specific pricing and availability",
    )

    @field_validator("url")
    @classmethod
    def _product_path(cls, value: str) -> str:
        if not AMAZON_PRODUCT_PATH.search(value):
            raise ValueError(ERR_AMAZON_PATH)
        return value


class LinkedinProfilesInput(BaseModel):
    urls: list[UrlString] = Field(
        ...,
        description=(
            "Array of LinkedIn profile URLs to collect data from "
            '(e.g., ["https://www.linkedin.com/in/example"])'
        ),
    )
    output_format: OutputFormat = Field(
        default="json", description="Output format for the results"
    )

    @field_validator("urls")
    @classmethod
    def _at_least_one(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError(ERR_LINKEDIN_EMPTY)
        return value
