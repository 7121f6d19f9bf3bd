"""Tool configuration models.

The tool surface is a closed set: every tool the agent can call has a
``ToolId``.  ``ToolsConfig`` carries the provider credential plus the
identifiers to leave out; it is the only input the registry builder
needs.
"""

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator


class ToolId(StrEnum):
    """Identifiers of the Bright Data tools (also the names the model sees)."""

    SEARCH = "search"
    SCRAPE = "scrape"
    AMAZON_PRODUCT = "amazonProduct"
    LINKEDIN_COLLECT_PROFILES = "linkedinCollectProfiles"


class ToolsConfig(BaseModel):
    """Configuration for building the tool registry.

    Attributes:
        api_key: Bright Data credential.  Surrounding whitespace is
            stripped; blank keys are rejected by the registry builder
            (not here) so the failure carries the configuration error.
        exclude_tools: Identifiers to omit from the registry.
    """

    api_key: str = Field(default="", description="Bright Data API key")
    exclude_tools: frozenset[ToolId] = Field(
        default_factory=frozenset,
        description="Tool identifiers to leave out of the registry",
    )

    @field_validator("api_key")
    @classmethod
    def _strip_api_key(cls, value: str) -> str:
        return value.strip()
