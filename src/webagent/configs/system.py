from datetime import timedelta

from pydantic import BaseModel, Field


class BrightDataConfig(BaseModel):
    """Bright Data provider settings."""

    api_key: str = Field(
        default="", description="Bright Data API key (bearer token)"
    )
    exclude_tools: list[str] = Field(
        default_factory=list,
        description="Tool identifiers to leave out of the registry",
    )
    base_url: str = Field(
        default="https://api.brightdata.com",
        description="Bright Data REST API base URL",
    )
    auto_create_zones: bool = Field(
        default=True,
        description="Create the unlocker / SERP zones on first use when missing",
    )
    unlocker_zone: str = Field(
        default="sdk_unlocker", description="Zone used for page scraping"
    )
    serp_zone: str = Field(
        default="sdk_serp", description="Zone used for search engine requests"
    )
    amazon_dataset_id: str = Field(
        default="gd_l7q7dkf244hwjntr0",
        description="Dataset id for Amazon product collection. Empty disables it.",
    )
    linkedin_dataset_id: str = Field(
        default="gd_l1viktl72bvl7bjuj0",
        description="Dataset id for LinkedIn profile collection. Empty disables it.",
    )
    timeout: timedelta = Field(
        default=timedelta(seconds=120),
        description="HTTP timeout for provider calls",
    )


class LLMConfig(BaseModel):
    """Language model client settings."""

    endpoint: str | None = Field(
        default=None,
        description="OpenAI-compatible base URL. None uses the OpenAI default.",
    )
    api_key: str = Field(default="", description="Model provider API key")
    model_name: str = Field(default="gpt-4o-mini", description="Model name")
    temperature: float = Field(default=0.3, description="Sampling temperature")
    max_tokens: int | None = Field(
        default=None, description="Maximum tokens in a single response"
    )
    model_timeout: timedelta = Field(
        default=timedelta(seconds=60), description="Model request timeout"
    )
    max_retries: int = Field(
        default=2, description="Retries performed by the model client"
    )


class MemoryConfig(BaseModel):
    """Conversation memory store settings."""

    database_url: str = Field(
        default="sqlite+aiosqlite:///webagent.db",
        description="SQLAlchemy async URL of the memory database file",
    )
    max_messages: int = Field(
        default=40, description="Messages loaded per conversation turn"
    )


class LoggingConfig(BaseModel):
    """Logging output settings."""

    level: str = Field(default="INFO", description="Root log level")
    json_output: bool = Field(
        default=True,
        description="Emit JSON lines; False for human-readable dev output",
    )


class AgentConfig(BaseModel):
    """Agent identity and instructions."""

    name: str = Field(default="Web Agent", description="Agent display name")
    instructions: str = Field(
        default="You are a general-purpose web research assistant.",
        description="System prompt given to the agent",
    )
