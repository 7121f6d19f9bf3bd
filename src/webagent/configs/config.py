"""Configuration management using pydantic-settings.

**Not a singleton** - each call to ``get_app_config()`` re-reads config
from disk and the environment.

Priority order (highest first):

1. Environment variables (``WEBAGENT_`` prefix, ``__`` nesting)
2. ``.env`` dotenv file
3. Conventional provider keys (``BRIGHTDATA_API_KEY``, ``OPENAI_API_KEY``)
4. Static YAML (``configs/config.yaml``)
5. Prompt YAML (``configs/prompt.yml``)
6. Init defaults / field defaults
7. File secrets
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .system import (
    AgentConfig,
    BrightDataConfig,
    LLMConfig,
    LoggingConfig,
    MemoryConfig,
)
from .tools import ToolId, ToolsConfig

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Path constants
# ---------------------------------------------------------------------------

CONFIG_PY_PATH = Path(__file__).resolve()
PROJECT_ROOT = CONFIG_PY_PATH.parent.parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "configs"

STATIC_CONFIG_FILE = CONFIG_DIR / "config.yaml"
PROMPT_CONFIG_FILE = CONFIG_DIR / "prompt.yml"

DOTENV_FILE_PATH = PROJECT_ROOT / ".env"
ENV_DELIMITER = "__"
ENV_PREFIX = "WEBAGENT_"

DEFAULT_ENCODING = "utf-8"

# Un-prefixed variables that the provider SDKs conventionally read.
BRIGHTDATA_API_KEY_ENV = "BRIGHTDATA_API_KEY"
OPENAI_API_KEY_ENV = "OPENAI_API_KEY"

PROMPT_KEY_INSTRUCTIONS = "instructions"


# ---------------------------------------------------------------------------
# Application config (re-created on every call)
# ---------------------------------------------------------------------------


class AppConfig(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_file=DOTENV_FILE_PATH,
        env_file_encoding=DEFAULT_ENCODING,
        env_nested_delimiter=ENV_DELIMITER,
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
        yaml_file=STATIC_CONFIG_FILE,
        yaml_file_encoding=DEFAULT_ENCODING,
    )

    brightdata: BrightDataConfig = Field(
        default_factory=BrightDataConfig,
        description="Bright Data provider settings",
    )

    llm: LLMConfig = Field(
        default_factory=LLMConfig,
        description="Language model client settings",
    )

    memory: MemoryConfig = Field(
        default_factory=MemoryConfig,
        description="Conversation memory store settings",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging output settings",
    )

    agent: AgentConfig = Field(
        default_factory=AgentConfig,
        description="Agent identity and instructions",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            env_settings,
            dotenv_settings,
            _ProviderKeySettingsSource(settings_cls),
            YamlConfigSettingsSource(settings_cls),
            _PromptYamlSettingsSource(settings_cls),
            init_settings,
            file_secret_settings,
        )

    def tools_config(self) -> ToolsConfig:
        """Return the registry-builder view of the Bright Data settings."""
        return ToolsConfig(
            api_key=self.brightdata.api_key,
            exclude_tools=frozenset(
                ToolId(name) for name in self.brightdata.exclude_tools
            ),
        )


class _ProviderKeySettingsSource(PydanticBaseSettingsSource):
    """Maps ``BRIGHTDATA_API_KEY`` / ``OPENAI_API_KEY`` into nested config.

    Reads the process environment first, then the ``.env`` file.
    """

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        self.settings_cls = settings_cls

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        values: dict[str, Any] = {}
        if DOTENV_FILE_PATH.is_file():
            values.update(
                {
                    k: v
                    for k, v in dotenv_values(
                        DOTENV_FILE_PATH, encoding=DEFAULT_ENCODING
                    ).items()
                    if v is not None
                }
            )
        values.update(os.environ)

        data: dict[str, Any] = {}
        if values.get(BRIGHTDATA_API_KEY_ENV):
            data["brightdata"] = {"api_key": values[BRIGHTDATA_API_KEY_ENV]}
        if values.get(OPENAI_API_KEY_ENV):
            data["llm"] = {"api_key": values[OPENAI_API_KEY_ENV]}
        return data


class _PromptYamlSettingsSource(PydanticBaseSettingsSource):
    """Loads the agent instructions from ``prompt.yml``."""

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        self.settings_cls = settings_cls

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        if not PROMPT_CONFIG_FILE.exists():
            return {}

        try:
            with open(PROMPT_CONFIG_FILE, encoding=DEFAULT_ENCODING) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError):
            logger.warning(
                "Failed to read prompt config %s", PROMPT_CONFIG_FILE, exc_info=True
            )
            return {}

        if data and PROMPT_KEY_INSTRUCTIONS in data:
            return {"agent": {"instructions": data[PROMPT_KEY_INSTRUCTIONS]}}
        return {}


def get_app_config() -> AppConfig:
    """Get the application configuration (re-read on every call)."""
    return AppConfig()
