from .config import AppConfig, get_app_config
from .system import (
    AgentConfig,
    BrightDataConfig,
    LLMConfig,
    LoggingConfig,
    MemoryConfig,
)
from .tools import ToolId, ToolsConfig

__all__ = [
    "AgentConfig",
    "AppConfig",
    "BrightDataConfig",
    "LLMConfig",
    "LoggingConfig",
    "MemoryConfig",
    "ToolId",
    "ToolsConfig",
    "get_app_config",
]
