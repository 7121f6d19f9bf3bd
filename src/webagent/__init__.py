"""Web research agent backed by Bright Data tools."""

from .bootstrap import open_web_agent
from .core.agent import AgentReply, WebAgent, assemble_web_agent
from .core.tools import ToolId, ToolRegistry, build_tool_registry

__all__ = [
    "AgentReply",
    "ToolId",
    "ToolRegistry",
    "WebAgent",
    "assemble_web_agent",
    "build_tool_registry",
    "open_web_agent",
]
