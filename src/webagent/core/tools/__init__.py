from .brightdata_tools import (
    AmazonProductTool,
    BrightDataTool,
    LinkedinCollectProfilesTool,
    ScrapeTool,
    SearchTool,
    create_amazon_product_tool,
    create_linkedin_collect_profiles_tool,
    create_scrape_tool,
    create_search_tool,
)
from .model import ToolId, normalize_result
from .registry import ToolRegistry, build_tool_registry, build_tool_registry_from_config

__all__ = [
    "AmazonProductTool",
    "BrightDataTool",
    "LinkedinCollectProfilesTool",
    "ScrapeTool",
    "SearchTool",
    "ToolId",
    "ToolRegistry",
    "build_tool_registry",
    "build_tool_registry_from_config",
    "create_amazon_product_tool",
    "create_linkedin_collect_profiles_tool",
    "create_scrape_tool",
    "create_search_tool",
    "normalize_result",
]
