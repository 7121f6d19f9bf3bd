"""Language model factory."""

import logging

from langchain_openai import ChatOpenAI

from webagent.configs.system import LLMConfig

logger = logging.getLogger(__name__)


def get_llm(config: LLMConfig) -> ChatOpenAI:
    """Create the chat model the agent reasons with."""
    logger.info("Using model %s", config.model_name)
    return ChatOpenAI(
        base_url=config.endpoint,
        api_key=config.api_key or None,
        model=config.model_name,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        timeout=config.model_timeout.total_seconds(),
        max_retries=config.max_retries,
    )
