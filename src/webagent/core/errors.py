"""Error taxonomy for tool construction, agent assembly and tool calls.

Schema violations are not listed here: they surface as
``pydantic.ValidationError`` from the tool's ``args_schema`` before any
provider call is made.
"""

from __future__ import annotations

from collections.abc import Sequence


class WebAgentError(Exception):
    """Base class for all web agent errors."""


class ToolConfigurationError(WebAgentError):
    """Raised when the registry cannot be built from the given configuration."""


class MissingToolsError(WebAgentError):
    """Raised when agent assembly finds expected tools absent from the registry."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            f"Bright Data tools failed to initialize ({', '.join(self.missing)}). "
            "Verify BRIGHTDATA_API_KEY."
        )


class CapabilityUnavailableError(WebAgentError):
    """Raised when a dataset-backed tool is built on a client lacking that dataset."""


class ProviderCallError(WebAgentError):
    """Raised when the provider call behind a tool fails.

    The message names the operation, the input that identifies the
    request, and the underlying error text.  The original exception is
    chained as ``__cause__``.
    """

    def __init__(self, tool_id: str, operation: str, key_input: str, cause: BaseException) -> None:
        self.tool_id = tool_id
        self.key_input = key_input
        detail = str(cause) or repr(cause)
        super().__init__(f'Bright Data {operation} failed for "{key_input}": {detail}')
