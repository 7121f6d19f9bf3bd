"""Shared tool-level types and result normalization."""

from __future__ import annotations

import json
from typing import Any

from webagent.configs.tools import ToolId

__all__ = ["ToolId", "normalize_result"]

_JSON_INDENT = 2


def normalize_result(result: Any) -> str:
    """Return *result* as text for the model.

    Strings pass through unchanged; anything else is pretty-printed as
    JSON (non-serializable leaves fall back to ``str``).
    """
    if isinstance(result, str):
        return result
    return json.dumps(result, indent=_JSON_INDENT, ensure_ascii=False, default=str)
