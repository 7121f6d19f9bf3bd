"""Prefixed ID generation.

Public-facing IDs use a ``{prefix}_{random}`` format so their origin is
visible at a glance:

- ``conv_a8Kx3nQ9mP2r``  - conversation
- ``trace_L7wBd4Fj9Ks2``  - single agent turn
- ``msg_kJ3pW7mD4bNx``   - stored message without a provider id
"""

import secrets
import string

_ALPHABET = string.ascii_letters + string.digits
_DEFAULT_LENGTH = 12


def generate_id(prefix: str, length: int = _DEFAULT_LENGTH) -> str:
    """Return ``"{prefix}_{random}"`` with *length* alphanumeric characters."""
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(length))
    return f"{prefix}_{suffix}"
