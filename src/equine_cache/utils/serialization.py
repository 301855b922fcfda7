"""JSON codec for cached values.

Every value is encoded on write and decoded on read, so no caller ever holds
a reference into the store.
"""

import json
from typing import Any

from equine_cache.exceptions import CacheSerializationError


def encode_value(key: str, value: Any) -> str:
    """Encode a value to JSON text.

    Args:
        key: The key being written (for the error message)
        value: The value to encode

    Returns:
        JSON text

    Raises:
        CacheSerializationError: If the value is not JSON-serializable
            (functions, sets, cyclic graphs, ...)
    """
    try:
        return json.dumps(value, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise CacheSerializationError(key, str(e)) from e


def decode_value(raw: str | bytes | None) -> Any | None:
    """Decode stored JSON text.

    Undecodable text is treated the same as a missing entry.

    Args:
        raw: The stored text

    Returns:
        The decoded value, or None
    """
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
