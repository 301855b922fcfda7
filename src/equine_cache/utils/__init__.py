"""Utility modules for equine cache."""

from .serialization import decode_value, encode_value

__all__ = [
    "decode_value",
    "encode_value",
]
