"""Clock protocol.

Expiry is computed against an injected time source so tests can move time
forward deterministically instead of sleeping.
"""

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Protocol for time sources."""

    def now_ms(self) -> float:
        """Return the current time in epoch milliseconds."""
        ...


class SystemClock:
    """Wall-clock implementation of Clock."""

    def now_ms(self) -> float:
        return time.time() * 1000
