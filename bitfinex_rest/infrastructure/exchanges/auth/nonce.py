"""Nonce issuance for authenticated requests.

The exchange rejects any nonce not strictly greater than the last one it
accepted for the same API key. Wall-clock milliseconds alone collide when
two calls land in the same millisecond, so issuance is serialized and
bumped past the previous value.
"""

import threading
import time
from typing import Callable


def wall_clock_ms() -> int:
    """Milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


class NonceGenerator:
    """Strictly increasing millisecond nonces.

    Example:
        >>> nonces = NonceGenerator()
        >>> first, second = nonces.next(), nonces.next()
        >>> int(second) > int(first)
        True
    """

    def __init__(self, clock: Callable[[], int] = wall_clock_ms) -> None:
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next(self) -> str:
        """Issue the next nonce as a decimal string."""
        with self._lock:
            self._last = max(self._clock(), self._last + 1)
            return str(self._last)

    def now(self) -> str:
        """Current clock value, for "until now" timestamps. Not a nonce."""
        return str(self._clock())
