"""Expiring in-memory key-value cache."""

from collections.abc import Callable
from logging import DEBUG, getLogger
from time import monotonic

from app.configs import file_logger

logger = file_logger(getLogger(__name__))


class TTLCache[V]:
    """
    A small expiring key-value map.

    Entries are advisory: any of them may be dropped at any time without
    affecting correctness, only latency. There is no background expiry;
    stale entries are removed when read. Not synchronised, which is fine
    on a single event loop.

    Attributes:
        ttl: Entry lifetime in seconds.
        name: Label used in log messages.
    """

    def __init__(
        self,
        ttl: float,
        name: str = "cache",
        clock: Callable[[], float] = monotonic,
    ) -> None:
        """
        Initialize the cache.

        Args:
            ttl: Entry lifetime in seconds.
            name: Label used in log messages.
            clock: Monotonic time source, injectable for tests.
        """
        if ttl <= 0:
            msg = "ttl must be positive"
            raise ValueError(msg)
        self.ttl = ttl
        self.name = name
        self._clock = clock
        self._entries: dict[str, tuple[float, V]] = {}

    def get(self, key: str) -> V | None:
        """Return the cached value, or None when absent or stale."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl:
            self._entries.pop(key, None)
            if logger.isEnabledFor(DEBUG):
                logger.debug("%s: entry %s expired", self.name, key)
            return None
        return value

    def set(self, key: str, value: V) -> None:
        """Store a value, restarting its lifetime."""
        self._entries[key] = (self._clock(), value)

    def invalidate(self, key: str | None = None) -> None:
        """
        Drop one entry, or every entry when ``key`` is None.

        Args:
            key: Key to drop; None clears the whole cache.
        """
        if key is None:
            self._entries.clear()
            if logger.isEnabledFor(DEBUG):
                logger.debug("%s: cleared", self.name)
            return
        self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None
