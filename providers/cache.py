"""
Short-TTL cache for slowly changing supplier fetches.
"""

import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from config import logger


@dataclass
class CacheEntry:
    payload: Any
    fetched_at: float


class ResponseCache:
    """Keyed cache of fetch results with a per-call TTL.

    Failed fetches are never stored. Stale entries are left in place and
    overwritten by the next successful fetch for the same key.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None, name: str = "responses"):
        self._clock = clock or time.monotonic
        self._entries: Dict[str, CacheEntry] = {}
        self.logger = logger.bind(component="cache", cache=name)

    async def get_or_fetch(self, key: str, ttl: float, fetch: Callable[[], Awaitable[Any]]) -> Any:
        entry = self._entries.get(key)
        if entry is not None and self._clock() - entry.fetched_at < ttl:
            self.logger.debug("Cache hit", key=key)
            return entry.payload

        self.logger.debug("Cache miss", key=key)
        payload = await fetch()
        self._entries[key] = CacheEntry(payload=payload, fetched_at=self._clock())
        return payload

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
