"""Bounded in-memory cache for search results."""

import time
from collections import OrderedDict
from collections.abc import Callable

from aws_lambda_powertools import Logger

from core.models.catalog import CatalogItem
from core.utils.constants import SEARCH_CACHE_MAX_ENTRIES, SEARCH_CACHE_TTL_SECONDS

logger = Logger(UTC=True)


class SearchCache:
    """LRU cache of search results keyed by the exact query string.

    Entries expire after ``ttl_seconds`` and the least recently used
    entry is evicted once ``max_entries`` is reached.
    """

    def __init__(
        self,
        *,
        max_entries: int = SEARCH_CACHE_MAX_ENTRIES,
        ttl_seconds: float = SEARCH_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        self._max_entries = max_entries
        self._ttl = ttl_seconds
        self._clock = clock
        self._store: OrderedDict[str, tuple[float, list[CatalogItem]]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def get(self, key: str) -> list[CatalogItem] | None:
        entry = self._store.get(key)
        if entry is None:
            return None

        stored_at, items = entry
        if self._clock() - stored_at > self._ttl:
            # expired
            del self._store[key]
            return None

        self._store.move_to_end(key)
        return list(items)

    def set(self, key: str, items: list[CatalogItem]) -> None:
        self._store[key] = (self._clock(), list(items))
        self._store.move_to_end(key)

        while len(self._store) > self._max_entries:
            evicted, _ = self._store.popitem(last=False)
            logger.debug("Evicted search cache entry", extra={"query": evicted})

    def clear(self, key: str | None = None) -> None:
        if key is None:
            self._store.clear()
        else:
            self._store.pop(key, None)
