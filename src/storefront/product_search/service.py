"""
Business logic for debounced, cached product search.
"""

import asyncio
from itertools import count

from aws_lambda_powertools import Logger

from core.caching.search_cache import SearchCache
from core.models.catalog import CatalogItem
from core.models.errors import StorefrontError
from core.models.filters import ProductFilters
from core.repositories.catalog_repository import CatalogProvider
from core.utils.constants import SEARCH_DEBOUNCE_SECONDS
from core.utils.debounce import Debouncer
from core.utils.decorators import surface_fetch_errors
from core.utils.validators import parse_model

from .models import SearchRequest

logger = Logger(UTC=True)


class ProductSearchService:
    """Application service behind the search box.

    This service coordinates:
    - Debouncing keystrokes so only the last query is sent
    - Serving repeated queries from a bounded cache
    - Ignoring responses that arrive after a newer search was issued
    """

    def __init__(
        self,
        provider: CatalogProvider,
        *,
        cache: SearchCache | None = None,
        debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS,
    ) -> None:
        self._provider = provider
        self._cache = cache or SearchCache()
        self._debouncer = Debouncer(self.search, delay=debounce_seconds)
        self._request_ids = count(1)
        self._latest_request_id: int | None = None

        self._in_flight: int = 0

        self.query: str = ""
        self.results: list[CatalogItem] = []
        self.error: str | None = None

    @property
    def loading(self) -> bool:
        """True while any search is in flight."""
        return self._in_flight > 0

    @loading.setter
    def loading(self, value: bool) -> None:
        # Searches overlap: each call sets and clears loading once.
        if value:
            self._in_flight += 1
        else:
            self._in_flight = max(self._in_flight - 1, 0)

    @property
    def is_searching(self) -> bool:
        return self.loading or self._debouncer.pending

    def submit(
        self,
        term: str,
        filters: ProductFilters | None = None,
    ) -> asyncio.Task[None]:
        """Record a keystroke; the search runs once typing pauses."""
        self.query = term
        return self._debouncer.trigger(term, filters)

    async def wait(self) -> None:
        """Wait for the pending debounced search, if any."""
        await self._debouncer.wait()

    @surface_fetch_errors
    async def search(
        self,
        term: str,
        filters: ProductFilters | None = None,
    ) -> list[CatalogItem] | None:
        """Search immediately, bypassing the debounce.

        Returns:
            The results applied, or None if a newer search superseded
            this one before its response arrived
        """
        request = parse_model(
            SearchRequest,
            {"term": term, "filters": filters or ProductFilters()},
            message="Invalid search",
        )

        request_id = next(self._request_ids)
        self._latest_request_id = request_id

        if request.is_blank:
            self.results = []
            return self.results

        key = request.cache_key()
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Search cache hit", extra={"query": key})
            self.results = cached
            return self.results

        try:
            page = await asyncio.to_thread(
                self._provider.fetch_items, request.to_filters()
            )
        except StorefrontError as exc:
            if request_id != self._latest_request_id:
                logger.warning(
                    "Discarding stale search failure",
                    extra={
                        "query": key,
                        "request_id": request_id,
                        "latest_request_id": self._latest_request_id,
                        "error_code": exc.error_code,
                    },
                )
                return None
            raise

        self._cache.set(key, page.data)

        if request_id != self._latest_request_id:
            logger.warning(
                "Discarding stale search response",
                extra={
                    "query": key,
                    "request_id": request_id,
                    "latest_request_id": self._latest_request_id,
                },
            )
            return None

        self.results = page.data
        logger.info("Search completed", extra={"query": key, "count": len(page.data)})
        return self.results

    def clear(self) -> None:
        """Cancel any pending search and drop the results."""
        self._debouncer.cancel()
        self._latest_request_id = next(self._request_ids)
        self.query = ""
        self.results = []
