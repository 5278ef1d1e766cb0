"""
Base service for sampled product showcases.

A showcase primes itself with one page of catalog items (sorted on the
server by a hint such as "popular" or "newest") and renders a fresh
sampled selection from that snapshot on every refresh.
"""

from aws_lambda_powertools import Logger

from core.models.catalog import CatalogItem, OrderBy, SelectionRequest
from core.models.filters import ProductFilters
from core.repositories.catalog_repository import CatalogProvider
from core.selection.sampler import CatalogSampler
from core.utils.constants import DEFAULT_PAGE, SHOWCASE_MAX_COUNT, SHOWCASE_MIN_COUNT
from core.utils.decorators import surface_fetch_errors
from core.utils.validators import parse_model

logger = Logger(UTC=True)


class ShowcaseService:
    """Application service behind a sampled showcase widget.

    Subclasses set:
    - ``order_by``: how the sampling pool is ranked
    - ``sort_hint``: server-side sort preset used to prime the snapshot
    """

    order_by: OrderBy = OrderBy.RECENCY
    sort_hint: str | None = None

    def __init__(
        self,
        provider: CatalogProvider,
        *,
        sampler: CatalogSampler | None = None,
        min_count: int = SHOWCASE_MIN_COUNT,
        max_count: int = SHOWCASE_MAX_COUNT,
    ) -> None:
        """Initialize the showcase; the count range is validated eagerly."""
        bounds = parse_model(
            SelectionRequest,
            {"min_count": min_count, "max_count": max_count},
            message="Invalid showcase bounds",
        )
        self._provider = provider
        self._sampler = sampler or CatalogSampler()
        self.min_count = bounds.min_count
        self.max_count = bounds.max_count

        self.items: list[CatalogItem] = []
        self.selection: list[CatalogItem] = []
        self.loading: bool = False
        self.error: str | None = None

    @surface_fetch_errors
    def load(self) -> list[CatalogItem]:
        """Fetch the catalog snapshot if needed and sample a selection."""
        if not self.items:
            self.items = self._fetch_snapshot()

        return self.refresh()

    @surface_fetch_errors
    def reload(self) -> list[CatalogItem]:
        """Replace the snapshot with a fresh one.

        The current snapshot is kept if the fetch fails.
        """
        self.items = self._fetch_snapshot()
        return self.refresh()

    def refresh(self) -> list[CatalogItem]:
        """Sample a new selection from the current snapshot.

        Without a snapshot the previous selection is kept.
        """
        if not self.items:
            return self.selection

        self.selection = self._sampler.select_sample(
            self.items,
            self.order_by,
            self.min_count,
            self.max_count,
        )
        return self.selection

    def clear_error(self) -> None:
        self.error = None

    def _fetch_snapshot(self) -> list[CatalogItem]:
        page = self._provider.fetch_items(
            ProductFilters(page=DEFAULT_PAGE, sort=self.sort_hint)
        )
        logger.info(
            "Showcase snapshot loaded",
            extra={"showcase": type(self).__name__, "count": len(page.data)},
        )
        return page.data
