"""
Pagination state synchronization.

Keeps a zero-based local page cursor consistent with the one-based
pagination envelope reported by the catalog. The envelope is
authoritative: every applied server response overwrites the cursor.
"""

from itertools import count

from aws_lambda_powertools import Logger

from core.models.filters import ProductFilters
from core.models.pagination import PageRequest, PaginationEnvelope, PaginationState
from core.utils.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE

logger = Logger(UTC=True)


class PaginationSynchronizer:
    """
    State machine behind a paginated, filterable listing.

    Transitions:
    - on_server_response: apply an authoritative envelope
    - on_user_set_page: move the cursor optimistically and request that page
    - on_filter_change: reset to the first page and request it

    Every issued request carries a monotonically increasing id. Only a
    response for the latest id is applied, so a slow response can never
    overwrite a newer one.
    """

    def __init__(
        self,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        filters: ProductFilters | None = None,
    ) -> None:
        self._page_index: int = 0
        self._page_size: int = page_size
        self._envelope: PaginationEnvelope = PaginationEnvelope.empty(page_size)
        self._filters: ProductFilters = (filters or ProductFilters()).without_pagination()
        self._default_filters: ProductFilters = self._filters
        self._request_ids = count(1)
        self._latest_request_id: int | None = None

    @property
    def page_index(self) -> int:
        return self._page_index

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def envelope(self) -> PaginationEnvelope:
        return self._envelope

    @property
    def filters(self) -> ProductFilters:
        return self._filters

    @property
    def latest_request_id(self) -> int | None:
        return self._latest_request_id

    @property
    def can_paginate(self) -> bool:
        """Pagination controls only apply to listings with more than one page."""
        return self._envelope.pages > 1

    def snapshot(self) -> PaginationState:
        return PaginationState(
            page_index=self._page_index,
            page_size=self._page_size,
            envelope=self._envelope,
        )

    def is_latest(self, request_id: int) -> bool:
        return request_id == self._latest_request_id

    def initial_request(self) -> PageRequest:
        """Request for the page the cursor currently points at."""
        return self._issue(self._page_index + 1)

    def on_server_response(
        self,
        envelope: PaginationEnvelope,
        *,
        request_id: int | None = None,
    ) -> bool:
        """
        Apply an authoritative envelope.

        Args:
            envelope: Pagination metadata from the catalog
            request_id: Id of the request that produced the envelope.
                When given, the envelope is applied only if it answers
                the latest issued request.

        Returns:
            True if the envelope was applied, False if it was stale
        """
        if request_id is not None and not self.is_latest(request_id):
            logger.warning(
                "Discarding stale pagination response",
                extra={
                    "request_id": request_id,
                    "latest_request_id": self._latest_request_id,
                    "page": envelope.page,
                },
            )
            return False

        self._envelope = envelope
        self._page_index = envelope.page - 1
        self._page_size = envelope.limit

        logger.debug(
            "Pagination synchronized",
            extra={"page": envelope.page, "pages": envelope.pages, "total": envelope.total},
        )
        return True

    def on_user_set_page(self, new_page_index: int) -> PageRequest | None:
        """
        Move the cursor and request the matching page.

        The cursor is updated immediately; the next applied server
        response wins if the catalog answers with a different page.
        Negative indexes are clamped to the first page; upper bounds are
        left to the catalog.

        Returns:
            The request to fetch, or None when there is only one page
        """
        if not self.can_paginate:
            logger.debug(
                "Ignoring page change on single-page listing",
                extra={"page_index": new_page_index, "pages": self._envelope.pages},
            )
            return None

        self._page_index = max(new_page_index, 0)
        return self._issue(self._page_index + 1)

    def on_filter_change(self, new_filters: ProductFilters) -> PageRequest:
        """
        Merge new filters and restart from the first page.

        Raises:
            FilterError: If the merged filters are invalid; the state
                is left unchanged
        """
        merged = self._filters.merge(new_filters).without_pagination()

        if new_filters.limit:
            self._page_size = new_filters.limit
        self._filters = merged
        self._page_index = 0

        logger.info(
            "Filters changed, resetting to first page",
            extra={"filters": self._filters.to_query_params()},
        )
        return self._issue(DEFAULT_PAGE)

    def reset_filters(self) -> PageRequest:
        """Restore the initial filters and restart from the first page."""
        self._filters = self._default_filters
        self._page_index = 0
        return self._issue(DEFAULT_PAGE)

    def rollback_cursor(self) -> None:
        """Point the cursor back at the last applied envelope after a failed fetch."""
        self._page_index = self._envelope.page - 1

    def _issue(self, page: int) -> PageRequest:
        request_id = next(self._request_ids)
        self._latest_request_id = request_id
        return PageRequest(
            request_id=request_id,
            page=page,
            limit=self._page_size,
            filters=self._filters,
        )
