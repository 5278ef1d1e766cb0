"""
Business logic for the paginated, filterable product listing.
"""

from aws_lambda_powertools import Logger
from pydantic import ValidationError as PydanticValidationError

from core.models.catalog import CatalogItem, CatalogPage
from core.models.errors import FilterError, StorefrontError
from core.models.filters import FilterFormValues, ProductFilters
from core.models.pagination import PageRequest, PaginationEnvelope
from core.pagination.page_window import visible_pages
from core.pagination.synchronizer import PaginationSynchronizer
from core.repositories.catalog_repository import CatalogProvider
from core.utils.constants import DEFAULT_PAGE_SIZE
from core.utils.decorators import surface_fetch_errors
from core.utils.validators import sanitize_validation_errors

logger = Logger(UTC=True)


class ProductListingService:
    """Application service behind a product grid.

    This service coordinates:
    - Issuing page requests through the pagination synchronizer
    - Fetching pages from the catalog provider
    - Applying only the response to the latest request

    Failures are surfaced through ``error``; items and pagination keep
    their previous values.
    """

    def __init__(
        self,
        provider: CatalogProvider,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        filters: ProductFilters | None = None,
        collection: str | None = None,
        synchronizer: PaginationSynchronizer | None = None,
    ) -> None:
        """Initialize the listing; ``collection`` scopes it to one collection."""
        self._provider = provider
        self._collection = collection
        self._sync = synchronizer or PaginationSynchronizer(
            page_size=page_size,
            filters=filters,
        )

        self.items: list[CatalogItem] = []
        self.loading: bool = False
        self.error: str | None = None

    @property
    def pagination(self) -> PaginationEnvelope:
        return self._sync.envelope

    @property
    def page_index(self) -> int:
        return self._sync.page_index

    @property
    def filters(self) -> ProductFilters:
        return self._sync.filters

    @property
    def can_paginate(self) -> bool:
        return self._sync.can_paginate

    def page_numbers(self) -> list[int | None]:
        """Page buttons to render; ``None`` marks an ellipsis."""
        if not self.can_paginate:
            return []
        return visible_pages(self.pagination.page, self.pagination.pages)

    @surface_fetch_errors
    def load(self) -> bool:
        """Fetch the page the cursor points at."""
        return self._execute(self._sync.initial_request())

    @surface_fetch_errors
    def set_page(self, page_index: int) -> bool:
        """Navigate to a zero-based page index.

        Returns False without fetching on single-page listings.
        """
        request = self._sync.on_user_set_page(page_index)
        if request is None:
            return False
        return self._execute(request)

    @surface_fetch_errors
    def change_filters(self, filters: ProductFilters | FilterFormValues) -> bool:
        """Apply new filters and reload from the first page."""
        if isinstance(filters, FilterFormValues):
            filters = self._form_to_filters(filters)
        return self._execute(self._sync.on_filter_change(filters))

    @surface_fetch_errors
    def reset_filters(self) -> bool:
        return self._execute(self._sync.reset_filters())

    def apply(self, request: PageRequest, page: CatalogPage) -> bool:
        """Apply a fetched page if it answers the latest request.

        Returns:
            True if the page replaced the current items
        """
        if not self._sync.on_server_response(page.pagination, request_id=request.request_id):
            return False

        self.items = page.data
        logger.info(
            "Listing page applied",
            extra={
                "request_id": request.request_id,
                "page": page.pagination.page,
                "count": len(page.data),
            },
        )
        return True

    def clear_error(self) -> None:
        self.error = None

    def _execute(self, request: PageRequest) -> bool:
        try:
            page = self._fetch(request)
        except StorefrontError:
            self._sync.rollback_cursor()
            raise
        return self.apply(request, page)

    def _fetch(self, request: PageRequest) -> CatalogPage:
        if self._collection:
            return self._provider.fetch_collection(
                self._collection,
                page=request.page,
                limit=request.limit,
            )
        return self._provider.fetch_items(request.to_filters())

    @staticmethod
    def _form_to_filters(form: FilterFormValues) -> ProductFilters:
        try:
            return form.to_api()
        except PydanticValidationError as exc:
            raise FilterError(
                message="Invalid filter values",
                details={"errors": sanitize_validation_errors(exc.errors())},
            ) from exc
