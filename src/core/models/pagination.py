"""Pagination models."""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    model_validator,
)

from core.models.filters import ProductFilters
from core.utils.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE


class PaginationEnvelope(BaseModel):
    """Server-reported pagination metadata for a listing response.

    Serialized with ``to_wire()`` the shape is exactly
    ``{page, limit, total, pages, hasNextPage, hasPrevPage}``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    page: StrictInt = Field(DEFAULT_PAGE, ge=1, description="Current page (1-based)")
    limit: StrictInt = Field(DEFAULT_PAGE_SIZE, ge=1, description="Items per page")
    total: StrictInt = Field(0, ge=0, description="Total items matching the query")
    pages: StrictInt = Field(0, ge=0, description="Total number of pages")
    has_next_page: StrictBool = Field(
        False, alias="hasNextPage", description="Whether a later page exists"
    )
    has_prev_page: StrictBool = Field(
        False, alias="hasPrevPage", description="Whether an earlier page exists"
    )

    @model_validator(mode="before")
    @classmethod
    def derive_navigation_flags(cls, data: Any) -> Any:
        """Fill missing hasNextPage/hasPrevPage from page and pages.

        Some endpoints (user listings) only report page counts.
        """
        if not isinstance(data, dict):
            return data

        page = data.get("page", DEFAULT_PAGE)
        pages = data.get("pages", 0)
        if not isinstance(page, int) or not isinstance(pages, int):
            return data

        derived = dict(data)
        if "hasNextPage" not in derived and "has_next_page" not in derived:
            derived["hasNextPage"] = page < pages
        if "hasPrevPage" not in derived and "has_prev_page" not in derived:
            derived["hasPrevPage"] = page > 1
        return derived

    @classmethod
    def empty(cls, limit: int = DEFAULT_PAGE_SIZE) -> "PaginationEnvelope":
        """Envelope used before the first successful fetch."""
        return cls(
            page=DEFAULT_PAGE,
            limit=limit,
            total=0,
            pages=0,
            has_next_page=False,
            has_prev_page=False,
        )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class PaginationState(BaseModel):
    """Snapshot of the local cursor next to the authoritative envelope."""

    model_config = ConfigDict(frozen=True)

    page_index: StrictInt = Field(0, ge=0, description="Local cursor (0-based)")
    page_size: StrictInt = Field(DEFAULT_PAGE_SIZE, ge=1)
    envelope: PaginationEnvelope = Field(default_factory=PaginationEnvelope.empty)


class PageRequest(BaseModel):
    """A fetch issued by the pagination synchronizer."""

    model_config = ConfigDict(frozen=True)

    request_id: StrictInt = Field(..., ge=1, description="Monotonic request id")
    page: StrictInt = Field(..., description="Requested page (1-based)")
    limit: StrictInt = Field(..., ge=1)
    filters: ProductFilters = Field(default_factory=ProductFilters)

    def to_filters(self) -> ProductFilters:
        """Filters with this request's page and limit applied."""
        return self.filters.model_copy(update={"page": self.page, "limit": self.limit})
