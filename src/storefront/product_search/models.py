"""
Pydantic models for product search requests.
"""

from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

from core.models.filters import ProductFilters
from core.utils.constants import (
    DEFAULT_PAGE,
    SEARCH_PAGE_SIZE,
    SEARCH_SORT_BY,
    SEARCH_SORT_ORDER,
)


class SearchRequest(BaseModel):
    """
    Validation model for a product search.

    Searches always start on the first page with a small page size,
    sorted by name, unless the extra filters say otherwise.
    """

    model_config = ConfigDict(frozen=True)

    term: str = Field(..., max_length=200, description="Text typed by the user")
    filters: ProductFilters = Field(
        default_factory=ProductFilters,
        description="Extra filters layered over the search defaults",
    )

    @property
    def is_blank(self) -> bool:
        return not self.term.strip()

    def cache_key(self) -> str:
        """Exact query string, plus any extra filters in a stable order."""
        extra = self.filters.to_query_params()
        if not extra:
            return self.term
        return f"{self.term}?{urlencode(sorted(extra.items()))}"

    def to_filters(self) -> ProductFilters:
        defaults = ProductFilters(
            page=DEFAULT_PAGE,
            limit=SEARCH_PAGE_SIZE,
            sort_by=SEARCH_SORT_BY,
            sort_order=SEARCH_SORT_ORDER,
        )
        return defaults.merge(ProductFilters(name=self.term.strip())).merge(self.filters)
