"""
Page-based pagination utilities.
"""

from collections.abc import Sequence
from typing import TypeVar

from core.models.pagination import PaginationEnvelope
from core.utils.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_LIMIT,
    MIN_LIMIT,
)

T = TypeVar("T")


class PagePagination:
    """
    Page-based pagination helper.

    This class encapsulates the arithmetic behind the catalog's
    pagination envelope: 1-based page numbers, a page size and the
    derived page count and navigation flags.

    Typical usage:
    1. Validate page and limit parameters
    2. Slice a list of items for the requested page
    3. Return the page along with its envelope
    """

    @staticmethod
    def paginate(
        items: Sequence[T],
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> tuple[list[T], PaginationEnvelope]:
        """
        Slice a list of items for one page.

        Args:
            items: Full list of items to paginate
            page: Requested page (1-based)
            limit: Maximum number of items on the page

        Returns:
            A tuple containing:
            - page_items: Items for the requested page
            - envelope: Pagination metadata for that page

        Example:
            items = [1, 2, 3, 4, 5]
            page = 2
            limit = 2

            → ([3, 4], {page: 2, limit: 2, total: 5, pages: 3, ...})
        """
        offset = (page - 1) * limit
        page_items = list(items[offset : offset + limit])
        envelope = PagePagination.build_envelope(
            page=page,
            limit=limit,
            total=len(items),
        )
        return page_items, envelope

    @staticmethod
    def validate(page: int, limit: int) -> tuple[bool, str]:
        """
        Validate pagination parameters.

        Validation rules:
        - page must be 1 or greater
        - limit must be within [MIN_LIMIT, MAX_LIMIT]

        Returns:
            A tuple of:
            - is_valid: Whether parameters are valid
            - error_message: Human-readable error message if invalid
        """
        if page < DEFAULT_PAGE:
            return False, f"Page must be at least {DEFAULT_PAGE}"

        if limit < MIN_LIMIT:
            return False, f"Limit must be at least {MIN_LIMIT}"

        if limit > MAX_LIMIT:
            return False, f"Limit must not exceed {MAX_LIMIT}"

        return True, ""

    @staticmethod
    def total_pages(total: int, limit: int) -> int:
        """Number of pages needed for ``total`` items, rounded up."""
        if limit <= 0:
            return 0
        return (total + limit - 1) // limit

    @staticmethod
    def build_envelope(
        *,
        page: int,
        limit: int,
        total: int,
    ) -> PaginationEnvelope:
        """
        Generate the pagination envelope for a page.

        Notes:
            - Page numbering starts at 1
            - pages is rounded up
        """
        pages = PagePagination.total_pages(total, limit)

        return PaginationEnvelope(
            page=page,
            limit=limit,
            total=total,
            pages=pages,
            has_next_page=page < pages,
            has_prev_page=page > 1,
        )
