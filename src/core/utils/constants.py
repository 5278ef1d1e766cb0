"""Global constants used throughout the catalog core.

This module centralizes error codes, tunable limits, and environment
variable names shared across modules.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_INVALID_FILTER = "INVALID_FILTER"
ERROR_CODE_INVALID_SELECTION = "INVALID_SELECTION"
ERROR_CODE_INVALID_PAGINATION = "INVALID_PAGINATION"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"

# Catalog Provider Errors
ERROR_CODE_FETCH_FAILED = "FETCH_FAILED"
ERROR_CODE_FETCH_TIMEOUT = "FETCH_TIMEOUT"
ERROR_CODE_INVALID_PAYLOAD = "INVALID_PAYLOAD"

# ============================================================================
# Selection (featured / latest)
# ============================================================================

POOL_SIZE: Final[int] = 20
GUARANTEED_FRACTION: Final[float] = 0.3

SHOWCASE_MIN_COUNT: Final[int] = 4
SHOWCASE_MAX_COUNT: Final[int] = 8

FEATURED_PICK_MIN: Final[int] = 4
FEATURED_PICK_MAX: Final[int] = 8

# Server-side sort hints used to prime the showcases
SORT_POPULAR = "popular"
SORT_NEWEST = "newest"

# ============================================================================
# Pagination Constraints
# ============================================================================

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MIN_LIMIT = 1
MAX_LIMIT = 100

# ============================================================================
# Search
# ============================================================================

SEARCH_DEBOUNCE_SECONDS: Final[float] = 0.3
SEARCH_PAGE_SIZE = 5
SEARCH_SORT_BY = "name"
SEARCH_SORT_ORDER = "asc"

SEARCH_CACHE_MAX_ENTRIES = 100
SEARCH_CACHE_TTL_SECONDS = 300.0

# ============================================================================
# Catalog API
# ============================================================================

DEFAULT_CATALOG_API_URL = "http://localhost:3232/api"
DEFAULT_CATALOG_API_TIMEOUT = 10.0
DEFAULT_CONTENT_TYPE = "application/json"

PRODUCTS_PATH = "/products"
PRODUCT_COLLECTION_PATH = "/products/collection/{collection}"
PRODUCT_CATEGORY_PATH = "/products/category/{category}"
PRODUCT_DETAIL_PATH = "/products/{item_id}"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_CATALOG_API_URL = "CATALOG_API_URL"
ENV_CATALOG_API_TIMEOUT = "CATALOG_API_TIMEOUT"
ENV_CATALOG_API_TOKEN = "CATALOG_API_TOKEN"
