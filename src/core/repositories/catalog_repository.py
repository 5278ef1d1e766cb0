"""Abstract contract for catalog data access."""

from abc import ABC, abstractmethod

from core.models.catalog import CatalogItem, CatalogPage
from core.models.filters import ProductFilters


class CatalogProvider(ABC):
    """Contract for reading products from the catalog backend.

    Implementations could be a REST API, a local fixture, a cache, etc.
    Consumer services depend on this interface, not the implementation.
    """

    @abstractmethod
    def fetch_items(self, filters: ProductFilters) -> CatalogPage:
        """Fetch one page of products.

        Args:
            filters: Listing filters including page and limit

        Returns:
            Items and the authoritative pagination envelope

        Raises:
            FetchFailureError: If the catalog cannot be reached or
                answers with an error
        """

    @abstractmethod
    def fetch_collection(
        self,
        collection: str,
        *,
        page: int | None = None,
        limit: int | None = None,
    ) -> CatalogPage:
        """Fetch one page of products belonging to a collection.

        Raises:
            ValidationError: If page or limit is out of range
            FetchFailureError: If the fetch fails
        """

    @abstractmethod
    def fetch_category(self, category: str, filters: ProductFilters) -> CatalogPage:
        """Fetch one page of products in a category.

        Only page, limit and sorting filters are honoured.

        Raises:
            FetchFailureError: If the fetch fails
        """

    @abstractmethod
    def fetch_item(self, item_id: str) -> CatalogItem:
        """Fetch a single product.

        Raises:
            NotFoundError: If the product does not exist
            FetchFailureError: If the fetch fails
        """
