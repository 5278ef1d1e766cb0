"""
Pytest configuration and fixtures for catalog core tests.
Provides item factories, a seeded random source, a fake catalog
provider and a fake HTTP session.
"""

import random
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
import requests

from core.models.catalog import CatalogItem, CatalogPage
from core.models.errors import StorefrontError
from core.models.filters import ProductFilters
from core.pagination.page_pagination import PagePagination
from core.repositories.catalog_repository import CatalogProvider


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def make_item() -> Callable[..., CatalogItem]:
    """
    Helper to build a catalog item.

    Usage:
        item = make_item("p1", created_at="2024-01-01", sales=3)
    """

    def _make(
        item_id: str,
        *,
        created_at: str | None = None,
        sales: int | None = None,
        **extra: Any,
    ) -> CatalogItem:
        return CatalogItem(
            id=item_id,
            name=extra.pop("name", f"Product {item_id}"),
            created_at=created_at,
            popularity_score=sales,
            **extra,
        )

    return _make


@pytest.fixture
def make_items(make_item) -> Callable[[int], list[CatalogItem]]:
    """
    Helper to build ``n`` items, newest and best selling first.

    Item ``p0`` has the latest date and the most sales.
    """

    base = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _make(n: int) -> list[CatalogItem]:
        return [
            make_item(
                f"p{i}",
                created_at=(base + timedelta(days=n - i)).isoformat(),
                sales=(n - i) * 10,
            )
            for i in range(n)
        ]

    return _make


class FakeCatalogProvider(CatalogProvider):
    """In-memory provider serving a fixed product list page by page.

    Queue errors with ``fail_next`` to simulate failures.
    """

    def __init__(self, items: list[CatalogItem] | None = None) -> None:
        self.items: list[CatalogItem] = list(items or [])
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self._errors: list[StorefrontError] = []

    def fail_next(self, error: StorefrontError) -> None:
        self._errors.append(error)

    def _raise_if_queued(self) -> None:
        if self._errors:
            raise self._errors.pop(0)

    def _page(self, items: list[CatalogItem], page: int | None, limit: int | None) -> CatalogPage:
        page_items, envelope = PagePagination.paginate(items, page or 1, limit or 10)
        return CatalogPage(data=page_items, pagination=envelope)

    def fetch_items(self, filters: ProductFilters) -> CatalogPage:
        self.calls.append(("fetch_items", filters.to_query_params()))
        self._raise_if_queued()

        items = self.items
        if filters.name:
            needle = filters.name.lower()
            items = [item for item in items if needle in (item.name or "").lower()]
        if filters.category:
            items = [item for item in items if item.category == filters.category]
        return self._page(items, filters.page, filters.limit)

    def fetch_collection(self, collection, *, page=None, limit=None) -> CatalogPage:
        self.calls.append(("fetch_collection", {"collection": collection, "page": page, "limit": limit}))
        self._raise_if_queued()
        items = [item for item in self.items if item.collection == collection]
        return self._page(items, page, limit)

    def fetch_category(self, category, filters) -> CatalogPage:
        self.calls.append(("fetch_category", {"category": category}))
        self._raise_if_queued()
        items = [item for item in self.items if item.category == category]
        return self._page(items, filters.page, filters.limit)

    def fetch_item(self, item_id) -> CatalogItem:
        self.calls.append(("fetch_item", {"item_id": item_id}))
        self._raise_if_queued()
        return next(item for item in self.items if item.id == item_id)


@pytest.fixture
def make_provider() -> Callable[[list[CatalogItem]], FakeCatalogProvider]:
    return FakeCatalogProvider


@pytest.fixture
def fake_provider(make_items) -> FakeCatalogProvider:
    return FakeCatalogProvider(make_items(25))


@pytest.fixture
def empty_provider() -> FakeCatalogProvider:
    return FakeCatalogProvider([])


class FakeResponse:
    """Stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, body: Any = None, *, invalid_json: bool = False):
        self.status_code = status_code
        self._body = body
        self._invalid_json = invalid_json

    def json(self) -> Any:
        if self._invalid_json:
            raise requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)
        return self._body

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Records GET calls and replays queued responses or exceptions."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self._queue: list[FakeResponse | Exception] = []

    def queue(self, outcome: FakeResponse | Exception) -> None:
        self._queue.append(outcome)

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        outcome = self._queue.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def fake_response() -> type[FakeResponse]:
    return FakeResponse


@pytest.fixture
def listing_payload(make_items) -> Callable[..., dict[str, Any]]:
    """
    Helper to build a catalog listing JSON body.

    Usage:
        body = listing_payload(items=3, page=1, limit=10, total=3)
    """

    def _build(*, items: int = 3, page: int = 1, limit: int = 10, total: int | None = None) -> dict[str, Any]:
        data = [item.to_wire() for item in make_items(items)]
        envelope = PagePagination.build_envelope(
            page=page,
            limit=limit,
            total=total if total is not None else items,
        )
        return {"status": "success", "data": data, "pagination": envelope.to_wire()}

    return _build
