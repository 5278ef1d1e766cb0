"""REST-backed implementation of CatalogProvider."""

from typing import Any
from urllib.parse import quote

import requests
from aws_lambda_powertools import Logger
from pydantic import ValidationError as PydanticValidationError

from core.infrastructure.adapters.http_adapter import HttpAdapterProtocol, RequestsHttpAdapter
from core.models.catalog import CatalogItem, CatalogPage
from core.models.errors import FetchFailureError, NotFoundError, ValidationError
from core.models.filters import ProductFilters
from core.models.pagination import PaginationEnvelope
from core.pagination.page_pagination import PagePagination
from core.repositories.catalog_repository import CatalogProvider
from core.utils.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    ERROR_CODE_FETCH_TIMEOUT,
    ERROR_CODE_INVALID_PAGINATION,
    ERROR_CODE_INVALID_PAYLOAD,
    ERROR_CODE_PRODUCT_NOT_FOUND,
    PRODUCT_CATEGORY_PATH,
    PRODUCT_COLLECTION_PATH,
    PRODUCT_DETAIL_PATH,
    PRODUCTS_PATH,
)
from core.utils.validators import sanitize_validation_errors

JsonDict = dict[str, Any]

logger = Logger(UTC=True)


class CatalogApi(CatalogProvider):
    """Catalog provider talking to the storefront REST backend.

    All requests errors are caught and translated into
    domain-specific errors with stable semantics. No retries.
    """

    def __init__(self, adapter: HttpAdapterProtocol | None = None) -> None:
        """Initialize with an HTTP adapter."""
        self._http: HttpAdapterProtocol = adapter or RequestsHttpAdapter()

    def fetch_items(self, filters: ProductFilters) -> CatalogPage:
        params = filters.to_query_params()
        logger.debug("Fetching products", extra={"params": params})

        payload = self._get(PRODUCTS_PATH, params=params)
        page = self._parse_page(payload, details={"params": params})

        logger.info(
            "Products fetched",
            extra={"count": len(page.data), "page": page.pagination.page},
        )
        return page

    def fetch_collection(
        self,
        collection: str,
        *,
        page: int | None = None,
        limit: int | None = None,
    ) -> CatalogPage:
        is_valid, error_message = PagePagination.validate(
            page if page is not None else DEFAULT_PAGE,
            limit if limit is not None else DEFAULT_PAGE_SIZE,
        )
        if not is_valid:
            logger.error(
                "Invalid pagination parameters",
                extra={"page": page, "limit": limit, "error": error_message},
            )
            raise ValidationError(
                message=error_message,
                error_code=ERROR_CODE_INVALID_PAGINATION,
                details={"page": page, "limit": limit},
            )

        path = PRODUCT_COLLECTION_PATH.format(collection=quote(collection, safe=""))
        params = {
            key: value
            for key, value in (("page", page), ("limit", limit))
            if value is not None
        }
        logger.debug(
            "Fetching collection",
            extra={"collection": collection, "params": params},
        )

        payload = self._get(path, params=params)
        return self._parse_page(payload, details={"collection": collection})

    def fetch_category(self, category: str, filters: ProductFilters) -> CatalogPage:
        path = PRODUCT_CATEGORY_PATH.format(category=quote(category, safe=""))
        scoped = ProductFilters(
            page=filters.page,
            limit=filters.limit,
            sort_by=filters.sort_by,
            sort_order=filters.sort_order,
        )
        params = scoped.to_query_params()
        logger.debug("Fetching category", extra={"category": category, "params": params})

        payload = self._get(path, params=params)
        return self._parse_page(payload, details={"category": category})

    def fetch_item(self, item_id: str) -> CatalogItem:
        if not item_id or not item_id.strip():
            raise ValueError("item_id must be a non-empty string")

        path = PRODUCT_DETAIL_PATH.format(item_id=quote(item_id.strip(), safe=""))
        logger.debug("Fetching product", extra={"item_id": item_id})

        try:
            payload = self._get(path)
        except FetchFailureError as exc:
            if exc.details.get("status_code") == 404:
                raise NotFoundError(
                    message="Product not found",
                    error_code=ERROR_CODE_PRODUCT_NOT_FOUND,
                    details={"item_id": item_id},
                ) from exc
            raise

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise FetchFailureError(
                message="Invalid product payload",
                error_code=ERROR_CODE_INVALID_PAYLOAD,
                details={"item_id": item_id},
            )

        try:
            return CatalogItem.model_validate(data)
        except PydanticValidationError as exc:
            raise FetchFailureError(
                message="Invalid product payload",
                error_code=ERROR_CODE_INVALID_PAYLOAD,
                details={
                    "item_id": item_id,
                    "errors": sanitize_validation_errors(exc.errors()),
                },
            ) from exc

    def _get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        """Issue a GET and translate transport errors."""
        try:
            return self._http.get_json(path, params=params)

        except requests.Timeout as exc:
            logger.error("Catalog request timed out", extra={"path": path})
            raise FetchFailureError(
                message="The catalog took too long to respond",
                error_code=ERROR_CODE_FETCH_TIMEOUT,
                details={"path": path},
            ) from exc

        except requests.HTTPError as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            logger.error(
                "Catalog request failed",
                extra={"path": path, "status_code": status_code},
            )
            raise FetchFailureError(
                message=self._server_message(exc) or str(exc),
                details={"path": path, "status_code": status_code},
            ) from exc

        except ValueError as exc:
            logger.error("Catalog returned invalid JSON", extra={"path": path})
            raise FetchFailureError(
                message="The catalog returned an invalid response",
                error_code=ERROR_CODE_INVALID_PAYLOAD,
                details={"path": path},
            ) from exc

        except requests.RequestException as exc:
            logger.error(
                "Catalog request error",
                extra={"path": path, "error_type": type(exc).__name__},
            )
            raise FetchFailureError(
                message=str(exc) or "Unable to reach the catalog",
                details={"path": path},
            ) from exc

    @staticmethod
    def _server_message(exc: requests.HTTPError) -> str | None:
        """Prefer the backend's own error message when it sent one."""
        if exc.response is None:
            return None
        try:
            body = exc.response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            message = body.get("message")
            if isinstance(message, str) and message.strip():
                return message
        return None

    @staticmethod
    def _parse_page(payload: Any, *, details: JsonDict) -> CatalogPage:
        """Build a CatalogPage, skipping malformed items."""
        if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
            raise FetchFailureError(
                message="Invalid catalog listing payload",
                error_code=ERROR_CODE_INVALID_PAYLOAD,
                details=details,
            )

        try:
            envelope = PaginationEnvelope.model_validate(payload.get("pagination"))
        except PydanticValidationError as exc:
            raise FetchFailureError(
                message="Invalid pagination metadata",
                error_code=ERROR_CODE_INVALID_PAYLOAD,
                details={**details, "errors": sanitize_validation_errors(exc.errors())},
            ) from exc

        items: list[CatalogItem] = []
        for raw in payload["data"]:
            try:
                items.append(CatalogItem.model_validate(raw))
            except PydanticValidationError as exc:
                logger.warning("Skipping malformed item", exc_info=exc)

        return CatalogPage(data=items, pagination=envelope)
