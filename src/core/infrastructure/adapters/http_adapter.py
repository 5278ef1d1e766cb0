"""Thin HTTP adapter wrapping a requests session."""

import os
from typing import Any, Protocol

import requests

from core.utils.constants import (
    DEFAULT_CATALOG_API_TIMEOUT,
    DEFAULT_CATALOG_API_URL,
    DEFAULT_CONTENT_TYPE,
    ENV_CATALOG_API_TIMEOUT,
    ENV_CATALOG_API_TOKEN,
    ENV_CATALOG_API_URL,
)

JsonDict = dict[str, Any]


class HttpResponse(Protocol):
    """Minimal response protocol."""

    status_code: int

    def json(self) -> Any: ...
    def raise_for_status(self) -> None: ...


class HttpSession(Protocol):
    """Minimal session protocol."""

    def get(self, url: str, **kwargs: Any) -> HttpResponse: ...


class HttpAdapterProtocol(Protocol):
    """Protocol for JSON HTTP adapters."""

    def get_json(self, path: str, *, params: dict[str, Any] | None = None) -> Any: ...


class RequestsHttpAdapter:
    """Low-level HTTP operations (mechanical, no error handling).

    This adapter:
    - Wraps a requests session with base URL, headers and timeout
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        token: str | None = None,
        session: HttpSession | None = None,
    ) -> None:
        """Initialize from arguments, falling back to the environment."""
        resolved_url = base_url or os.getenv(ENV_CATALOG_API_URL) or DEFAULT_CATALOG_API_URL
        self.base_url = resolved_url.rstrip("/")

        if timeout is None:
            raw_timeout = os.getenv(ENV_CATALOG_API_TIMEOUT)
            try:
                timeout = float(raw_timeout) if raw_timeout else DEFAULT_CATALOG_API_TIMEOUT
            except ValueError as exc:
                raise RuntimeError(
                    f"{ENV_CATALOG_API_TIMEOUT} must be a number, got '{raw_timeout}'"
                ) from exc
        self.timeout = timeout

        self.headers: dict[str, str] = {
            "Content-Type": DEFAULT_CONTENT_TYPE,
            "Accept": DEFAULT_CONTENT_TYPE,
        }
        token = token or os.getenv(ENV_CATALOG_API_TOKEN)
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

        self._session: HttpSession = session or requests.Session()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def get_json(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        """GET a path and decode the JSON body.

        Raises requests exceptions - caught by domain implementation.
        """
        response = self._session.get(
            self.url_for(path),
            params=params,
            headers=self.headers,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()
