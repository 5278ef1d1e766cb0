import pytest
import requests

from core.infrastructure.adapters.http_adapter import RequestsHttpAdapter
from core.utils.constants import (
    ENV_CATALOG_API_TIMEOUT,
    ENV_CATALOG_API_TOKEN,
    ENV_CATALOG_API_URL,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (ENV_CATALOG_API_URL, ENV_CATALOG_API_TIMEOUT, ENV_CATALOG_API_TOKEN):
        monkeypatch.delenv(name, raising=False)


class TestRequestsHttpAdapter:
    def test_defaults(self, fake_session):
        adapter = RequestsHttpAdapter(session=fake_session)

        assert adapter.base_url == "http://localhost:3232/api"
        assert adapter.timeout == 10.0
        assert adapter.headers == {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def test_reads_environment(self, monkeypatch, fake_session):
        monkeypatch.setenv(ENV_CATALOG_API_URL, "https://shop.example.com/api/")
        monkeypatch.setenv(ENV_CATALOG_API_TIMEOUT, "2.5")
        monkeypatch.setenv(ENV_CATALOG_API_TOKEN, "secret")

        adapter = RequestsHttpAdapter(session=fake_session)

        assert adapter.base_url == "https://shop.example.com/api"
        assert adapter.timeout == 2.5
        assert adapter.headers["Authorization"] == "Bearer secret"

    def test_arguments_override_environment(self, monkeypatch, fake_session):
        monkeypatch.setenv(ENV_CATALOG_API_URL, "https://env.example.com")

        adapter = RequestsHttpAdapter(
            "https://arg.example.com",
            timeout=1,
            token="tok",
            session=fake_session,
        )

        assert adapter.base_url == "https://arg.example.com"
        assert adapter.timeout == 1
        assert adapter.headers["Authorization"] == "Bearer tok"

    def test_invalid_timeout_env(self, monkeypatch):
        monkeypatch.setenv(ENV_CATALOG_API_TIMEOUT, "soon")

        with pytest.raises(RuntimeError):
            RequestsHttpAdapter()

    def test_default_session_is_requests_session(self):
        adapter = RequestsHttpAdapter()

        assert isinstance(adapter._session, requests.Session)

    def test_url_for_joins_paths(self, fake_session):
        adapter = RequestsHttpAdapter("http://api.test/", session=fake_session)

        assert adapter.url_for("/products") == "http://api.test/products"
        assert adapter.url_for("products/1") == "http://api.test/products/1"

    def test_get_json_sends_request(self, fake_session, fake_response):
        fake_session.queue(fake_response(200, {"status": "success"}))
        adapter = RequestsHttpAdapter("http://api.test", timeout=3, session=fake_session)

        body = adapter.get_json("/products", params={"page": 1})

        assert body == {"status": "success"}
        call = fake_session.calls[0]
        assert call["url"] == "http://api.test/products"
        assert call["params"] == {"page": 1}
        assert call["timeout"] == 3
        assert call["headers"]["Accept"] == "application/json"

    def test_get_json_lets_http_errors_bubble_up(self, fake_session, fake_response):
        fake_session.queue(fake_response(500, {"message": "boom"}))
        adapter = RequestsHttpAdapter("http://api.test", session=fake_session)

        with pytest.raises(requests.HTTPError):
            adapter.get_json("/products")
