"""Tests for the base Client class."""

from unittest.mock import MagicMock

import httpx
import pytest

from wikisource_index.clients import (
    APIError,
    Client,
    ConnectionError,
    FetchError,
    NotFoundError,
    RateLimitError,
)

BASE_URL = "https://en.wikisource.org"
PAGE_URL = f"{BASE_URL}/wiki/Index:Foo.djvu"


def error_response(status_code: int) -> MagicMock:
    response = MagicMock()
    response.is_success = False
    response.status_code = status_code
    response.url = PAGE_URL
    return response


@pytest.fixture
def client():
    """Client with a mocked HTTP client."""
    client = Client({"base_url": BASE_URL})
    client._client = MagicMock()
    return client


class TestClientConfiguration:
    """Tests for Client configuration."""

    def test_requires_base_url(self):
        """Client raises ValueError if base_url is missing."""
        with pytest.raises(ValueError, match="base_url"):
            Client({})

    def test_base_url_from_config(self):
        """Client stores base_url without a trailing slash."""
        client = Client({"base_url": BASE_URL + "/"})

        assert client.base_url == BASE_URL

    def test_default_timeout(self):
        """Client has default timeout of 30 seconds."""
        assert Client({"base_url": BASE_URL}).timeout == 30

    def test_custom_timeout(self):
        """Client accepts custom timeout."""
        assert Client({"base_url": BASE_URL, "timeout": 5}).timeout == 5

    def test_custom_headers(self):
        """Client accepts custom headers."""
        headers = {"User-Agent": "wikisource-index-tests/1.0"}
        client = Client({"base_url": BASE_URL, "headers": headers})

        assert client.headers == headers


class TestClientLifecycle:
    """Tests for Client lifecycle management."""

    def test_lazy_client_initialization(self):
        """httpx.Client is not created until accessed."""
        assert Client({"base_url": BASE_URL})._client is None

    def test_client_initialized_on_access(self):
        """httpx.Client is created with the configured options."""
        client = Client({"base_url": BASE_URL, "timeout": 5})

        http_client = client.client

        assert isinstance(http_client, httpx.Client)
        assert str(http_client.base_url).rstrip("/") == BASE_URL
        assert http_client.follow_redirects

        client.close()

    def test_context_manager_closes_client(self):
        """Context manager closes the httpx client on exit."""
        with Client({"base_url": BASE_URL}) as client:
            _ = client.client
            assert client._client is not None

        assert client._client is None

    def test_close_when_not_initialized(self):
        """Calling close when client not initialized is safe."""
        client = Client({"base_url": BASE_URL})
        client.close()

        assert client._client is None


class TestClientGet:
    """Tests for Client.get()."""

    def test_success_returns_response(self, client):
        """Successful response is returned as-is."""
        response = MagicMock()
        response.is_success = True
        client._client.request.return_value = response

        assert client.get("/w/api.php", params={"action": "query"}) is response
        client._client.request.assert_called_once_with(
            "GET", "/w/api.php", params={"action": "query"}
        )

    def test_passes_absolute_url(self, client):
        """get() passes absolute URLs through to httpx."""
        response = MagicMock()
        response.is_success = True
        client._client.request.return_value = response

        client.get(PAGE_URL)

        client._client.request.assert_called_once_with("GET", PAGE_URL)

    def test_404_raises_not_found_error(self, client):
        """404 response raises NotFoundError."""
        client._client.request.return_value = error_response(404)

        with pytest.raises(NotFoundError) as exc_info:
            client.get(PAGE_URL)

        assert exc_info.value.status_code == 404

    def test_429_raises_rate_limit_error(self, client):
        """429 response raises RateLimitError."""
        client._client.request.return_value = error_response(429)

        with pytest.raises(RateLimitError) as exc_info:
            client.get(PAGE_URL)

        assert exc_info.value.status_code == 429

    def test_503_raises_api_error(self, client):
        """5xx response raises APIError, which is a FetchError."""
        client._client.request.return_value = error_response(503)

        with pytest.raises(FetchError) as exc_info:
            client.get(PAGE_URL)

        assert isinstance(exc_info.value, APIError)
        assert exc_info.value.status_code == 503
        assert client._client.request.call_count == 1

    def test_connect_error_is_not_retried(self, client):
        """A connection failure raises ConnectionError after one request."""
        client._client.request.side_effect = httpx.ConnectError("Connection refused")

        with pytest.raises(ConnectionError, match="Connection refused") as exc_info:
            client.get("/w/api.php")

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert client._client.request.call_count == 1

    def test_timeout_raises_connection_error(self, client):
        """Timeouts are reported as ConnectionError."""
        client._client.request.side_effect = httpx.ReadTimeout("Read timed out")

        with pytest.raises(ConnectionError) as exc_info:
            client.get("/w/api.php")

        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)
        assert client._client.request.call_count == 1

    def test_protocol_error_raises_connection_error(self, client):
        """A dropped connection is reported as ConnectionError."""
        client._client.request.side_effect = httpx.RemoteProtocolError("Server disconnected")

        with pytest.raises(ConnectionError, match="Server disconnected"):
            client.get("/w/api.php")

    def test_transport_error_logged(self, client, caplog):
        """Transport failures are logged at WARNING."""
        client._client.request.side_effect = httpx.ConnectError("Connection refused")

        with pytest.raises(ConnectionError):
            client.get("/w/api.php")

        assert any(
            record.levelname == "WARNING" and "/w/api.php" in record.getMessage()
            for record in caplog.records
        )
