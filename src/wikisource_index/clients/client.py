"""Base client for requests to a wiki."""

import logging

import httpx

from .exceptions import (
    APIError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
)

logger = logging.getLogger(__name__)


class Client:
    """Base class for wiki clients.

    Holds one lazily created httpx.Client per site and maps failed
    requests onto the FetchError hierarchy. Requests are made once;
    a failure is raised to the caller, never retried.

    Config keys:
        base_url (required): Scheme and host of the wiki
        timeout: Request timeout in seconds (default: 30)
        headers: Additional headers, e.g. a User-Agent
    """

    def __init__(self, config: dict):
        if "base_url" not in config:
            raise ValueError("config must include 'base_url'")

        self._config = config
        self._client: httpx.Client | None = None

    @property
    def base_url(self) -> str:
        return str(self._config["base_url"]).rstrip("/")

    @property
    def timeout(self) -> float:
        return float(self._config.get("timeout", 30))

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._config.get("headers", {}))

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
                follow_redirects=True,
            )
        return self._client

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def get(self, path: str, **kwargs) -> httpx.Response:
        """GET a path on the wiki, or an absolute URL.

        Args:
            path: Path relative to base_url, or an absolute URL
            **kwargs: Additional arguments passed to httpx

        Returns:
            The successful response

        Raises:
            ConnectionError: If the request fails in transport or times out
            NotFoundError: For 404 responses
            RateLimitError: For 429 responses
            APIError: For other non-2xx responses
        """
        try:
            response = self.client.request("GET", path, **kwargs)
        except httpx.TransportError as e:
            logger.warning(f"Request to {path} failed: {e}")
            raise ConnectionError(f"Request to {path} failed: {e}") from e

        if response.is_success:
            return response

        status_code = response.status_code
        if status_code == 404:
            raise NotFoundError(f"Resource not found: {response.url}")
        if status_code == 429:
            raise RateLimitError(f"Rate limit exceeded: {response.url}")
        raise APIError(f"API error {status_code}: {response.url}", status_code=status_code)
