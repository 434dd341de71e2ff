"""MediaWiki Action API client for Wikisource sites."""

import logging
from typing import Any

from .client import Client
from .exceptions import APIError, WikisourceApiError

logger = logging.getLogger(__name__)


class WikisourceClient(Client):
    """Client for a single Wikisource site.

    Queries the MediaWiki Action API for page metadata and namespace
    information, and fetches rendered page HTML. Implements the
    ``IndexSite`` protocol used by ``IndexPage``.

    Example:
        config = {"base_url": "https://en.wikisource.org"}
        with WikisourceClient(config) as client:
            pages = client.query_page_info("Index:Foo.djvu")
    """

    DEFAULT_API_PATH = "/w/api.php"
    NS_NAME_INDEX = "Index"

    def __init__(self, config: dict):
        super().__init__(config)
        self._namespaces: dict[str, int] | None = None

    @classmethod
    def for_language(cls, lang: str, **config) -> "WikisourceClient":
        """Create a client for the Wikisource of the given language code."""
        return cls({"base_url": f"https://{lang}.wikisource.org", **config})

    @property
    def api_path(self) -> str:
        return str(self._config.get("api_path", self.DEFAULT_API_PATH))

    def api_request(self, params: dict[str, Any]) -> dict[str, Any]:
        """Send a GET request to the Action API and return the decoded body.

        Args:
            params: Query parameters; format parameters are added

        Returns:
            The decoded JSON response

        Raises:
            APIError: If the body is not a JSON object, or reports an error
        """
        query = {"format": "json", "formatversion": 2, **params}
        response = self.get(self.api_path, params=query)
        try:
            data = response.json()
        except ValueError as e:
            raise APIError(
                f"Invalid JSON from {self.api_path}: {e}",
                status_code=response.status_code,
            ) from e

        if not isinstance(data, dict):
            raise APIError(
                f"Unexpected response from {self.api_path}",
                status_code=response.status_code,
            )

        if "error" in data:
            error = data["error"]
            raise APIError(
                f"API error {error.get('code')}: {error.get('info')}",
                status_code=response.status_code,
            )

        return data

    def query_page_info(self, titles: str) -> list[dict[str, Any]]:
        """Fetch info and URL metadata for the given page title(s).

        Args:
            titles: One title, or several separated by ``|``

        Returns:
            Page records with at least 'pageid', 'ns', 'title' and
            'canonicalurl'. Missing and invalid titles are left out.
        """
        data = self.api_request(
            {"action": "query", "titles": titles, "prop": "info", "inprop": "url"}
        )
        pages = data.get("query", {}).get("pages", [])

        found = []
        for page in pages:
            if page.get("missing") or page.get("invalid"):
                logger.debug(f"No page found for title {page.get('title')}")
                continue
            found.append(page)

        return found

    def get_namespace_id(self, name: str) -> int:
        """Get the ID of a namespace by its canonical or local name.

        Namespaces are loaded once per client.

        Raises:
            WikisourceApiError: If the site has no such namespace
        """
        if self._namespaces is None:
            self._namespaces = self._load_namespaces()

        if name not in self._namespaces:
            raise WikisourceApiError(f"Namespace not found on {self.base_url}: {name}")

        return self._namespaces[name]

    def _load_namespaces(self) -> dict[str, int]:
        data = self.api_request(
            {"action": "query", "meta": "siteinfo", "siprop": "namespaces"}
        )
        namespaces: dict[str, int] = {}
        for ns in data.get("query", {}).get("namespaces", {}).values():
            for key in ("canonical", "name"):
                if ns.get(key):
                    namespaces.setdefault(ns[key], int(ns["id"]))

        logger.debug(f"Loaded {len(namespaces)} namespace names from {self.base_url}")
        return namespaces

    def fetch_html(self, url: str) -> str:
        """Fetch the rendered HTML of a page.

        Args:
            url: Absolute URL of the page

        Returns:
            The response body decoded as text
        """
        logger.info(f"Fetching {url}")
        response = self.get(url)
        return response.text
