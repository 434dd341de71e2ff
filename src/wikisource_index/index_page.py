"""Index pages: the core of the proofreading process for a work on Wikisource."""

import hashlib
import logging
import re
from typing import Any, Protocol
from urllib.parse import unquote

from lxml import html
from pydantic import ValidationError as PydanticValidationError

from schemas.child_page import ChildPage
from schemas.index_page_info import IndexPageInfo

from .cache import CacheStore, default_cache
from .clients.exceptions import (
    InvalidUrlError,
    NotAnIndexPageError,
    NotLoadedError,
    PageNotFoundError,
    ValidationError,
    WikisourceApiError,
)
from .pagelist import PageList, extract_base_url, extract_page_list, lowest_quality, parse_document

logger = logging.getLogger(__name__)

TITLE_FROM_URL_PATTERN = re.compile(r"wikisource\.org/wiki/(.+)", re.IGNORECASE)

NS_NAME_INDEX = "Index"
METADATA_CACHE_TTL = 24 * 60 * 60
DEFAULT_CACHE_LIFETIME = 60 * 60


class IndexSite(Protocol):
    """The Wikisource site an Index page lives on."""

    def query_page_info(self, title: str) -> list[dict[str, Any]]: ...

    def get_namespace_id(self, name: str) -> int: ...

    def fetch_html(self, url: str) -> str: ...


def url_hash(url: str) -> str:
    return hashlib.md5(url.encode("utf-8"), usedforsecurity=False).hexdigest()


def title_from_url(url: str) -> str:
    """Get the page title from a Wikisource page URL.

    Raises:
        InvalidUrlError: If the URL has no ``wikisource.org/wiki/<title>`` part
    """
    match = TITLE_FROM_URL_PATTERN.search(url)
    if match is None:
        raise InvalidUrlError(f"Unable to find page title in: {url}")
    return unquote(match.group(1))


def validate_page_info(record: Any, url: str) -> IndexPageInfo:
    """Validate a page record, from the API or the cache, as IndexPageInfo."""
    try:
        return IndexPageInfo.model_validate(record)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Page info for {url} failed validation",
            errors=[str(err) for err in e.errors()],
        ) from e


class IndexPage:
    """An Index page and the scanned pages it lists.

    Constructing an IndexPage runs no requests. Load its metadata with
    ``load_from_url`` first; the HTML is then fetched on demand and kept
    for the lifetime of the instance.

    Both metadata and HTML are cached in ``cache``, shared between
    instances: metadata for 24 hours, HTML for ``cache_lifetime`` seconds.

    Example:
        with WikisourceClient.for_language("en") as site:
            index_page = IndexPage(site)
            index_page.load_from_url(
                "https://en.wikisource.org/wiki/Index:Foo.djvu"
            )
            for page in index_page.get_page_list():
                print(page.num, page.quality)
    """

    def __init__(
        self,
        site: IndexSite,
        cache: CacheStore | None = None,
        cache_lifetime: int = DEFAULT_CACHE_LIFETIME,
    ):
        """Initialize the Index page.

        Args:
            site: The Wikisource site on which this Index page resides
            cache: Cache for metadata and HTML (default: shared in-memory cache)
            cache_lifetime: Seconds to keep the page's HTML cached
        """
        self.site = site
        self.cache = cache if cache is not None else default_cache
        self.cache_lifetime = cache_lifetime
        self._info: IndexPageInfo | None = None
        self._document: html.HtmlElement | None = None

    @classmethod
    def from_url(cls, site: IndexSite, url: str, **kwargs) -> "IndexPage":
        """Create an IndexPage and load it from a Wikisource URL."""
        index_page = cls(site, **kwargs)
        index_page.load_from_url(url)
        return index_page

    def loaded(self) -> bool:
        """Whether this page's metadata has been loaded yet."""
        return self._info is not None

    def load_from_url(self, url: str) -> None:
        """Load this Index page's metadata from a Wikisource URL.

        This is useful because Wikidata only stores Index page links as full
        URLs (i.e. not as site links). Cached metadata is trusted as-is.

        Args:
            url: A fully-qualified URL of any Wikisource page

        Raises:
            InvalidUrlError: If no page title can be found in the URL
            PageNotFoundError: If there is no page with that title
            NotAnIndexPageError: If the page is not in the Index namespace
            ValidationError: If the page metadata is malformed
            WikisourceApiError: If this page has already been loaded
        """
        if self.loaded():
            raise WikisourceApiError(f"Index page is already loaded: {self._info.title}")

        title = title_from_url(url)

        cache_key = f"indexpage{url_hash(url)}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info(f"Using cached page info for {url}")
            self._info = validate_page_info(cached, url)
            return

        # Make sure the page title exists and is an Index page.
        pages = self.site.query_page_info(title)
        if not pages:
            raise PageNotFoundError(f"Unable to load IndexPage from URL: {url}")
        page = pages[0]

        if page.get("ns") != self.site.get_namespace_id(NS_NAME_INDEX):
            raise NotAnIndexPageError(f"Page at this URL is not an Index page: {url}")

        info = validate_page_info(page, url)
        self._info = info
        self.cache.set(cache_key, info.model_dump(by_alias=True), METADATA_CACHE_TTL)

    def get_info(self) -> IndexPageInfo:
        """Get the page's metadata.

        Raises:
            NotLoadedError: If this is called before ``load_from_url``
        """
        if self._info is None:
            raise NotLoadedError()
        return self._info

    def get_url(self) -> str:
        """Get the Index page's canonical URL."""
        return self.get_info().canonical_url

    def get_title(self) -> str:
        """Get the normalised (spaces rather than underscores) title."""
        return self.get_info().title

    def get_document(self) -> html.HtmlElement:
        """Get the parsed HTML of the Index page.

        The HTML is taken from the cache if possible, and is fetched and
        parsed at most once per instance.

        Raises:
            NotLoadedError: If this is called before ``load_from_url``
            FetchError: If the HTML cannot be fetched
        """
        if self._document is None:
            url = self.get_url()
            cache_key = f"indexpagehtml{url_hash(url)}"
            page_html = self.cache.get(cache_key)
            if page_html is None:
                page_html = self.site.fetch_html(url)
                self.cache.set(cache_key, page_html, self.cache_lifetime)
            else:
                logger.info(f"Using cached HTML for index page {self.get_title()}")
            self._document = parse_document(page_html)
        return self._document

    def get_page_list(self) -> PageList:
        """Get all pages: their numbers, labels, qualities, titles and URLs.

        This makes assumptions based on English Wikisource's page list
        markup. The list is rebuilt from the document on every call.
        """
        base_url = extract_base_url(self.get_url())
        return extract_page_list(self.get_document(), base_url)

    def get_child_page_info(self, search: Any, key: str = "num") -> ChildPage | None:
        """Get information about a particular child page.

        Args:
            search: The value to search for
            key: The ChildPage field to search by

        Returns:
            The first matching page, or None if none matches
        """
        return self.get_page_list().find(search, field=key)

    def get_quality(self) -> int | None:
        """Get the quality of the Index page.

        This is taken to be the quality of its lowest quality page,
        excluding quality 0 ("without text").
        See https://en.wikisource.org/wiki/Help:Page_status
        """
        quality = lowest_quality(self.get_document())
        if quality is None:
            logger.debug(f"No page qualities found on {self.get_title()}")
        return quality
