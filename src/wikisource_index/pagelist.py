"""Page list extraction from rendered Index page HTML.

The page list of an Index page is a ``div.index-pagelist`` containing one
anchor per scanned page, e.g.::

    <div class="index-pagelist">
      <a href="/wiki/Page:Foo.djvu/5" class="prp-pagequality-3 quality3"
         title="Page:Foo.djvu/5">1</a>
      <a href="/w/index.php?title=Page:Foo.djvu/6&action=edit&redlink=1"
         class="new" title="Page:Foo.djvu/6 (page does not exist)">2</a>
    </div>

Each field of a ``ChildPage`` is derived by its own function so that
changes in the markup can be traced field by field. A field that cannot
be derived is None; it never aborts the extraction.
"""

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import fields
from typing import Any

from lxml import etree, html

from schemas.child_page import ChildPage

logger = logging.getLogger(__name__)

PAGELIST_ANCHORS_XPATH = "//div[contains(@class, 'index-pagelist')]//a"
QUALITY_ANCHORS_XPATH = "//a[contains(@class, 'prp-pagequality-{quality}')]"
QUALITY_LEVELS = (1, 2, 3, 4)

BASE_URL_PATTERN = re.compile(r"(.*wikisource\.org)")
NUM_PATTERN = re.compile(r"/(\d+)")
TITLE_PATTERN = re.compile(r"title=(.*/\d+)")
QUALITY_PATTERN = re.compile(r"quality([0-9])")
NUMERIC_PATTERN = re.compile(r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*")

CHILD_PAGE_FIELDS = frozenset(f.name for f in fields(ChildPage))


def parse_document(markup: str | bytes) -> html.HtmlElement:
    """Parse HTML leniently.

    Args:
        markup: The page HTML, as text or UTF-8 bytes

    Returns:
        The root element. Empty input yields an empty ``<html>`` element.
    """
    if isinstance(markup, str):
        markup = markup.encode("utf-8")

    parser = html.HTMLParser(encoding="utf-8")
    try:
        return html.document_fromstring(markup, parser=parser)
    except etree.ParserError as e:
        logger.debug(f"Unparseable document, using an empty one: {e}")
        return html.Element("html")


def extract_base_url(canonical_url: str) -> str:
    """Get the scheme and host part of a Wikisource URL, or '' if none."""
    match = BASE_URL_PATTERN.search(canonical_url)
    return match.group(1) if match else ""


def extract_num(href: str) -> str | None:
    """Get the first number following a slash in a page link."""
    match = NUM_PATTERN.search(href)
    return match.group(1) if match else None


def extract_title(href: str) -> str | None:
    """Get the raw page title from a link's ``title=`` query parameter."""
    match = TITLE_PATTERN.search(href)
    return match.group(1) if match else None


def extract_quality(class_attr: str) -> int | None:
    """Get the quality level from an anchor's ``qualityN`` class."""
    match = QUALITY_PATTERN.search(class_attr)
    return int(match.group(1)) if match else None


def extract_label(anchor: html.HtmlElement) -> str:
    return str(anchor.text_content())


def build_url(base_url: str, href: str) -> str:
    return base_url + href


def parse_anchor(anchor: html.HtmlElement, base_url: str) -> ChildPage:
    """Build a ChildPage from one page list anchor."""
    href = anchor.get("href") or ""
    class_attr = anchor.get("class") or ""

    return ChildPage(
        num=extract_num(href),
        label=extract_label(anchor),
        url=build_url(base_url, href),
        quality=extract_quality(class_attr),
        title=extract_title(href),
    )


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and NUMERIC_PATTERN.fullmatch(value):
        return float(value)
    return None


def loose_equals(a: Any, b: Any) -> bool:
    """Compare two values, treating numeric-looking strings as numbers.

    ``loose_equals("5", 5)`` and ``loose_equals("05", "5")`` are true.
    None is only equal to None.
    """
    if a is None or b is None:
        return a is None and b is None

    num_a, num_b = _as_number(a), _as_number(b)
    if num_a is not None and num_b is not None:
        return num_a == num_b

    return str(a) == str(b)


class PageList:
    """Ordered, keyed collection of the child pages of an Index page.

    Iterating yields pages in document order. Pages are keyed by
    ``ChildPage.key``; a later page with the same number replaces the
    earlier one in place. Pages without a number are keyed by their
    position in the document, ``position-<index>``.
    """

    def __init__(self, pages: Iterable[ChildPage] = ()):
        self._pages: dict[str, ChildPage] = {}
        for position, page in enumerate(pages):
            self.add(page, position)

    def add(self, page: ChildPage, position: int) -> str:
        key = page.key or f"position-{position}"
        if key in self._pages:
            logger.debug(f"Duplicate page key {key}, keeping the later page")
        self._pages[key] = page
        return key

    def __len__(self) -> int:
        return len(self._pages)

    def __iter__(self) -> Iterator[ChildPage]:
        return iter(self._pages.values())

    def __contains__(self, key: object) -> bool:
        return key in self._pages

    def __getitem__(self, key: str) -> ChildPage:
        return self._pages[key]

    def get(self, key: str, default: ChildPage | None = None) -> ChildPage | None:
        return self._pages.get(key, default)

    def keys(self) -> list[str]:
        return list(self._pages.keys())

    def items(self) -> list[tuple[str, ChildPage]]:
        return list(self._pages.items())

    def by_num(self, num: str | int) -> ChildPage | None:
        return self._pages.get(f"page-{num}")

    def find(self, search: Any, field: str = "num") -> ChildPage | None:
        """Find the first page whose ``field`` loosely equals ``search``.

        Args:
            search: The value to look for
            field: Name of the ChildPage field to compare

        Returns:
            The matching page, or None if there is none

        Raises:
            ValueError: If ``field`` is not a ChildPage field
        """
        if field not in CHILD_PAGE_FIELDS:
            raise ValueError(f"Unknown page field: {field}")

        for page in self:
            if loose_equals(getattr(page, field), search):
                return page
        return None

    def to_dict(self) -> dict[str, dict]:
        return {key: page.to_dict() for key, page in self._pages.items()}


def extract_page_list(document: html.HtmlElement, base_url: str) -> PageList:
    """Extract all child pages from a parsed Index page.

    Args:
        document: The parsed Index page
        base_url: Scheme and host prepended to each page link

    Returns:
        PageList in document order; empty if there is no page list
    """
    anchors = document.xpath(PAGELIST_ANCHORS_XPATH)
    page_list = PageList(parse_anchor(anchor, base_url) for anchor in anchors)
    logger.debug(f"Extracted {len(page_list)} pages from {len(anchors)} anchors")
    return page_list


def lowest_quality(document: html.HtmlElement) -> int | None:
    """Get the lowest quality level from 1 to 4 used by any page link.

    Quality 0 means "without text" and is not counted.
    """
    for quality in QUALITY_LEVELS:
        if document.xpath(QUALITY_ANCHORS_XPATH.format(quality=quality)):
            return quality
    return None
