"""Pytest fixtures for wikisource-index tests."""

from unittest.mock import MagicMock

import pytest

from wikisource_index.cache import MemoryCache

INDEX_NAMESPACE_ID = 106
INDEX_URL = "https://en.wikisource.org/wiki/Index:The_Pickwick_Papers_(1837).djvu"

PAGELIST_HTML = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="UTF-8"><title>Index:The Pickwick Papers (1837).djvu</title></head>
<body>
<div id="content">
  <table class="prp-index-table">
    <tr><td>Pages</td></tr>
  </table>
  <div class="prp-index-pagelist index-pagelist">
    <a href="/wiki/Page:The_Pickwick_Papers_(1837).djvu/1" class="prp-pagequality-0 quality0" title="Page:The Pickwick Papers (1837).djvu/1">Cover</a>
    <a href="/w/index.php?title=Page:The_Pickwick_Papers_(1837).djvu/2&amp;action=edit" class="prp-pagequality-3 quality3" title="Page:The Pickwick Papers (1837).djvu/2">–</a>
    <a href="/w/index.php?title=Page:The_Pickwick_Papers_(1837).djvu/3&amp;action=edit" class="prp-pagequality-4 quality4" title="Page:The Pickwick Papers (1837).djvu/3">i</a>
    <a href="/w/index.php?title=Page:The_Pickwick_Papers_(1837).djvu/4&amp;action=edit&amp;redlink=1" class="new" title="Page:The Pickwick Papers (1837).djvu/4 (page does not exist)">1</a>
  </div>
</div>
</body>
</html>
"""


@pytest.fixture
def sample_page_info():
    """Sample record returned by the MediaWiki info query for an Index page."""
    return {
        "pageid": 1185746,
        "ns": INDEX_NAMESPACE_ID,
        "title": "Index:The Pickwick Papers (1837).djvu",
        "contentmodel": "proofread-index",
        "pagelanguage": "en",
        "touched": "2026-01-15T10:00:00Z",
        "lastrevid": 14500000,
        "length": 2201,
        "fullurl": INDEX_URL,
        "editurl": "https://en.wikisource.org/w/index.php?title=Index:The_Pickwick_Papers_(1837).djvu&action=edit",
        "canonicalurl": INDEX_URL,
    }


@pytest.fixture
def pagelist_html():
    """Rendered Index page HTML with a four-page page list."""
    return PAGELIST_HTML


@pytest.fixture
def cache():
    """Empty in-memory cache."""
    return MemoryCache()


@pytest.fixture
def mock_site(sample_page_info, pagelist_html):
    """Stand-in for WikisourceClient serving one Index page."""
    site = MagicMock()
    site.query_page_info.return_value = [sample_page_info]
    site.get_namespace_id.return_value = INDEX_NAMESPACE_ID
    site.fetch_html.return_value = pagelist_html
    return site
