"""Schema definitions for wikisource-index."""

from .child_page import ChildPage
from .index_page_info import IndexPageInfo

__all__ = [
    "ChildPage",
    "IndexPageInfo",
]
