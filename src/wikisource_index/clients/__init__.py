"""Network clients for Wikisource sites."""

from .client import Client
from .exceptions import (
    APIError,
    ConnectionError,
    FetchError,
    InvalidUrlError,
    NotAnIndexPageError,
    NotFoundError,
    NotLoadedError,
    PageNotFoundError,
    RateLimitError,
    ValidationError,
    WikisourceApiError,
)
from .wikisource_client import WikisourceClient

__all__ = [
    "Client",
    "WikisourceClient",
    "WikisourceApiError",
    "InvalidUrlError",
    "PageNotFoundError",
    "NotAnIndexPageError",
    "NotLoadedError",
    "ValidationError",
    "FetchError",
    "ConnectionError",
    "APIError",
    "RateLimitError",
    "NotFoundError",
]
