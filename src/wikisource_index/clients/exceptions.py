"""Custom exceptions for Wikisource clients and Index pages."""


class WikisourceApiError(Exception):
    """Base exception for all Wikisource API errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class InvalidUrlError(WikisourceApiError):
    """Raised when a URL does not contain a Wikisource page title."""

    pass


class PageNotFoundError(WikisourceApiError):
    """Raised when the metadata query finds no page for a title."""

    pass


class NotAnIndexPageError(WikisourceApiError):
    """Raised when a resolved page is not in the Index namespace."""

    pass


class NotLoadedError(WikisourceApiError):
    """Raised when Index page metadata is read before it has been loaded."""

    def __init__(self, message: str = "Index page is not loaded"):
        super().__init__(message)


class ValidationError(WikisourceApiError):
    """Raised when response data fails schema validation."""

    def __init__(self, message: str, errors: list | None = None, *args, **kwargs):
        self.errors = errors or []
        super().__init__(message, *args, **kwargs)


class FetchError(WikisourceApiError):
    """Raised when a request to the wiki fails in transport."""

    pass


class ConnectionError(FetchError):
    """Raised when a network connection fails."""

    pass


class APIError(FetchError):
    """Raised when the wiki returns a non-2xx response."""

    def __init__(self, message: str, status_code: int, *args, **kwargs):
        self.status_code = status_code
        super().__init__(message, *args, **kwargs)


class RateLimitError(APIError):
    """Raised when the wiki returns a 429 rate limit response."""

    def __init__(self, message: str = "Rate limit exceeded"):
        super().__init__(message, status_code=429)


class NotFoundError(APIError):
    """Raised when the wiki returns a 404 not found response."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)
