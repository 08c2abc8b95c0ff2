"""Custom exceptions for SEOScope services."""


class SeoScopeError(Exception):
    """Base class for crawl and analysis failures."""


class InvalidURL(SeoScopeError):
    """Raised when a seed or link URL cannot be parsed into an http(s) URL."""

    def __init__(self, url: str, reason: str = "invalid URL"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url!r}")


class FetchError(SeoScopeError):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")


class TooManyRedirects(FetchError):
    """Raised when a fetch exceeds the configured redirect cap."""

    def __init__(self, url: str, original: Exception, max_redirects: int = 10):
        self.max_redirects = max_redirects
        super().__init__(url, original)


class ParseError(SeoScopeError):
    """Raised when an HTML body cannot be turned into a document tree."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"Could not parse HTML from {url}: {original}")
