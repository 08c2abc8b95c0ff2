import logging
import time
from collections.abc import Mapping
from typing import Callable, Dict, Optional
from urllib.parse import urlsplit

import requests

from seoscope.domain.http_response import HttpResponse
from seoscope.exceptions import FetchError, InvalidURL, TooManyRedirects

logger = logging.getLogger(__name__)

DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
DEFAULT_ACCEPT_LANGUAGE = "de-DE,de;q=0.9,en;q=0.8"

_INVALID_URL_ERRORS = (
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidURL,
    requests.exceptions.URLRequired,
)


def make_session(max_redirects: int = 10) -> requests.Session:
    """Return a `requests.Session` that gives up after `max_redirects` hops."""
    session = requests.Session()
    session.max_redirects = int(max_redirects)
    return session


def validate_url(url: str) -> str:
    """Return `url` stripped, or raise `InvalidURL` unless it is absolute http(s)."""
    if not url or not isinstance(url, str):
        raise InvalidURL(str(url), "empty URL")
    candidate = url.strip()
    try:
        parts = urlsplit(candidate)
    except ValueError as e:
        raise InvalidURL(candidate, f"unparseable URL ({e})") from e
    if parts.scheme.lower() not in ("http", "https"):
        raise InvalidURL(candidate, "unsupported scheme")
    if not parts.netloc:
        raise InvalidURL(candidate, "missing host")
    return candidate


def collect_headers(resp) -> Dict[str, str]:
    """Copy response headers; on duplicate keys the last value wins.

    The raw urllib3 header container yields repeated headers one by one, unlike
    `requests`' merged view, so it is preferred when available.
    """
    raw = getattr(resp, "raw", None)
    source = getattr(raw, "headers", None)
    if not isinstance(source, Mapping):
        source = getattr(resp, "headers", None)
    if not isinstance(source, Mapping):
        return {}
    headers: Dict[str, str] = {}
    for key, value in source.items():
        headers[key] = value
    return headers


class HttpService:
    """
    HTTP client wrapper for fetching web pages.

    Requires http_client callable for dependency injection. In production this
    is the `get` method of a session from `make_session`, which enforces the
    redirect cap; tests pass a Mock.
    This layer never retries: failures surface as `FetchError` subclasses.
    """

    def __init__(
        self,
        user_agent: str,
        http_client: Callable,
        timeout: float = 30,
        max_redirects: int = 10,
        clock: Callable[[], float] = time.monotonic,
        accept_language: str = DEFAULT_ACCEPT_LANGUAGE,
    ):
        self.user_agent = user_agent
        self.accept_language = accept_language
        self.timeout = timeout
        self.max_redirects = max_redirects
        self.http_client = http_client
        self._clock = clock

    def request_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": DEFAULT_ACCEPT,
            "Accept-Language": self.accept_language,
        }

    def fetch(self, url: str, timeout: Optional[float] = None) -> HttpResponse:
        """Fetch URL and return status, body, headers, size and latency."""
        url = validate_url(url)
        effective_timeout = timeout if timeout is not None else self.timeout
        start = self._clock()
        try:
            resp = self.http_client(
                url,
                headers=self.request_headers(),
                timeout=effective_timeout,
                allow_redirects=True,
            )
        except requests.exceptions.TooManyRedirects as e:
            raise TooManyRedirects(url, e, self.max_redirects) from e
        except _INVALID_URL_ERRORS as e:
            raise InvalidURL(url, f"rejected by HTTP client ({e})") from e
        except requests.exceptions.RequestException as e:
            raise FetchError(url, e) from e
        # The body has been read once the client returns (no streaming).
        load_time_ms = int((self._clock() - start) * 1000)

        headers = collect_headers(resp)
        content_type = None
        if hasattr(resp, "headers"):
            content_type = resp.headers.get("Content-Type")

        content = getattr(resp, "content", None)
        size = len(content) if isinstance(content, (bytes, bytearray)) else len(resp.text.encode("utf-8"))
        final_url = getattr(resp, "url", None)
        logger.debug("GET %s -> %s in %sms (%s bytes)", url, resp.status_code, load_time_ms, size)
        return HttpResponse(
            status_code=resp.status_code,
            text=resp.text,
            content_type=content_type,
            headers=headers,
            url=final_url if isinstance(final_url, str) else url,
            load_time_ms=load_time_ms,
            size=size,
        )
