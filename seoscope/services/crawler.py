import logging
import threading
import time
from typing import Optional
from urllib.parse import urlsplit

from seoscope.domain.crawl_result import CrawlResult
from seoscope.domain.traversal_result import TraversalResult
from seoscope.domain.visited_tracker import VisitedTracker
from seoscope.services import mobile
from seoscope.services.html_extractor import HtmlExtractor
from seoscope.services.http_service import HttpService, validate_url
from seoscope.services.politeness import PolitenessLimiter
from seoscope.services.site_traversal import SiteTraversal

logger = logging.getLogger(__name__)

_HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")


class Crawler:
    """Fetches and extracts pages for one crawl session.

    The politeness table and the visited set belong to this instance, are
    internally synchronized, and may be shared by concurrent callers.
    """

    def __init__(
        self,
        http_service: HttpService,
        limiter: Optional[PolitenessLimiter] = None,
        extractor: Optional[HtmlExtractor] = None,
        visited_tracker: Optional[VisitedTracker] = None,
        mobile_check_mode: str = mobile.HEADER_MODE,
        max_fetch_attempts: int = 1,
        visited_tracker_max_urls: int = 100_000,
    ):
        if mobile_check_mode not in mobile.MODES:
            raise ValueError(f"Unknown mobile check mode: {mobile_check_mode!r}")
        self.http_service = http_service
        self.limiter = limiter or PolitenessLimiter()
        self.extractor = extractor or HtmlExtractor()
        self.visited_tracker = visited_tracker if visited_tracker is not None else VisitedTracker(max_size=visited_tracker_max_urls)
        self.mobile_check_mode = mobile_check_mode
        self.max_fetch_attempts = max_fetch_attempts
        self.visited_tracker_max_urls = visited_tracker_max_urls

    def is_visited(self, url: str) -> bool:
        """True once `url` has been fetched successfully by this crawler."""
        return self.visited_tracker.is_visited(url)

    def crawl_page(self, url: str, timeout: Optional[float] = None) -> CrawlResult:
        """Fetch one page and extract its signals.

        Raises `InvalidURL`, `FetchError`/`TooManyRedirects` or `ParseError`;
        nothing is retried here.
        """
        url = validate_url(url)
        parts = urlsplit(url)
        self.limiter.wait(parts.netloc)

        response = self.http_service.fetch(url, timeout=timeout)
        page = self.extractor.extract(response.text, url)
        headers = dict(response.headers or {})

        errors = []
        if response.status_code >= 400:
            errors.append(f"HTTP status {response.status_code}")
        content_type = (response.content_type or "").split(";", 1)[0].strip().lower()
        if content_type and content_type not in _HTML_CONTENT_TYPES:
            errors.append(f"Unexpected content type: {content_type}")

        result = CrawlResult(
            url=url,
            status_code=response.status_code,
            title=page.title,
            meta_description=page.meta_description,
            h1_tags=page.h1_tags,
            h2_tags=page.h2_tags,
            links=page.links,
            images=page.images,
            word_count=page.word_count,
            load_time_ms=response.load_time_ms,
            mobile_friendly=mobile.is_mobile_friendly(self.mobile_check_mode, headers, page.viewport),
            has_https=parts.scheme.lower() == "https",
            canonical_url=page.canonical_url,
            errors=tuple(errors),
            headers=headers,
            response_size=response.size,
        )
        self.visited_tracker.mark(url)
        logger.info("Crawled %s -> status %s, %s words, %s links", url, result.status_code, result.word_count, len(result.links))
        return result

    def crawl_site(
        self,
        start_url: str,
        max_pages: int,
        stop_event: Optional[threading.Event] = None,
        timeout: Optional[float] = None,
    ) -> TraversalResult:
        """Breadth-first, host-scoped crawl returning up to `max_pages` results.

        `timeout` bounds the whole traversal; it is checked between fetches.
        """
        deadline = time.monotonic() + timeout if timeout is not None else None
        traversal = SiteTraversal(
            self,
            max_fetch_attempts=self.max_fetch_attempts,
            visited_tracker_max_urls=self.visited_tracker_max_urls,
        )
        return traversal.run(start_url, max_pages, stop_event=stop_event, deadline=deadline)
