import logging
import threading
import time
from collections import deque
from typing import Callable, Deque, List, Optional
from urllib.parse import urldefrag

from seoscope.domain.crawl_result import CrawlResult
from seoscope.domain.crawl_session import CrawlSession
from seoscope.domain.traversal_result import TraversalResult
from seoscope.domain.visited_tracker import VisitedTracker
from seoscope.exceptions import FetchError, SeoScopeError
from seoscope.services.http_service import validate_url

logger = logging.getLogger(__name__)


class SiteTraversal:
    """Executes a breadth-first, host-scoped crawl with a page budget.

    This class owns the traversal control-flow (frontier, visited checks,
    cancellation checks, per-page failure handling). Fetching and extraction
    are delegated to `page_crawler.crawl_page(url, timeout=...)`.
    A failed fetch is not marked visited; a URL is attempted at most
    `max_fetch_attempts` times per traversal, which bounds the frontier.
    """

    def __init__(
        self,
        page_crawler,
        *,
        max_fetch_attempts: int = 1,
        visited_tracker_max_urls: int = 100_000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.page_crawler = page_crawler
        self.max_fetch_attempts = max_fetch_attempts
        self.visited_tracker_max_urls = int(visited_tracker_max_urls)
        self._clock = clock

    def _remaining_time(self, session: CrawlSession) -> Optional[float]:
        if session.deadline is None:
            return None
        return max(0.001, session.deadline - self._clock())

    def fetch_page(self, url: str, session: CrawlSession) -> Optional[CrawlResult]:
        """Fetch one frontier URL; returns None (and records the failure) on error."""
        try:
            return self.page_crawler.crawl_page(url, timeout=self._remaining_time(session))
        except FetchError as e:
            logger.warning("Fetch failed for %s: %s", url, e)
        except SeoScopeError as e:
            logger.warning("Skipping %s: %s", url, e)
        except Exception as e:
            logger.error("Crawl error for %s: %s", url, e, exc_info=True)
        session.record_failure(url)
        return None

    def _should_enqueue(self, link: str, session: CrawlSession) -> bool:
        if not session.is_same_host(link):
            logger.debug("Skipping (external) %s -> not same host as %s", link, session.seed_host)
            return False
        if session.is_visited(link) or session.attempts_exhausted(link):
            return False
        return True

    def run(
        self,
        start_url: str,
        max_pages: int,
        stop_event: Optional[threading.Event] = None,
        deadline: Optional[float] = None,
    ) -> TraversalResult:
        start_url = urldefrag(validate_url(start_url))[0]
        session = CrawlSession(
            start_url,
            max_pages,
            visited_tracker=VisitedTracker(max_size=self.visited_tracker_max_urls),
            stop_event=stop_event,
            deadline=deadline,
            max_fetch_attempts=self.max_fetch_attempts,
            clock=self._clock,
        )

        queue: Deque[str] = deque([start_url])
        results: List[CrawlResult] = []
        stopped = False

        while queue and not session.budget_reached():
            if session.is_stopped():
                logger.info("Traversal of %s cancelled with %s URLs left in frontier", start_url, len(queue))
                stopped = True
                break

            url = queue.popleft()
            if session.is_visited(url):
                logger.debug("Skipping (visited) %s", url)
                continue
            if session.attempts_exhausted(url):
                logger.debug("Skipping (failed before) %s", url)
                continue

            result = self.fetch_page(url, session)
            if result is None:
                continue
            if not session.mark_visited(url):
                continue

            results.append(result)
            session.increment_pages_crawled()
            if session.budget_reached():
                break

            for link in result.links:
                link = urldefrag(link)[0]
                if self._should_enqueue(link, session):
                    queue.append(link)

        logger.info("Traversal of %s finished: %s pages, stopped=%s", start_url, len(results), stopped)
        return TraversalResult(results=tuple(results), stopped=stopped)
