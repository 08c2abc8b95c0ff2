import threading
import time
from collections import Counter
from typing import Callable, Optional
from urllib.parse import urlsplit

from seoscope.domain.visited_tracker import VisitedTracker


class CrawlSession:
    """
    State for a single site traversal.

    Holds the seed host, the traversal's own visited set, per-URL failure
    counts, and the cancellation signals (a stop event and an optional
    monotonic deadline) checked between page fetches.
    """

    def __init__(
        self,
        seed_url: str,
        max_pages: int,
        visited_tracker: Optional[VisitedTracker] = None,
        stop_event: Optional[threading.Event] = None,
        deadline: Optional[float] = None,
        max_fetch_attempts: int = 1,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.seed_url = seed_url
        self.seed_host = urlsplit(seed_url).netloc.lower()
        self.max_pages = int(max_pages)
        self.visited_tracker = visited_tracker if visited_tracker is not None else VisitedTracker()
        self.stop_event = stop_event if stop_event is not None else threading.Event()
        self.deadline = deadline
        self.max_fetch_attempts = max(1, int(max_fetch_attempts))
        self._clock = clock
        self._failures: Counter = Counter()
        self.pages_crawled: int = 0

    def is_same_host(self, url: str) -> bool:
        try:
            return urlsplit(url).netloc.lower() == self.seed_host
        except ValueError:
            return False

    def is_visited(self, url: str) -> bool:
        return self.visited_tracker.is_visited(url)

    def mark_visited(self, url: str) -> bool:
        """Mark `url` visited; False means another caller already did."""
        return self.visited_tracker.mark_if_new(url)

    def record_failure(self, url: str) -> None:
        self._failures[url] += 1

    def attempts_exhausted(self, url: str) -> bool:
        return self._failures[url] >= self.max_fetch_attempts

    def budget_reached(self) -> bool:
        return self.pages_crawled >= self.max_pages

    def increment_pages_crawled(self, count: int = 1) -> None:
        self.pages_crawled += int(count)

    def is_stopped(self) -> bool:
        """Check if the traversal should stop (stop event set or deadline passed)."""
        if self.stop_event.is_set():
            return True
        return self.deadline is not None and self._clock() >= self.deadline

    def mark_stopped(self) -> None:
        """Mark that crawling should stop."""
        self.stop_event.set()
