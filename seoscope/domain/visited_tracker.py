import threading
from collections import OrderedDict
from typing import Optional


class VisitedTracker:
    """
    Tracks which URLs have been visited during a crawl.

    Safe to share between threads: every operation holds the tracker lock, and
    `mark_if_new` performs the check and the mark as one step so two callers
    can never both claim the same URL.
    """

    def __init__(self, max_size: Optional[int] = 100_000):
        """Create a visited tracker.

        `max_size` bounds memory usage by evicting least-recently-added URLs.
        If `max_size` is None or <= 0, the tracker behaves as unbounded.
        """
        self._max_size = int(max_size) if max_size is not None else None
        if self._max_size is not None and self._max_size <= 0:
            self._max_size = None

        self._lock = threading.Lock()
        # OrderedDict gives us a lightweight LRU-like set.
        self._visited: "OrderedDict[str, None]" = OrderedDict()

    def _mark_locked(self, url: str) -> None:
        self._visited[url] = None
        if self._max_size is not None:
            while len(self._visited) > self._max_size:
                self._visited.popitem(last=False)

    def mark(self, url: str) -> None:
        """Mark a URL as visited."""
        with self._lock:
            if url in self._visited:
                self._visited.move_to_end(url)
                return
            self._mark_locked(url)

    def mark_if_new(self, url: str) -> bool:
        """Mark `url` and return True, or return False if it was already visited."""
        with self._lock:
            if url in self._visited:
                self._visited.move_to_end(url)
                return False
            self._mark_locked(url)
            return True

    def is_visited(self, url: str) -> bool:
        """Check if a URL has been visited."""
        with self._lock:
            if url in self._visited:
                self._visited.move_to_end(url)
                return True
            return False

    def __len__(self) -> int:
        with self._lock:
            return len(self._visited)
