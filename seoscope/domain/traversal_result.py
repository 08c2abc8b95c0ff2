"""Site traversal result data model."""
from typing import NamedTuple, Tuple

from seoscope.domain.crawl_result import CrawlResult


class TraversalResult(NamedTuple):
    """Result of a host-scoped site traversal.

    Lets callers distinguish a completed traversal from one that was cut
    short by cancellation or a deadline.
    """
    results: Tuple[CrawlResult, ...]
    """Pages fetched, in the order they were visited"""

    stopped: bool
    """True if the traversal was stopped early, False if it completed normally"""

    @property
    def pages_crawled(self) -> int:
        return len(self.results)
