"""Domain objects for SEOScope - explicit re-exports to satisfy linters."""
from .crawl_result import CrawlResult as CrawlResult
from .crawl_result import Image as Image
from .seo_score import SEOScore as SEOScore
from .seo_score import Issue as Issue
from .seo_score import Opportunity as Opportunity
from .http_response import HttpResponse as HttpResponse
from .traversal_result import TraversalResult as TraversalResult
from .crawl_session import CrawlSession as CrawlSession

__all__ = [
    "CrawlResult",
    "Image",
    "SEOScore",
    "Issue",
    "Opportunity",
    "HttpResponse",
    "TraversalResult",
    "CrawlSession",
]
