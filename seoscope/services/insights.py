from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Dict, Optional, Protocol

from seoscope.domain.crawl_result import CrawlResult
from seoscope.domain.seo_score import SEOScore

logger = logging.getLogger(__name__)


class InsightGenerator(Protocol):
    """Turns serialized score + crawl data into free-form narrative text.

    Implementations typically call a third-party text-generation API; the
    returned text is treated as opaque.
    """

    def generate(self, payload: Dict[str, Any]) -> str: ...


class NullInsightGenerator:
    """Generator used when no text-generation backend is configured."""

    def generate(self, payload: Dict[str, Any]) -> str:
        return ""


class InsightsService:
    """Calls an `InsightGenerator` on a worker thread under a deadline.

    Failures and timeouts are logged and yield None; they never fail the
    analysis that requested them.
    """

    def __init__(self, generator: Optional[InsightGenerator] = None, timeout_seconds: float = 20.0):
        self._generator = generator or NullInsightGenerator()
        self._timeout_seconds = timeout_seconds
        self._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="insights")

    @staticmethod
    def build_payload(url: str, crawl_result: CrawlResult, score: SEOScore) -> Dict[str, Any]:
        return {
            "url": url,
            "score": score.to_dict(),
            "crawl_data": crawl_result.to_dict(),
        }

    def generate(self, url: str, crawl_result: CrawlResult, score: SEOScore) -> Optional[str]:
        payload = self.build_payload(url, crawl_result, score)
        future = self._executor.submit(self._generator.generate, payload)
        try:
            text = future.result(timeout=self._timeout_seconds)
        except FutureTimeoutError:
            future.cancel()
            logger.warning("Insight generation for %s timed out after %ss", url, self._timeout_seconds)
            return None
        except Exception as e:
            logger.warning("Insight generation failed for %s: %s", url, e)
            return None
        return text or None

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)
