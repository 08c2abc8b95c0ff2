import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from seoscope.exceptions import InvalidURL, SeoScopeError
from seoscope.services.readability import calculate_readability
from seoscope.services.scoring_engine import SeoAnalyzer

logger = logging.getLogger(__name__)

# Single-page analyses share one deadline for the fetch.
ANALYZE_TIMEOUT_SECONDS = 30.0


class AnalyzeRequest(BaseModel):
    url: str
    keywords: List[str] = Field(default_factory=list)
    use_ai: bool = False


class SiteCrawlRequest(BaseModel):
    url: str
    max_pages: Optional[int] = Field(default=None, ge=1)
    keywords: List[str] = Field(default_factory=list)


class ReadabilityRequest(BaseModel):
    text: str


def create_seo_router(crawler, insights_service=None, default_max_pages: int = 10, site_timeout_seconds: Optional[float] = None):
    router = APIRouter(prefix="/seo", tags=["SEO"])

    @router.post("/analyze")
    def analyze(req: AnalyzeRequest):
        if not req.url:
            raise HTTPException(status_code=400, detail="url is required")
        try:
            crawl_result = crawler.crawl_page(req.url, timeout=ANALYZE_TIMEOUT_SECONDS)
        except InvalidURL as e:
            raise HTTPException(status_code=400, detail=str(e))
        except SeoScopeError as e:
            logger.warning("Analysis crawl failed for %s: %s", req.url, e)
            raise HTTPException(status_code=502, detail=f"failed to crawl URL: {type(e).__name__}")

        score = SeoAnalyzer(req.keywords).analyze(crawl_result)
        response = {
            "crawl_result": crawl_result.to_dict(),
            "seo_score": score.to_dict(),
            "analyzed_at": datetime.now(timezone.utc).isoformat(),
        }
        if req.use_ai and insights_service is not None:
            insights = insights_service.generate(req.url, crawl_result, score)
            if insights:
                response["ai_insights"] = insights
        return response

    @router.post("/crawl")
    def crawl_site(req: SiteCrawlRequest):
        max_pages = req.max_pages or default_max_pages
        try:
            traversal = crawler.crawl_site(req.url, max_pages, timeout=site_timeout_seconds)
        except InvalidURL as e:
            raise HTTPException(status_code=400, detail=str(e))

        analyzer = SeoAnalyzer(req.keywords)
        return {
            "results": [
                {"crawl_result": r.to_dict(), "seo_score": analyzer.analyze(r).to_dict()}
                for r in traversal.results
            ],
            "pages_crawled": traversal.pages_crawled,
            "stopped": traversal.stopped,
        }

    @router.post("/readability")
    def readability(req: ReadabilityRequest):
        return {"score": calculate_readability(req.text)}

    return router
