"""Keyword relevance sub-score for the content category."""
from typing import Iterable, List, Sequence

from seoscope.domain.crawl_result import CrawlResult

MAX_SCORE = 100.0

# Share of each keyword's points earned by a match in each location.
TITLE_WEIGHT = 0.4
META_DESCRIPTION_WEIGHT = 0.2
H1_WEIGHT = 0.3
H2_WEIGHT = 0.1


def normalize_keywords(keywords: Iterable[str]) -> List[str]:
    """Lowercase and strip keywords, dropping blanks (a blank matches everything)."""
    return [k.strip().lower() for k in (keywords or ()) if k and k.strip()]


def _contains_any(texts: Sequence[str], keyword: str) -> bool:
    return any(keyword in text.lower() for text in texts)


def keyword_relevance_score(result: CrawlResult, keywords: Iterable[str]) -> float:
    """Score 0-100 for how prominently `keywords` appear on the page.

    Each of the K keywords is worth 100/K points, split across title (40%),
    meta description (20%), any H1 (30%) and any H2 (10%) by
    case-insensitive substring match. No keywords scores a full 100.
    """
    targets = normalize_keywords(keywords)
    if not targets:
        return MAX_SCORE

    per_keyword = MAX_SCORE / len(targets)
    title = result.title.lower()
    description = result.meta_description.lower()
    score = 0.0
    for keyword in targets:
        if keyword in title:
            score += per_keyword * TITLE_WEIGHT
        if keyword in description:
            score += per_keyword * META_DESCRIPTION_WEIGHT
        if _contains_any(result.h1_tags, keyword):
            score += per_keyword * H1_WEIGHT
        if _contains_any(result.h2_tags, keyword):
            score += per_keyword * H2_WEIGHT
    return min(MAX_SCORE, score)
