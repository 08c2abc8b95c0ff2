import pytest

from seoscope.domain import CrawlResult
from seoscope.services.keyword_relevance import keyword_relevance_score, normalize_keywords


def _page(**kwargs):
    return CrawlResult(url="https://example.com/", **kwargs)


def test_no_keywords_scores_full():
    assert keyword_relevance_score(_page(), []) == 100
    assert keyword_relevance_score(_page(), ["", "   "]) == 100


def test_all_locations_cap_at_100():
    page = _page(title="seo", meta_description="seo", h1_tags=("seo",), h2_tags=("seo",))
    assert keyword_relevance_score(page, ["seo"]) == pytest.approx(100)
    assert keyword_relevance_score(page, ["seo"]) <= 100


def test_points_split_across_keywords_and_locations():
    page = _page(title="Best SEO guide", h1_tags=("Intro", "SEO basics"), h2_tags=("Tools we like",))
    # seo: title 40% + h1 30% of 50; tools: h2 10% of 50
    assert keyword_relevance_score(page, ["seo", "tools"]) == pytest.approx(40)


def test_match_is_case_insensitive_substring():
    page = _page(meta_description="Search engine OPTIMIZATION explained")
    assert keyword_relevance_score(page, ["Optimization"]) == pytest.approx(20)


def test_unmatched_keyword_scores_zero():
    assert keyword_relevance_score(_page(title="Cooking"), ["seo"]) == 0


def test_normalize_keywords():
    assert normalize_keywords(["  SEO ", "", "Tools", "  "]) == ["seo", "tools"]
    assert normalize_keywords(None) == []
