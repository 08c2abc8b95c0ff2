"""Rule-table SEO scoring.

Each category starts at 100 points. A category is a list of checks; a check
is an ordered list of rules (condition -> deduction -> finding template) and
the first matching rule applies. When no rule matches, the check's credit is
recorded in the score breakdown.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from seoscope.domain.crawl_result import CrawlResult
from seoscope.domain.seo_score import Issue, Opportunity, SEOScore
from seoscope.services.keyword_relevance import keyword_relevance_score, normalize_keywords

logger = logging.getLogger(__name__)

Facts = Dict[str, Any]

MAX_POINTS = 100.0
KEYWORD_BLEND = 0.2


@dataclass(frozen=True)
class IssueTemplate:
    severity: str
    category: str
    title: str
    description: str
    impact: str
    how_to_fix: str

    def render(self, facts: Facts) -> Issue:
        return Issue(
            severity=self.severity,
            category=self.category,
            title=self.title.format(**facts),
            description=self.description.format(**facts),
            impact=self.impact,
            how_to_fix=self.how_to_fix,
        )


@dataclass(frozen=True)
class OpportunityTemplate:
    priority: str
    category: str
    title: str
    description: str
    impact: str
    effort: str
    potential: float

    def render(self, facts: Facts) -> Opportunity:
        return Opportunity(
            priority=self.priority,
            category=self.category,
            title=self.title.format(**facts),
            description=self.description.format(**facts),
            impact=self.impact,
            effort=self.effort,
            potential=self.potential,
        )


@dataclass(frozen=True)
class Rule:
    when: Callable[[Facts], bool]
    deduction: Union[float, Callable[[Facts], float]]
    finding: Union[IssueTemplate, OpportunityTemplate]

    def points(self, facts: Facts) -> float:
        return float(self.deduction(facts) if callable(self.deduction) else self.deduction)


def _always(facts: Facts) -> bool:
    return True


@dataclass(frozen=True)
class Check:
    key: str
    credit: float
    rules: Tuple[Rule, ...]
    credit_when: Callable[[Facts], bool] = _always


def page_facts(result: CrawlResult) -> Facts:
    """Values the rule conditions and finding texts are evaluated against."""
    missing_alt = sum(1 for img in result.images if not img.alt)
    return {
        "has_https": result.has_https,
        "status_code": result.status_code,
        "canonical_url": result.canonical_url,
        "mobile_friendly": result.mobile_friendly,
        "word_count": result.word_count,
        "h1_count": len(result.h1_tags),
        "h2_count": len(result.h2_tags),
        "title_length": len(result.title),
        "description_length": len(result.meta_description),
        "image_count": len(result.images),
        "missing_alt": missing_alt,
        "load_time_ms": result.load_time_ms,
    }


TECHNICAL_CHECKS = (
    Check("https", 15, (
        Rule(lambda f: not f["has_https"], 15, IssueTemplate(
            "critical", "security", "Missing HTTPS",
            "Website is not using HTTPS encryption",
            "Negative ranking factor and security risk",
            "Install SSL certificate and redirect all HTTP traffic to HTTPS",
        )),
    )),
    Check("status_code", 20, (
        Rule(lambda f: f["status_code"] != 200, 20, IssueTemplate(
            "critical", "technical", "Non-200 Status Code: {status_code}",
            "Page returns an error status code",
            "Search engines may not index this page",
            "Fix server configuration or broken links",
        )),
    )),
    Check("canonical", 5, (
        Rule(lambda f: not f["canonical_url"], 5, OpportunityTemplate(
            "medium", "technical", "Missing Canonical URL",
            "No canonical link tag found",
            "May cause duplicate content issues",
            "low", 5,
        )),
    )),
    Check("mobile", 10, (
        Rule(lambda f: not f["mobile_friendly"], 10, IssueTemplate(
            "high", "mobile", "Not Mobile-Friendly",
            "Missing or incorrect viewport meta tag",
            "Poor mobile experience and ranking penalty",
            'Add <meta name="viewport" content="width=device-width, initial-scale=1">',
        )),
    )),
)

CONTENT_CHECKS = (
    Check("word_count", 20, (
        Rule(lambda f: f["word_count"] < 300, 20, IssueTemplate(
            "high", "content", "Thin Content",
            "Only {word_count} words found (recommended: 300+)",
            "May be considered low-quality by search engines",
            "Add more valuable, relevant content to the page",
        )),
        Rule(lambda f: f["word_count"] < 600, 10, OpportunityTemplate(
            "medium", "content", "Expand Content",
            "Page has {word_count} words (recommended: 600+ for better rankings)",
            "More comprehensive content tends to rank better",
            "medium", 10,
        )),
    )),
    Check("h1", 15, (
        Rule(lambda f: f["h1_count"] == 0, 15, IssueTemplate(
            "high", "content", "Missing H1 Tag",
            "No H1 heading found on page",
            "H1 is important for SEO and accessibility",
            "Add a clear, keyword-rich H1 heading",
        )),
        Rule(lambda f: f["h1_count"] > 1, 5, OpportunityTemplate(
            "low", "content", "Multiple H1 Tags",
            "Found {h1_count} H1 tags (best practice: 1)",
            "May dilute SEO impact",
            "low", 5,
        )),
    )),
    Check("h2", 10, (
        Rule(lambda f: f["h2_count"] == 0 and f["word_count"] > 300, 10, OpportunityTemplate(
            "medium", "content", "No H2 Headings",
            "Page lacks subheadings for content structure",
            "Improves readability and SEO",
            "low", 10,
        )),
    ), credit_when=lambda f: f["h2_count"] > 0),
)

ON_PAGE_CHECKS = (
    Check("title", 30, (
        Rule(lambda f: f["title_length"] == 0, 30, IssueTemplate(
            "critical", "on_page", "Missing Title Tag",
            "No title tag found",
            "Critical for SEO and CTR",
            "Add a unique, descriptive title tag (50-60 characters)",
        )),
        Rule(lambda f: f["title_length"] < 30, 10, IssueTemplate(
            "medium", "on_page", "Title Too Short",
            "Title is {title_length} characters (recommended: 50-60)",
            "Not utilizing full SERP space",
            "Expand title to include more relevant keywords",
        )),
        Rule(lambda f: f["title_length"] > 60, 5, OpportunityTemplate(
            "low", "on_page", "Title Too Long",
            "Title is {title_length} characters (may be truncated)",
            "May be cut off in search results",
            "low", 5,
        )),
    )),
    Check("meta_description", 20, (
        Rule(lambda f: f["description_length"] == 0, 20, OpportunityTemplate(
            "high", "on_page", "Missing Meta Description",
            "No meta description found",
            "Missed opportunity to improve CTR",
            "low", 20,
        )),
        Rule(lambda f: not 120 <= f["description_length"] <= 160, 5, OpportunityTemplate(
            "medium", "on_page", "Meta Description Length",
            "Description is {description_length} characters (optimal: 120-160)",
            "May be truncated or too short",
            "low", 5,
        )),
    )),
    Check("image_alt", 10, (
        Rule(lambda f: f["missing_alt"] > 0, lambda f: min(10, f["missing_alt"]), OpportunityTemplate(
            "medium", "on_page", "Missing Image ALT Text",
            "{missing_alt} images without ALT attributes",
            "Accessibility and image SEO",
            "low", 10,
        )),
    ), credit_when=lambda f: f["image_count"] > 0),
)

PERFORMANCE_CHECKS = (
    Check("load_time", 30, (
        Rule(lambda f: f["load_time_ms"] > 3000, 30, IssueTemplate(
            "high", "performance", "Slow Page Load",
            "Page loads in {load_time_ms}ms (target: <3000ms)",
            "Negative ranking factor and user experience",
            "Optimize images, enable caching, use CDN, minimize CSS/JS",
        )),
        Rule(lambda f: f["load_time_ms"] > 2000, 15, OpportunityTemplate(
            "medium", "performance", "Improve Load Time",
            "Page loads in {load_time_ms}ms (good but can be better)",
            "Faster is always better for UX and SEO",
            "medium", 15,
        )),
    )),
)


def clamp(points: float) -> float:
    return max(0.0, min(MAX_POINTS, points))


class _ScoreAccumulator:
    def __init__(self):
        self.issues: List[Issue] = []
        self.opportunities: List[Opportunity] = []
        self.breakdown: Dict[str, float] = {}

    def evaluate(self, checks: Sequence[Check], facts: Facts) -> float:
        """Apply `checks` to `facts`; returns the unclamped category points."""
        points = MAX_POINTS
        for check in checks:
            rule = next((r for r in check.rules if r.when(facts)), None)
            if rule is None:
                if check.credit_when(facts):
                    self.breakdown[check.key] = float(check.credit)
                continue
            points -= rule.points(facts)
            finding = rule.finding.render(facts)
            if isinstance(finding, Issue):
                self.issues.append(finding)
            else:
                self.opportunities.append(finding)
        return points


class SeoAnalyzer:
    """Scores crawl results; optionally weighs in target keyword relevance.

    Pure and stateless apart from the keyword list, so one analyzer can score
    any number of results from any thread.
    """

    def __init__(self, keywords: Optional[Iterable[str]] = None):
        self.keywords = tuple(normalize_keywords(keywords or ()))

    def analyze(self, result: CrawlResult) -> SEOScore:
        facts = page_facts(result)
        acc = _ScoreAccumulator()

        technical = clamp(acc.evaluate(TECHNICAL_CHECKS, facts))

        content = acc.evaluate(CONTENT_CHECKS, facts)
        if self.keywords:
            keyword_score = keyword_relevance_score(result, self.keywords)
            content = content * (1 - KEYWORD_BLEND) + keyword_score * KEYWORD_BLEND
            acc.breakdown["keywords"] = keyword_score
        content = clamp(content)

        on_page = clamp(acc.evaluate(ON_PAGE_CHECKS, facts))
        performance = clamp(acc.evaluate(PERFORMANCE_CHECKS, facts))

        score = SEOScore(
            technical=technical,
            content=content,
            on_page=on_page,
            performance=performance,
            issues=tuple(acc.issues),
            opportunities=tuple(acc.opportunities),
            breakdown=acc.breakdown,
        )
        logger.debug("Scored %s: overall=%.1f", result.url, score.overall)
        return score


def score_page(result: CrawlResult, keywords: Optional[Iterable[str]] = None) -> SEOScore:
    return SeoAnalyzer(keywords).analyze(result)
