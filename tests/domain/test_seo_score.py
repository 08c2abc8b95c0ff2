import json

import pytest

from seoscope.domain import Issue, Opportunity, SEOScore
from seoscope.domain.seo_score import CATEGORY_WEIGHTS


def test_category_weights_sum_to_one():
    assert sum(CATEGORY_WEIGHTS.values()) == pytest.approx(1.0)


def test_overall_is_weighted_combination():
    score = SEOScore(technical=80, content=60, on_page=40, performance=100)
    assert score.overall == pytest.approx(0.25 * 80 + 0.35 * 60 + 0.25 * 40 + 0.15 * 100)


def test_round_trip_preserves_every_field():
    score = SEOScore(
        technical=85.0,
        content=72.5,
        on_page=80.0,
        performance=100.0,
        issues=(Issue("critical", "security", "Missing HTTPS", "d", "i", "fix"),),
        opportunities=(Opportunity("high", "on_page", "Missing Meta Description", "d", "i", "low", 20.0),),
        breakdown={"status_code": 20.0, "keywords": 40.0},
    )
    data = json.loads(json.dumps(score.to_dict()))
    assert data["overall"] == pytest.approx(score.overall)
    assert SEOScore.from_dict(data) == score


def test_empty_findings_serialize_as_empty_lists():
    data = SEOScore(technical=100, content=100, on_page=100, performance=100).to_dict()
    assert data["issues"] == []
    assert data["opportunities"] == []
    assert data["breakdown"] == {}


def test_breakdown_is_a_read_only_copy():
    breakdown = {"https": 15.0}
    score = SEOScore(technical=100, content=100, on_page=100, performance=100, breakdown=breakdown)
    breakdown["https"] = 0.0

    assert score.breakdown["https"] == 15.0
    with pytest.raises(TypeError):
        score.breakdown["keywords"] = 40.0
