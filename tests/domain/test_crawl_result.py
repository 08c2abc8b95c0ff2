import dataclasses
import json

import pytest

from seoscope.domain import CrawlResult, Image


def _full_result():
    return CrawlResult(
        url="https://example.com/page",
        status_code=200,
        title="Example page",
        meta_description="A description",
        h1_tags=("Welcome",),
        h2_tags=("First", "Second"),
        links=("https://example.com/a", "https://other.com/"),
        images=(Image(src="https://example.com/a.png", alt="", title="logo", width=10, height=20),),
        word_count=321,
        load_time_ms=1234,
        mobile_friendly=True,
        has_https=True,
        canonical_url="https://example.com/page",
        errors=("HTTP status 404",),
        headers={"Content-Type": "text/html"},
        response_size=4096,
    )


def test_to_dict_survives_json_and_back():
    result = _full_result()
    data = json.loads(json.dumps(result.to_dict()))
    assert CrawlResult.from_dict(data) == result


def test_empty_sequences_serialize_as_empty_lists():
    data = CrawlResult(url="https://example.com").to_dict()
    for key in ("h1_tags", "h2_tags", "links", "images", "errors"):
        assert data[key] == []
    assert data["headers"] == {}


def test_from_dict_treats_missing_fields_as_empty_defaults():
    result = CrawlResult.from_dict({"url": "https://example.com", "meta_description": None})
    assert result.meta_description == ""
    assert result.images == ()
    assert result.status_code == 0


def test_result_is_immutable():
    result = _full_result()
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.title = "changed"


def test_host_is_lowercased_netloc():
    assert CrawlResult(url="https://Example.COM:8443/x").host == "example.com:8443"


def test_headers_are_a_read_only_copy():
    headers = {"Content-Type": "text/html"}
    result = CrawlResult(url="https://example.com", headers=headers)
    headers["X-Later"] = "1"

    assert "X-Later" not in result.headers
    with pytest.raises(TypeError):
        result.headers["Content-Type"] = "text/plain"
    assert result.headers == {"Content-Type": "text/html"}
