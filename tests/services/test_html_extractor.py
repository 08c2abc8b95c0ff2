import pytest

from seoscope.domain import Image
from seoscope.exceptions import ParseError
from seoscope.services.html_extractor import COMMENT, ELEMENT, TEXT, HtmlExtractor, node_kind, resolve_url

BASE = "https://example.com/dir/page.html"

PAGE = """<!DOCTYPE html>
<html><head>
<title> My Page </title>
<meta name="description" content="First description">
<meta property="og:description" content="Second description">
<meta name="viewport" content="width=device-width, initial-scale=1">
<link rel="stylesheet" href="/style.css">
<link rel="canonical" href="https://example.com/canonical">
<link rel="canonical" href="https://example.com/ignored">
</head><body>
<h1> Main <span>heading</span> </h1>
<h2>Sub A</h2><h2>   </h2><h2>Sub B</h2>
<a href="/about">About</a>
<a href="">Empty</a>
<a href="http://[broken">Broken</a>
<a href="https://other.com/x">Other</a>
<a name="anchor-only">Anchor</a>
<img src="img/a.png" alt="A picture" title="T" width="100" height="50">
<img src="" alt="nothing">
<img src="/b.png">
</body></html>
"""


@pytest.fixture
def page():
    return HtmlExtractor().extract(PAGE, BASE)


def test_title_is_first_title_trimmed(page):
    assert page.title == "My Page"


def test_meta_description_first_wins(page):
    assert page.meta_description == "First description"


def test_og_description_used_when_no_description():
    html = '<meta property="og:description" content="From OG"><meta name="description" content="Later">'
    assert HtmlExtractor().extract(html, BASE).meta_description == "From OG"


def test_headings_in_document_order_and_trimmed(page):
    assert page.h1_tags == ("Main heading",)
    assert page.h2_tags == ("Sub A", "Sub B")


def test_links_resolved_and_malformed_dropped(page):
    assert page.links == ("https://example.com/about", "https://other.com/x")


def test_images_resolved_with_attributes(page):
    assert page.images == (
        Image(src="https://example.com/dir/img/a.png", alt="A picture", title="T", width=100, height=50),
        Image(src="https://example.com/b.png", alt="", title="", width=0, height=0),
    )


def test_canonical_first_occurrence(page):
    assert page.canonical_url == "https://example.com/canonical"


def test_viewport_content_captured(page):
    assert page.viewport == "width=device-width, initial-scale=1"


def test_word_count_covers_all_text_but_not_comments():
    html = (
        "<html><head><title>Hello world</title></head>"
        "<body><p>one two  three</p><!-- not counted at all -->"
        "<div>\n four\tfive </div></body></html>"
    )
    assert HtmlExtractor().extract(html, BASE).word_count == 7


def test_recovers_from_broken_markup():
    page = HtmlExtractor().extract("<html><body><h1>Unclosed<p>some text<div></span>", BASE)
    assert len(page.h1_tags) == 1
    assert page.word_count >= 3


def test_empty_document_yields_defaults():
    page = HtmlExtractor().extract("", BASE)
    assert page.title == ""
    assert page.links == ()
    assert page.word_count == 0


def test_soup_failure_raises_parse_error():
    def boom(html):
        raise ValueError("cannot parse")

    with pytest.raises(ParseError):
        HtmlExtractor(soup_factory=boom).extract("<html>", BASE)


def test_node_kind_dispatch():
    soup = HtmlExtractor().parse("<p>text<!--c--></p>")
    p = soup.find("p")
    text, comment = list(p.children)
    assert node_kind(p) == ELEMENT
    assert node_kind(text) == TEXT
    assert node_kind(comment) == COMMENT


def test_resolve_url():
    assert resolve_url("../x", BASE) == "https://example.com/x"
    assert resolve_url("https://a.com/", BASE) == "https://a.com/"
    assert resolve_url("http://[oops", BASE) is None
