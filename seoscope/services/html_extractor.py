import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from bs4.element import CData, Declaration, Doctype, ProcessingInstruction

from seoscope.domain.crawl_result import Image
from seoscope.exceptions import ParseError

logger = logging.getLogger(__name__)

ELEMENT = "element"
TEXT = "text"
COMMENT = "comment"

_SKIPPED_STRINGS = (CData, Declaration, Doctype, ProcessingInstruction)


def node_kind(node) -> Optional[str]:
    """Classify a parsed node as element, text or comment (None for anything else)."""
    if isinstance(node, Tag):
        return ELEMENT
    if isinstance(node, Comment):
        return COMMENT
    if isinstance(node, _SKIPPED_STRINGS):
        return None
    if isinstance(node, NavigableString):
        return TEXT
    return None


def resolve_url(href: str, base_url: str) -> Optional[str]:
    """Resolve `href` against `base_url`; None when either cannot be parsed."""
    try:
        return urljoin(base_url, href)
    except ValueError:
        logger.debug("Dropping malformed URL %r (base %s)", href, base_url)
        return None


def _int_attr(tag: Tag, name: str) -> int:
    raw = tag.get(name)
    if raw is None:
        return 0
    try:
        return int(str(raw).strip().removesuffix("px"))
    except ValueError:
        return 0


def _attr_values(tag: Tag, name: str) -> List[str]:
    raw = tag.get(name)
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = raw.split()
    return [v.lower() for v in raw]


@dataclass(frozen=True)
class ExtractedPage:
    """Structural signals pulled from one HTML document."""

    title: str = ""
    meta_description: str = ""
    h1_tags: Tuple[str, ...] = ()
    h2_tags: Tuple[str, ...] = ()
    links: Tuple[str, ...] = ()
    images: Tuple[Image, ...] = ()
    canonical_url: str = ""
    word_count: int = 0
    viewport: str = ""


class _Collector:
    def __init__(self, base_url: str):
        self.base_url = base_url
        self.title: Optional[str] = None
        self.meta_description = ""
        self.h1_tags: List[str] = []
        self.h2_tags: List[str] = []
        self.links: List[str] = []
        self.images: List[Image] = []
        self.canonical_url: Optional[str] = None
        self.word_count = 0
        self.viewport: Optional[str] = None

    def visit_element(self, tag: Tag) -> None:
        name = tag.name.lower() if tag.name else ""
        if name == "title":
            if self.title is None:
                self.title = tag.get_text().strip()
        elif name == "meta":
            self._visit_meta(tag)
        elif name in ("h1", "h2"):
            text = tag.get_text().strip()
            if text:
                (self.h1_tags if name == "h1" else self.h2_tags).append(text)
        elif name == "a":
            href = (tag.get("href") or "").strip()
            if href:
                absolute = resolve_url(href, self.base_url)
                if absolute:
                    self.links.append(absolute)
        elif name == "img":
            src = (tag.get("src") or "").strip()
            if src:
                absolute = resolve_url(src, self.base_url)
                if absolute:
                    self.images.append(
                        Image(
                            src=absolute,
                            alt=tag.get("alt") or "",
                            title=tag.get("title") or "",
                            width=_int_attr(tag, "width"),
                            height=_int_attr(tag, "height"),
                        )
                    )
        elif name == "link":
            if self.canonical_url is None and "canonical" in _attr_values(tag, "rel"):
                self.canonical_url = tag.get("href") or ""

    def _visit_meta(self, tag: Tag) -> None:
        meta_name = (tag.get("name") or "").strip().lower()
        meta_property = (tag.get("property") or "").strip().lower()
        content = tag.get("content") or ""
        if meta_name == "description" or meta_property == "og:description":
            # An empty content attribute does not claim the slot.
            if not self.meta_description:
                self.meta_description = content
        elif meta_name == "viewport" and self.viewport is None:
            self.viewport = content

    def visit_text(self, text: NavigableString) -> None:
        self.word_count += len(str(text).split())

    def visit_comment(self, comment: Comment) -> None:
        return None

    def build(self) -> ExtractedPage:
        return ExtractedPage(
            title=self.title or "",
            meta_description=self.meta_description,
            h1_tags=tuple(self.h1_tags),
            h2_tags=tuple(self.h2_tags),
            links=tuple(self.links),
            images=tuple(self.images),
            canonical_url=self.canonical_url or "",
            word_count=self.word_count,
            viewport=self.viewport or "",
        )


class HtmlExtractor:
    """Single pre-order pass over a parsed document collecting SEO signals."""

    def __init__(self, soup_factory: Optional[Callable[[str], BeautifulSoup]] = None):
        self._soup_factory = soup_factory or (lambda html: BeautifulSoup(html, "html.parser"))

    def parse(self, html: str, url: str = "") -> BeautifulSoup:
        try:
            return self._soup_factory(html or "")
        except Exception as e:
            raise ParseError(url, e) from e

    def extract(self, html: str, base_url: str) -> ExtractedPage:
        return self.extract_from_soup(self.parse(html, base_url), base_url)

    def extract_from_soup(self, soup: BeautifulSoup, base_url: str) -> ExtractedPage:
        collector = _Collector(base_url)
        visitors = {
            ELEMENT: collector.visit_element,
            TEXT: collector.visit_text,
            COMMENT: collector.visit_comment,
        }
        # Explicit stack; children pushed in reverse to keep document order.
        stack = list(reversed(list(soup.children)))
        while stack:
            node = stack.pop()
            kind = node_kind(node)
            if kind is None:
                continue
            visitors[kind](node)
            if kind == ELEMENT:
                stack.extend(reversed(list(node.children)))
        return collector.build()
