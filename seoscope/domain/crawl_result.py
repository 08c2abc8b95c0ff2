"""Per-page crawl snapshot records."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple
from urllib.parse import urlsplit


@dataclass(frozen=True)
class Image:
    src: str
    alt: str = ""
    title: str = ""
    width: int = 0
    height: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "src": self.src,
            "alt": self.alt,
            "title": self.title,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Image":
        return cls(
            src=data.get("src") or "",
            alt=data.get("alt") or "",
            title=data.get("title") or "",
            width=int(data.get("width") or 0),
            height=int(data.get("height") or 0),
        )


@dataclass(frozen=True)
class CrawlResult:
    """Immutable snapshot of the SEO-relevant signals of one fetched page.

    Sequences are tuples and headers a read-only copy, so a result cannot be
    mutated after construction; absent values use their empty default rather
    than None.
    """

    url: str
    status_code: int = 0
    title: str = ""
    meta_description: str = ""
    h1_tags: Tuple[str, ...] = ()
    h2_tags: Tuple[str, ...] = ()
    links: Tuple[str, ...] = ()
    images: Tuple[Image, ...] = ()
    word_count: int = 0
    load_time_ms: int = 0
    mobile_friendly: bool = False
    has_https: bool = False
    canonical_url: str = ""
    errors: Tuple[str, ...] = ()
    headers: Mapping[str, str] = field(default_factory=dict)
    response_size: int = 0

    def __post_init__(self):
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers or {})))

    @property
    def host(self) -> str:
        return urlsplit(self.url).netloc.lower()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "status_code": self.status_code,
            "title": self.title,
            "meta_description": self.meta_description,
            "h1_tags": list(self.h1_tags),
            "h2_tags": list(self.h2_tags),
            "links": list(self.links),
            "images": [img.to_dict() for img in self.images],
            "word_count": self.word_count,
            "load_time_ms": self.load_time_ms,
            "mobile_friendly": self.mobile_friendly,
            "has_https": self.has_https,
            "canonical_url": self.canonical_url,
            "errors": list(self.errors),
            "headers": dict(self.headers),
            "response_size": self.response_size,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CrawlResult":
        return cls(
            url=data["url"],
            status_code=int(data.get("status_code") or 0),
            title=data.get("title") or "",
            meta_description=data.get("meta_description") or "",
            h1_tags=tuple(data.get("h1_tags") or ()),
            h2_tags=tuple(data.get("h2_tags") or ()),
            links=tuple(data.get("links") or ()),
            images=tuple(Image.from_dict(img) for img in data.get("images") or ()),
            word_count=int(data.get("word_count") or 0),
            load_time_ms=int(data.get("load_time_ms") or 0),
            mobile_friendly=bool(data.get("mobile_friendly")),
            has_https=bool(data.get("has_https")),
            canonical_url=data.get("canonical_url") or "",
            errors=tuple(data.get("errors") or ()),
            headers=dict(data.get("headers") or {}),
            response_size=int(data.get("response_size") or 0),
        )
