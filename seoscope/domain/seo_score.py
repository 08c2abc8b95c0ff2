"""Score records produced by the scoring engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

SEVERITIES = ("critical", "high", "medium", "low")
PRIORITIES = ("high", "medium", "low")
EFFORTS = ("low", "medium", "high")

CATEGORY_WEIGHTS = {
    "technical": 0.25,
    "content": 0.35,
    "on_page": 0.25,
    "performance": 0.15,
}


@dataclass(frozen=True)
class Issue:
    """Hard rule violation with a negative ranking impact."""

    severity: str
    category: str
    title: str
    description: str
    impact: str
    how_to_fix: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity,
            "category": self.category,
            "title": self.title,
            "description": self.description,
            "impact": self.impact,
            "how_to_fix": self.how_to_fix,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Issue":
        return cls(**{k: data[k] for k in ("severity", "category", "title", "description", "impact", "how_to_fix")})


@dataclass(frozen=True)
class Opportunity:
    """Soft improvement suggestion with the points it could recover."""

    priority: str
    category: str
    title: str
    description: str
    impact: str
    effort: str
    potential: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "priority": self.priority,
            "category": self.category,
            "title": self.title,
            "description": self.description,
            "impact": self.impact,
            "effort": self.effort,
            "potential": self.potential,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Opportunity":
        return cls(
            priority=data["priority"],
            category=data["category"],
            title=data["title"],
            description=data["description"],
            impact=data["impact"],
            effort=data["effort"],
            potential=float(data["potential"]),
        )


@dataclass(frozen=True)
class SEOScore:
    technical: float
    content: float
    on_page: float
    performance: float
    issues: Tuple[Issue, ...] = ()
    opportunities: Tuple[Opportunity, ...] = ()
    breakdown: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "breakdown", MappingProxyType(dict(self.breakdown or {})))

    @property
    def overall(self) -> float:
        return (
            self.technical * CATEGORY_WEIGHTS["technical"]
            + self.content * CATEGORY_WEIGHTS["content"]
            + self.on_page * CATEGORY_WEIGHTS["on_page"]
            + self.performance * CATEGORY_WEIGHTS["performance"]
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall": self.overall,
            "technical": self.technical,
            "content": self.content,
            "on_page": self.on_page,
            "performance": self.performance,
            "issues": [i.to_dict() for i in self.issues],
            "opportunities": [o.to_dict() for o in self.opportunities],
            "breakdown": dict(self.breakdown),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SEOScore":
        # `overall` is derived from the category scores and not read back.
        return cls(
            technical=float(data["technical"]),
            content=float(data["content"]),
            on_page=float(data["on_page"]),
            performance=float(data["performance"]),
            issues=tuple(Issue.from_dict(i) for i in data.get("issues") or ()),
            opportunities=tuple(Opportunity.from_dict(o) for o in data.get("opportunities") or ()),
            breakdown={k: float(v) for k, v in (data.get("breakdown") or {}).items()},
        )
