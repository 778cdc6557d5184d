from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Literal, Optional, Tuple

Category = Literal["top", "local", "sports", "culture"]

CATEGORIES: Tuple[str, ...] = ("top", "local", "sports", "culture")


@dataclass(frozen=True)
class FeedSource:
    """
    A configured feed endpoint.

    credibility_tier is ordinal: 1 is the most trusted, 3 the least.
    """
    url: str
    name: str
    category: Category
    credibility_tier: int

    def __post_init__(self) -> None:
        if self.category not in CATEGORIES:
            raise ValueError(f"Unknown category: {self.category!r}")
        if self.credibility_tier not in (1, 2, 3):
            raise ValueError(f"Credibility tier must be 1, 2 or 3: {self.credibility_tier!r}")


@dataclass(frozen=True)
class RawItem:
    """One parsed feed entry, before filtering."""
    title: str
    link: str
    published_at: datetime
    image_url: Optional[str] = None
    content: Optional[str] = None


@dataclass(frozen=True)
class Article:
    """
    Processed article handed to the presentation layer.

    WARNING: Do not change fields lightly. This is the library's contract.
    """
    id: str
    title: str
    link: str
    excerpt: str
    source: str
    source_url: str
    published_at: datetime
    category: Category
    credibility_score: int
    image_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["published_at"] = self.published_at.isoformat()
        return data


@dataclass(frozen=True)
class AggregationResult:
    top: Tuple[Article, ...]
    local: Tuple[Article, ...]
    sports: Tuple[Article, ...]
    culture: Tuple[Article, ...]
    last_updated: str

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {c: [a.to_dict() for a in getattr(self, c)] for c in CATEGORIES}
        data["last_updated"] = self.last_updated
        return data
