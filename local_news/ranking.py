from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

from .models import Article

RECENCY_WEIGHT = 0.8
CREDIBILITY_WEIGHT = 0.2
DECAY_HOURS = 48.0

# Per-section limits: (max articles per source, section size)
SECTION_LIMITS: Dict[str, tuple] = {
    "top": (3, 8),
    "local": (2, 8),
    "sports": (None, 6),
    "culture": (None, 6),
}


def by_credibility(items: Iterable[Article]) -> List[Article]:
    """Credibility descending, then newest first. Stable."""
    return sorted(items, key=lambda a: (-a.credibility_score, -a.published_at.timestamp()))


def top_score(article: Article, now: datetime, decay_hours: float = DECAY_HOURS) -> float:
    """
    Freshness-weighted score for the top section.

    Recency decays linearly to zero at ``decay_hours`` and is not clamped.
    """
    age_hours = (now - article.published_at).total_seconds() / 3600
    recency = 1 - age_hours / decay_hours
    return recency * RECENCY_WEIGHT + (article.credibility_score / 100) * CREDIBILITY_WEIGHT


def by_top_score(items: Iterable[Article], now: datetime, decay_hours: float = DECAY_HOURS) -> List[Article]:
    return sorted(items, key=lambda a: top_score(a, now, decay_hours), reverse=True)


def ensure_source_diversity(items: Sequence[Article], max_per_source: Optional[int]) -> List[Article]:
    """
    Keep articles in order while no source has more than ``max_per_source`` kept.

    Never reorders; None disables the cap.
    """
    if max_per_source is None:
        return list(items)
    counts: Dict[str, int] = {}
    out: List[Article] = []
    for it in items:
        count = counts.get(it.source, 0)
        if count >= max_per_source:
            continue
        counts[it.source] = count + 1
        out.append(it)
    return out


def build_section(items: Sequence[Article], category: str) -> List[Article]:
    """Apply the category's diversity cap and size limit to an already ordered list."""
    max_per_source, size = SECTION_LIMITS[category]
    return ensure_source_diversity(items, max_per_source)[:size]
