from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

from .classifier import screen
from .config import AggregatorConfig
from .dedup import deduplicate
from .fetcher import fetch_all
from .models import AggregationResult, Article, FeedSource
from .ranking import build_section, by_credibility, by_top_score
from .sources import FEEDS

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NewsAggregator:
    """
    High-level API: fetch every registered feed and return ranked sections.

    Pipeline: fetch (concurrent) → filter → deduplicate → sort → split by category → rank/diversify
    """

    def __init__(
        self,
        *,
        sources: Optional[Sequence[FeedSource]] = None,
        config: Optional[AggregatorConfig] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.sources = tuple(FEEDS if sources is None else sources)
        self.config = config or AggregatorConfig.from_env()
        self._clock = clock

    def collect(self, now: datetime) -> List[Article]:
        """Fetch all sources and return the filtered articles in source order."""
        articles: List[Article] = []
        fetched = 0
        for batch in fetch_all(self.sources, config=self.config, now=now):
            fetched += len(batch.items)
            for item in batch.items:
                article = screen(
                    item,
                    batch.source,
                    now=now,
                    max_age_hours=self.config.max_age_hours,
                    source_url=batch.site_url,
                )
                if article is not None:
                    articles.append(article)
        logger.info("Fetched %d items from %d sources, %d passed filters", fetched, len(self.sources), len(articles))
        return articles

    def rank(self, articles: Sequence[Article], now: datetime) -> AggregationResult:
        """Deduplicate, order and cap ``articles`` into the four sections."""
        unique = deduplicate(articles)
        logger.info("%d articles after deduplication", len(unique))

        ordered = by_credibility(unique)

        def in_category(category: str) -> List[Article]:
            return [a for a in ordered if a.category == category]

        top = by_top_score(in_category("top"), now, decay_hours=self.config.max_age_hours)

        return AggregationResult(
            top=tuple(build_section(top, "top")),
            local=tuple(build_section(in_category("local"), "local")),
            sports=tuple(build_section(in_category("sports"), "sports")),
            culture=tuple(build_section(in_category("culture"), "culture")),
            last_updated=now.isoformat(),
        )

    def aggregate(self) -> AggregationResult:
        now = self._clock()
        return self.rank(self.collect(now), now)


def aggregate() -> AggregationResult:
    """Run one aggregation over the default registry with environment config."""
    return NewsAggregator().aggregate()
