"""
local_news

Aggregates regional RSS/Atom feeds into one ranked, deduplicated feed grouped by section.

Core ideas:
- Input: a registry of feed sources, each with a section and a credibility tier
- Process: fetch (concurrently) → filter (clickbait, non-news, stale, short) →
  deduplicate similar headlines → rank → cap articles per source
- Output: AggregationResult with top/local/sports/culture sections and a timestamp

Example
-------
from local_news import aggregate

result = aggregate()

for article in result.top:
    print(article.published_at, article.source, article.title)
"""
from .models import AggregationResult, Article, FeedSource, RawItem
from .config import AggregatorConfig
from .core import NewsAggregator, aggregate
from .sources import FEEDS

__all__ = [
    "AggregationResult",
    "AggregatorConfig",
    "Article",
    "FEEDS",
    "FeedSource",
    "NewsAggregator",
    "RawItem",
    "aggregate",
]
