"""Shared fixtures for local_news tests."""

from datetime import datetime, timedelta, timezone

import pytest

from local_news.models import Article, FeedSource, RawItem
from local_news.normalizer import credibility_score, make_article_id

NOW = datetime(2026, 2, 10, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def source():
    return FeedSource("https://example.com/feed/", "Example", "top", 1)


@pytest.fixture
def make_raw():
    def _make(title="Council approves transit funding", hours_ago=1.0, link="https://example.com/a", **kwargs):
        return RawItem(
            title=title,
            link=link,
            published_at=NOW - timedelta(hours=hours_ago),
            **kwargs,
        )
    return _make


@pytest.fixture
def make_article():
    counter = {"n": 0}

    def _make(title, source="NBC10", tier=1, category="top", hours_ago=1.0, link=None):
        counter["n"] += 1
        link = link or f"https://example.com/{counter['n']}"
        return Article(
            id=make_article_id(link),
            title=title,
            link=link,
            excerpt="",
            source=source,
            source_url="https://example.com",
            published_at=NOW - timedelta(hours=hours_ago),
            category=category,
            credibility_score=credibility_score(tier),
        )
    return _make
