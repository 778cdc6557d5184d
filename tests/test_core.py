"""Tests for the aggregation pipeline."""

from datetime import datetime, timedelta
from unittest.mock import patch

import pytest

from local_news.config import AggregatorConfig
from local_news.core import NewsAggregator, aggregate
from local_news.exceptions import RSSFetchError
from local_news.fetcher import FeedBatch
from local_news.models import AggregationResult, FeedSource, RawItem

NBC = FeedSource("https://nbc.example/feed", "NBC10", "top", 1)
GOOGLE = FeedSource("https://google.example/rss", "Google News", "top", 3)
BILLY = FeedSource("https://billy.example/feed", "Billy Penn", "local", 2)
VOICE = FeedSource("https://voice.example/feed", "PhillyVoice", "local", 2)
SPORTS = FeedSource("https://sports.example/feed", "Sports Desk", "sports", 2)
CULTURE = FeedSource("https://culture.example/feed", "Culture Desk", "culture", 3)


def _raw(now, title, hours_ago=1.0, link=None):
    return RawItem(
        title=title,
        link=link or "https://example.com/" + title.lower().replace(" ", "-"),
        published_at=now - timedelta(hours=hours_ago),
    )


@pytest.fixture
def aggregator(now):
    def _make(batches):
        sources = [b.source for b in batches]
        agg = NewsAggregator(sources=sources, config=AggregatorConfig(), clock=lambda: now)
        patcher = patch("local_news.core.fetch_all", return_value=batches)
        return agg, patcher
    return _make


class TestAggregate:
    def test_all_fetches_fail(self, now):
        agg = NewsAggregator(sources=[NBC, BILLY], config=AggregatorConfig(), clock=lambda: now)

        with patch("local_news.fetcher.fetch_feed", side_effect=RSSFetchError("down")):
            result = agg.aggregate()

        assert isinstance(result, AggregationResult)
        assert result.top == result.local == result.sports == result.culture == ()
        assert datetime.fromisoformat(result.last_updated) == now

    def test_duplicate_keeps_most_credible(self, now, aggregator):
        agg, patcher = aggregator([
            FeedBatch(GOOGLE, [_raw(now, "Mayor Announces New Budget Plan!!", link="https://g.example/1")]),
            FeedBatch(NBC, [_raw(now, "Mayor announces new budget plan", link="https://nbc.example/1")]),
        ])

        with patcher:
            result = agg.aggregate()

        assert [a.source for a in result.top] == ["NBC10"]
        assert result.top[0].credibility_score == 100

    def test_filters_bad_items(self, now, aggregator):
        agg, patcher = aggregator([
            FeedBatch(NBC, [
                _raw(now, "You Won't Believe What Happened Downtown"),
                _raw(now, "Newscast for Tuesday"),
                _raw(now, "Old council vote coverage", hours_ago=72),
                _raw(now, "Short"),
                _raw(now, "Water main break floods Kensington"),
            ]),
        ])

        with patcher:
            result = agg.aggregate()

        assert [a.title for a in result.top] == ["Water main break floods Kensington"]

    def test_top_section_diversity_cap(self, now, aggregator):
        titles = [
            "Shooting investigation in North Philadelphia",
            "Airport adds direct flights to Lisbon",
            "Regional rail delays expected Monday",
            "School district names new superintendent",
            "Zoo welcomes rare red panda cubs",
        ]
        items = [_raw(now, t, hours_ago=i + 1) for i, t in enumerate(titles)]
        agg, patcher = aggregator([FeedBatch(GOOGLE, items)])

        with patcher:
            result = agg.aggregate()

        assert [a.title for a in result.top] == titles[:3]

    def test_top_section_favors_freshness(self, now, aggregator):
        agg, patcher = aggregator([
            FeedBatch(NBC, [_raw(now, "Council passes housing bill", hours_ago=30)]),
            FeedBatch(GOOGLE, [_raw(now, "Fire crews battle warehouse blaze", hours_ago=1)]),
        ])

        with patcher:
            result = agg.aggregate()

        assert [a.source for a in result.top] == ["Google News", "NBC10"]

    def test_local_section_cap_and_order(self, now, aggregator):
        billy = [
            _raw(now, "Parks department unveils budget", hours_ago=3),
            _raw(now, "New transit map for bus riders", hours_ago=1),
            _raw(now, "Library branches extend weekend hours", hours_ago=2),
        ]
        voice = [
            _raw(now, "Rowhome repair grants reopen", hours_ago=5),
            _raw(now, "Food truck permits get cheaper", hours_ago=4),
        ]
        agg, patcher = aggregator([FeedBatch(BILLY, billy), FeedBatch(VOICE, voice)])

        with patcher:
            result = agg.aggregate()

        assert [a.source for a in result.local] == ["Billy Penn", "Billy Penn", "PhillyVoice", "PhillyVoice"]
        dates = [a.published_at for a in result.local]
        assert dates[0] > dates[1] and dates[2] > dates[3]

    def test_sports_and_culture_uncapped_per_source(self, now, aggregator):
        sports_titles = [
            "Eagles clinch playoff berth",
            "Phillies add veteran reliever",
            "Sixers rally past Boston late",
            "Flyers goalie sets franchise mark",
            "Union open preseason camp",
            "Wings lacrosse sells out opener",
            "Temple hires new football coach",
        ]
        culture_titles = [
            "Fabric Workshop opens textile show",
            "Clay studio moves to Kensington",
            "Neon museum relights old signs",
        ]
        sports = [_raw(now, t, hours_ago=i + 1) for i, t in enumerate(sports_titles)]
        culture = [_raw(now, t, hours_ago=i + 1) for i, t in enumerate(culture_titles)]
        agg, patcher = aggregator([FeedBatch(SPORTS, sports), FeedBatch(CULTURE, culture)])

        with patcher:
            result = agg.aggregate()

        assert len(result.sports) == 6
        assert [a.title for a in result.sports] == [s.title for s in sports[:6]]
        assert len(result.culture) == 3

    def test_to_dict_shape(self, now, aggregator):
        agg, patcher = aggregator([FeedBatch(NBC, [_raw(now, "Water main break floods Kensington")])])

        with patcher:
            data = agg.aggregate().to_dict()

        assert set(data) == {"top", "local", "sports", "culture", "last_updated"}
        assert data["top"][0]["source"] == "NBC10"


class TestModuleAggregate:
    @patch("local_news.core.fetch_all", return_value=[])
    def test_callable_without_arguments(self, mock_fetch_all, monkeypatch):
        monkeypatch.delenv("LOCAL_NEWS_TIMEOUT", raising=False)

        result = aggregate()

        assert result.top == ()
        assert mock_fetch_all.call_count == 1
