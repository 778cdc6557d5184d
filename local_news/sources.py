"""
Feed registry for Philadelphia news.

Tiers:
1 - established outlets with strong editorial standards and original reporting
2 - digital-native local publications with good track records
3 - aggregators (broad coverage, claims need verification)

Order matters: it is the order articles enter deduplication.
"""
from __future__ import annotations

from typing import Tuple

from .models import FeedSource

FEEDS: Tuple[FeedSource, ...] = (
    # Tier 1
    FeedSource("https://www.nbcphiladelphia.com/feed/", "NBC10", "top", 1),
    FeedSource("https://6abc.com/feed/", "6ABC", "top", 1),
    FeedSource("https://whyy.org/feed/", "WHYY", "top", 1),
    # Tier 2
    FeedSource("https://billypenn.com/feed/", "Billy Penn", "local", 2),
    FeedSource("https://www.phillyvoice.com/feed/", "PhillyVoice", "local", 2),
    FeedSource(
        "https://www.phillytrib.com/search/?f=rss&t=article&c=news&l=50&s=start_time&sd=desc",
        "Philadelphia Tribune",
        "local",
        2,
    ),
    FeedSource("https://thephiladelphiacitizen.org/feed/", "The Philadelphia Citizen", "local", 2),
    # Tier 3
    FeedSource(
        "https://news.google.com/rss/search?q=philadelphia+news&hl=en-US&gl=US&ceid=US:en",
        "Google News",
        "top",
        3,
    ),
    # Breaking news / crime stories that cycle out of the main feeds quickly
    FeedSource(
        "https://news.google.com/rss/search?q=philadelphia+shooting+OR+philadelphia+crime&hl=en-US&gl=US&ceid=US:en",
        "Google News",
        "top",
        3,
    ),
)
