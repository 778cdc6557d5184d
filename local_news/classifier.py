"""
Headline heuristics deciding whether a feed entry is real, fresh news.

Rules are ordered ``(name, predicate)`` pairs over the title, so they can be
added, removed or tested one at a time. Evaluation stops at the first match.
"""
from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta
from typing import Callable, Optional, Sequence, Tuple

from .models import Article, FeedSource, RawItem
from .normalizer import to_article

logger = logging.getLogger(__name__)

TitleRule = Tuple[str, Callable[[str], bool]]

MIN_TITLE_LENGTH = 10
DEFAULT_MAX_AGE_HOURS = 48.0

_MONTHS = (
    "january|february|march|april|may|june|july|"
    "august|september|october|november|december"
)

# Show names that some station feeds publish as if they were stories
GENERIC_SHOW_NAMES = frozenset({"the source", "merv"})


def _pattern(regex: str) -> Callable[[str], bool]:
    compiled = re.compile(regex, re.IGNORECASE)
    return lambda title: compiled.search(title) is not None


RED_FLAG_RULES: Sequence[TitleRule] = (
    ("you_wont_believe", _pattern(r"you won['’]t believe")),
    ("shocking", _pattern(r"shocking")),
    ("n_reasons", _pattern(r"\d+ reasons")),
    ("what_happens_next", _pattern(r"what happens next")),
    ("gone_wrong", _pattern(r"gone wrong")),
    ("video_tag", _pattern(r"\[video\]")),
    ("photos_tag", _pattern(r"\[photos\]")),
    ("click_here", _pattern(r"click here")),
)

NON_NEWS_RULES: Sequence[TitleRule] = (
    ("newscast_for", _pattern(r"^newscast for")),
    ("newscast_weekday", _pattern(r"newscast for \w+day")),
    ("action_news_at", _pattern(r"^action news at")),
    ("good_morning", _pattern(r"^good morning")),
    ("live_at", _pattern(r"^live at \d")),
    ("show_name", lambda title: title.lower() in GENERIC_SHOW_NAMES),
    ("eyewitness_news", _pattern(r"^eyewitness news")),
    ("generic_news_show", _pattern(r"^\w+ news$")),
    ("clock_time_suffix", _pattern(r"- \d+:\d+ [ap]\.?m\.?$")),
    ("dated_title", _pattern(rf"\b(?:{_MONTHS}) \d{{1,2}}, \d{{4}}")),
)


def first_match(title: str, rules: Sequence[TitleRule]) -> Optional[str]:
    """Name of the first rule matching ``title``, or None."""
    for name, predicate in rules:
        if predicate(title):
            return name
    return None


def has_red_flags(title: str) -> bool:
    return first_match(title, RED_FLAG_RULES) is not None


def is_non_news(title: str) -> bool:
    return first_match(title.strip(), NON_NEWS_RULES) is not None


def is_timely(published_at: datetime, now: datetime, max_age_hours: float = DEFAULT_MAX_AGE_HOURS) -> bool:
    return now - published_at <= timedelta(hours=max_age_hours)


def rejection_reason(
    item: RawItem,
    *,
    now: datetime,
    max_age_hours: float = DEFAULT_MAX_AGE_HOURS,
) -> Optional[str]:
    """
    Why ``item`` should be dropped, or None if it passes.

    Checks run in order: red flags, non-news, staleness, title length.
    """
    rule = first_match(item.title, RED_FLAG_RULES)
    if rule:
        return f"red_flag:{rule}"
    rule = first_match(item.title.strip(), NON_NEWS_RULES)
    if rule:
        return f"non_news:{rule}"
    if not is_timely(item.published_at, now, max_age_hours):
        return "stale"
    if len(item.title.strip()) < MIN_TITLE_LENGTH:
        return "too_short"
    return None


def screen(
    item: RawItem,
    source: FeedSource,
    *,
    now: datetime,
    max_age_hours: float = DEFAULT_MAX_AGE_HOURS,
    source_url: Optional[str] = None,
) -> Optional[Article]:
    """Return the Article for ``item`` or None when a rule rejects it."""
    reason = rejection_reason(item, now=now, max_age_hours=max_age_hours)
    if reason is not None:
        if reason.startswith(("red_flag", "non_news")):
            logger.debug("Filtered (%s) from %s: %s", reason, source.name, item.title)
        return None
    return to_article(item, source, source_url=source_url)
