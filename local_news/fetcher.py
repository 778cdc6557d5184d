from __future__ import annotations

import concurrent.futures as _fut
import logging
import time
from datetime import datetime
from typing import Any, List, NamedTuple, Optional, Sequence

import feedparser
import requests

from .config import AggregatorConfig
from .exceptions import ParseError, RSSFetchError
from .models import FeedSource, RawItem
from .parser import parse_entry

logger = logging.getLogger(__name__)


class FeedBatch(NamedTuple):
    """Items fetched from one source during a run."""
    source: FeedSource
    items: List[RawItem]
    site_url: Optional[str] = None


def fetch_feed(url: str, *, timeout: float, user_agent: str) -> Any:
    """
    Fetch and parse a single feed URL.

    Raises RSSFetchError on network/HTTP errors or when the feed is malformed and has no entries.
    """
    try:
        response = requests.get(url, timeout=timeout, headers={"User-Agent": user_agent})
        response.raise_for_status()
    except requests.RequestException as e:
        raise RSSFetchError(f"Failed to fetch feed: {url} ({e})") from e

    feed = feedparser.parse(response.content)

    entries = getattr(feed, "entries", None)
    if not isinstance(entries, list):
        raise RSSFetchError(f"Feed has no entries: {url}")
    # feedparser flags recoverable issues (encoding overrides etc.) as bozo too
    if getattr(feed, "bozo", 0) and not entries:
        exc = getattr(feed, "bozo_exception", None)
        msg = f"Invalid RSS/Atom feed: {url}"
        if exc:
            msg += f" ({exc})"
        raise RSSFetchError(msg)
    return feed


def _site_url(feed: Any) -> Optional[str]:
    meta = getattr(feed, "feed", None) or {}
    link = meta.get("link") if hasattr(meta, "get") else None
    return link if isinstance(link, str) and link else None


def fetch_source(source: FeedSource, *, config: AggregatorConfig, now: datetime) -> FeedBatch:
    """
    Fetch one source and return its most recent entries as RawItems.

    Never raises: any failure is logged and yields an empty batch.
    """
    try:
        feed = fetch_feed(source.url, timeout=config.request_timeout_sec, user_agent=config.user_agent)
        items: List[RawItem] = []
        for entry in feed.entries:
            try:
                items.append(parse_entry(entry, now=now))
            except ParseError as e:
                logger.warning("Skipping entry from %s: %s", source.name, e)
        items.sort(key=lambda it: it.published_at, reverse=True)
        return FeedBatch(source, items[: config.max_items_per_source], _site_url(feed))
    except RSSFetchError as e:
        logger.warning("Error fetching %s: %s", source.name, e)
    except Exception as e:
        logger.exception("Unexpected error fetching %s: %s", source.name, e)
    return FeedBatch(source, [])


def fetch_all(
    sources: Sequence[FeedSource],
    *,
    config: AggregatorConfig,
    now: datetime,
) -> List[FeedBatch]:
    """
    Fetch every source concurrently, one task per source.

    Returns batches in source order once all tasks have finished. With a
    deadline configured, sources still running when it passes are abandoned
    and contribute an empty batch.
    """
    if not sources:
        return []

    ex = _fut.ThreadPoolExecutor(max_workers=len(sources), thread_name_prefix="feed")
    try:
        futures = [ex.submit(fetch_source, s, config=config, now=now) for s in sources]
        started = time.monotonic()
        out: List[FeedBatch] = []
        for source, fu in zip(sources, futures):
            remaining = None
            if config.deadline_sec is not None:
                remaining = max(0.0, config.deadline_sec - (time.monotonic() - started))
            try:
                out.append(fu.result(timeout=remaining))
            except _fut.TimeoutError:
                logger.warning("Abandoning %s: no response within %.1fs", source.name, config.deadline_sec)
                out.append(FeedBatch(source, []))
        return out
    finally:
        ex.shutdown(wait=False, cancel_futures=True)
