from __future__ import annotations

import calendar
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from dateutil import parser as date_parser

from .exceptions import ParseError
from .models import RawItem

UNTITLED = "Untitled"


def _to_datetime(entry: Mapping[str, Any]) -> Optional[datetime]:
    """
    Convert feed entry date fields to timezone-aware UTC datetime.
    Priority: published_parsed -> updated_parsed -> created_parsed -> string fields -> None.
    """
    # feedparser normalizes *_parsed to UTC struct_time
    for key in ("published_parsed", "updated_parsed", "created_parsed"):
        val = entry.get(key)
        if isinstance(val, time.struct_time):
            try:
                return datetime.fromtimestamp(calendar.timegm(val), tz=timezone.utc)
            except (OverflowError, ValueError, OSError):
                continue
    for key in ("published", "updated", "created"):
        s = entry.get(key)
        if isinstance(s, str) and s.strip():
            try:
                dt = date_parser.parse(s)
            except (ValueError, OverflowError):
                continue
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            return dt.astimezone(timezone.utc)
    return None


def _is_image(media: Mapping[str, Any]) -> bool:
    medium = media.get("medium")
    mime = media.get("type")
    return medium == "image" or (isinstance(mime, str) and mime.startswith("image/"))


def _as_list(value: Any) -> List[Dict[str, Any]]:
    if isinstance(value, Mapping):
        return [dict(value)]
    if isinstance(value, list):
        return [v for v in value if isinstance(v, Mapping)]
    return []


def extract_image_url(entry: Mapping[str, Any]) -> Optional[str]:
    """
    Resolve an entry's image: media:content, then media:thumbnail, then an image enclosure.
    """
    for media in _as_list(entry.get("media_content")):
        if _is_image(media) and media.get("url"):
            return media["url"]

    for thumb in _as_list(entry.get("media_thumbnail")):
        if thumb.get("url"):
            return thumb["url"]

    for enc in _as_list(entry.get("enclosures")):
        mime = enc.get("type")
        url = enc.get("href") or enc.get("url")
        if url and isinstance(mime, str) and mime.startswith("image/"):
            return url

    return None


def _get_content(entry: Mapping[str, Any]) -> Optional[str]:
    summary = entry.get("summary") or entry.get("description")
    if isinstance(summary, str) and summary.strip():
        return summary
    for part in _as_list(entry.get("content")):
        value = part.get("value")
        if isinstance(value, str) and value.strip():
            return value
    return None


def parse_entry(entry: Mapping[str, Any], *, now: Optional[datetime] = None) -> RawItem:
    """
    Map a raw feed entry (from feedparser) to a RawItem.

    Missing fields are defaulted rather than rejected: title -> "Untitled",
    link -> "", publish time -> ``now``.
    """
    if not isinstance(entry, Mapping):
        raise ParseError(f"Feed entry is not a mapping: {type(entry).__name__}")

    title = entry.get("title")
    title = title.strip() if isinstance(title, str) and title.strip() else UNTITLED

    link = entry.get("link") or entry.get("feedburner_origlink") or ""
    link = link.strip() if isinstance(link, str) else ""

    published_at = _to_datetime(entry) or now or datetime.now(timezone.utc)

    return RawItem(
        title=title,
        link=link,
        published_at=published_at,
        image_url=extract_image_url(entry),
        content=_get_content(entry),
    )
