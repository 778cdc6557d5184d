from __future__ import annotations

import hashlib
import re
from typing import Optional

from .models import Article, FeedSource, RawItem

EXCERPT_MAX_CHARS = 200
ELLIPSIS = "..."

CREDIBILITY_SCORES = {1: 100, 2: 75, 3: 50}

_TAG_RE = re.compile(r"<[^>]+>")
# Applied in order, so "&amp;lt;" decodes all the way to "<".
_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#039;", "'"),
)


def make_article_id(link: str) -> str:
    """Stable identifier derived only from the article link."""
    return hashlib.sha256(link.encode("utf-8")).hexdigest()[:16]


def credibility_score(tier: int) -> int:
    return CREDIBILITY_SCORES[tier]


def clean_excerpt(text: Optional[str]) -> str:
    """Strip HTML, decode common entities, trim, and cap at 200 characters."""
    if not text:
        return ""
    clean = _TAG_RE.sub("", text)
    for entity, char in _ENTITIES:
        clean = clean.replace(entity, char)
    clean = clean.strip()
    if len(clean) > EXCERPT_MAX_CHARS:
        clean = clean[: EXCERPT_MAX_CHARS - len(ELLIPSIS)] + ELLIPSIS
    return clean


def to_article(item: RawItem, source: FeedSource, *, source_url: Optional[str] = None) -> Article:
    """
    Convert a RawItem from ``source`` into an Article.

    source_url is the feed's own site link when the feed advertises one.
    """
    return Article(
        id=make_article_id(item.link),
        title=item.title,
        link=item.link,
        excerpt=clean_excerpt(item.content),
        source=source.name,
        source_url=source_url or source.url,
        published_at=item.published_at,
        category=source.category,
        credibility_score=credibility_score(source.credibility_tier),
        image_url=item.image_url,
    )
