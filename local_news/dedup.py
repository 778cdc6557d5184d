from __future__ import annotations

import re
from typing import List, Sequence, Set

from .models import Article

SIMILARITY_THRESHOLD = 0.6

_NON_WORD_RE = re.compile(r"[^\w\s]")
_SPACE_RE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Lowercase, drop punctuation, collapse whitespace."""
    return _SPACE_RE.sub(" ", _NON_WORD_RE.sub("", title.lower())).strip()


def title_similarity(a: str, b: str) -> float:
    """Jaccard similarity of the two titles' normalized word sets."""
    words_a = set(normalize_title(a).split(" "))
    words_b = set(normalize_title(b).split(" "))
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def deduplicate(items: Sequence[Article], threshold: float = SIMILARITY_THRESHOLD) -> List[Article]:
    """
    Drop near-duplicate stories, keeping the more credible article of each pair.

    Greedy pairwise pass in input order: when two surviving articles are similar,
    the one with the lower credibility loses (ties keep the earlier one). An
    eliminated article is never compared again, so results depend on input order
    and are not a full clustering. Preserves the order of the survivors.
    """
    eliminated: Set[int] = set()
    n = len(items)

    for i in range(n):
        if i in eliminated:
            continue
        for j in range(i + 1, n):
            if j in eliminated:
                continue
            if title_similarity(items[i].title, items[j].title) < threshold:
                continue
            if items[i].credibility_score >= items[j].credibility_score:
                eliminated.add(j)
            else:
                eliminated.add(i)
                break

    return [it for idx, it in enumerate(items) if idx not in eliminated]
