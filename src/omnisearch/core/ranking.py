"""
Scoring and ordering of prefix-search API results.

Each item name is matched against the words of the query. The match mask
is kept as a list of :class:`MatchSegment` runs and only turned into the
``\\r``/``\\n`` sentinel form by :func:`serialize_marked` when a description
is rendered.

Weights per item:

* 50 when the item belongs to the category the user asked for;
* 10 per match that starts the name, or that directly continues such a
  match (an unbroken run of matches from the start);
* 4 per match at the start of the name or right after a space;
* 1 per match right after any other character that is not a match.
"""

from __future__ import annotations

__all__ = [
    "MATCH_END",
    "MATCH_START",
    "cook_suggestions",
    "mark_matches",
    "match_weight",
    "preprocess_item",
    "rank_items",
    "serialize_marked",
    "words_as_regexp",
]

import logging
import re
from typing import Any

from omnisearch.errors import PayloadError
from omnisearch.libs.text import reescape_xml
from omnisearch.schemas import (
    BestItem,
    MatchSegment,
    Query,
    RankedItem,
    ResolvedEntry,
)
from omnisearch.sites.base import BaseSite

from .formatting import MATCH_END, MATCH_START, serialize_marked, site_link_for

logger = logging.getLogger(__name__)

CATEGORY_BONUS = 50
ANCHORED_POINTS = 10
WORD_START_POINTS = 4
INNER_POINTS = 1

_NON_WORD = re.compile(r"\W+")
_NEVER = re.compile(r"(?!)")
_STATUS_NOISE = re.compile(r"Finished.*|Currently\s*")


def words_as_regexp(text: str) -> re.Pattern[str]:
    """Build a case-insensitive alternation of the words in ``text``.

    Returns:
        A pattern matching any of the words, or one that never matches when
        ``text`` has no word characters.
    """
    words = [w for w in _NON_WORD.split(text) if w]
    if not words:
        return _NEVER
    return re.compile("|".join(re.escape(w) for w in words), re.I)


def mark_matches(name: str, pattern: re.Pattern[str]) -> list[MatchSegment]:
    """Split ``name`` into alternating plain and matched runs."""
    segments: list[MatchSegment] = []
    pos = 0
    for m in pattern.finditer(name):
        start, end = m.span()
        if start == end:
            continue
        if start > pos:
            segments.append(MatchSegment(name[pos:start], False))
        segments.append(MatchSegment(m.group(), True))
        pos = end
    if pos < len(name):
        segments.append(MatchSegment(name[pos:], False))
    return segments


def match_weight(segments: list[MatchSegment]) -> int:
    """Score a match mask using the anchored, word-start and inner tiers."""
    weight = 0
    anchored = False
    prev: MatchSegment | None = None
    for seg in segments:
        if seg.is_match:
            if prev is None:
                weight += ANCHORED_POINTS + WORD_START_POINTS
                anchored = True
            elif prev.is_match:
                if anchored:
                    weight += ANCHORED_POINTS
            else:
                weight += WORD_START_POINTS if prev.text[-1] == " " else INNER_POINTS
        else:
            anchored = False
        prev = seg
    return weight


def preprocess_item(
    raw: dict[str, Any],
    category: str,
    pattern: re.Pattern[str],
) -> RankedItem:
    """Normalize one API item and compute its weight.

    Missing or mistyped fields fall back to empty values.

    Args:
        raw: Item object from the API response.
        category: Category the user asked for ("all" when none).
        pattern: Query words as built by :func:`words_as_regexp`.
    """
    payload = raw.get("payload")
    if not isinstance(payload, dict):
        payload = {}

    api_type = str(raw.get("type") or "")
    type_ = str(payload.get("media_type") or api_type)
    name = re.sub(rf"\s+{re.escape(type_)}$", "", str(raw.get("name") or ""))
    segments = mark_matches(name, pattern)

    weight = CATEGORY_BONUS if api_type.lower() == category else 0
    weight += match_weight(segments)

    status = _STATUS_NOISE.sub("", str(payload.get("status") or ""), count=1)
    related = payload.get("related_works")
    related_text = (
        ", ".join(str(w) for w in related) if isinstance(related, list) else ""
    )
    alt_name = str(payload.get("alternative_name") or "")

    return RankedItem(
        name=name,
        type=type_,
        status=reescape_xml(status or related_text or alt_name),
        weight=weight,
        url=str(raw.get("url") or ""),
        year=str(payload.get("start_year") or ""),
        score=str(payload.get("score") or ""),
        aired=str(payload.get("aired") or payload.get("published") or ""),
        image_url=str(raw.get("image_url") or ""),
        segments=segments,
    )


def rank_items(items: list[RankedItem]) -> list[RankedItem]:
    """Order by weight (highest first), then by name."""
    return sorted(items, key=lambda item: (-item.weight, item.name))


def make_best(item: RankedItem, site: BaseSite) -> BestItem:
    return BestItem(
        title=f"{item.name} ({item.type})",
        text=item.aired,
        note=item.status,
        image=site.make_image_url(item.image_url),
    )


def cook_suggestions(
    found: Any,
    query: Query,
    site: BaseSite,
    *,
    expires_at: int,
) -> ResolvedEntry:
    """Turn a prefix-search response into a cache entry.

    Args:
        found: Decoded JSON body, ``{"categories": [{"type", "items"}]}``.
        query: Query the response was fetched for.
        site: Profile used to canonicalize image URLs.
        expires_at: Expiry time of the entry in epoch milliseconds.

    Raises:
        PayloadError: If the body has no list of categories.
    """
    categories = found.get("categories") if isinstance(found, dict) else None
    if not isinstance(categories, list):
        raise PayloadError("response has no 'categories' list")

    pattern = words_as_regexp(query.text)
    summary: list[str] = []
    items: list[RankedItem] = []
    for cat in categories:
        if not isinstance(cat, dict):
            continue
        cat_items = cat.get("items")
        if not isinstance(cat_items, list):
            cat_items = []
        summary.append(f"{cat.get('type') or ''} ({len(cat_items)})")
        for raw in cat_items:
            if not isinstance(raw, dict):
                logger.debug(
                    "Skipping malformed item in %r: %r", cat.get("type"), raw
                )
                continue
            items.append(preprocess_item(raw, query.category, pattern))

    ranked = rank_items(items)
    return ResolvedEntry(
        expires_at=expires_at,
        site_link=site_link_for(query.text)
        + " Found in categories: "
        + ", ".join(summary),
        items=ranked,
        best=make_best(ranked[0], site) if ranked else None,
    )
