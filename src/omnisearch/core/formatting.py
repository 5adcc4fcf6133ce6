"""
Rendering of ranked items into omnibox description markup.
"""

from __future__ import annotations

__all__ = [
    "MATCH_END",
    "MATCH_START",
    "build_result",
    "dim",
    "format_item",
    "format_name",
    "serialize_marked",
    "site_link_for",
]

from omnisearch.libs.text import escape_xml, reescape_xml
from omnisearch.schemas import (
    MatchSegment,
    RankedItem,
    ResolvedEntry,
    Suggestion,
    SuggestResult,
)

MATCH_START = "\r"
MATCH_END = "\n"


def site_link_for(text: str) -> str:
    """Default row inviting a full search on the site."""
    return f"<dim>Search for <match>{escape_xml(text)}</match> on site.</dim>"


def serialize_marked(segments: list[MatchSegment]) -> str:
    """Render a match mask with sentinel characters around each match."""
    return "".join(
        f"{MATCH_START}{s.text}{MATCH_END}" if s.is_match else s.text
        for s in segments
    )


def dim(s: str) -> str:
    s = s.strip()
    return f"<dim>{s}</dim>" if s else ""


def format_name(segments: list[MatchSegment]) -> str:
    """Escape a match mask and turn its sentinels into ``<match>`` tags."""
    return (
        reescape_xml(serialize_marked(segments))
        .replace(MATCH_START, "<match>")
        .replace(MATCH_END, "</match>")
    )


def format_item(item: RankedItem) -> Suggestion:
    status = f" ({item.status})" if item.status else ""
    return Suggestion(
        content=item.url,
        description=(
            dim(f"{item.year} {item.score}")
            + "&#x20;"
            + f"<url>{format_name(item.segments)}</url> "
            + dim(f"{item.type}{status}")
        ),
    )


def build_result(entry: ResolvedEntry) -> SuggestResult:
    """Build the display-layer result from a cache entry."""
    return SuggestResult(
        site_link=entry.site_link,
        suggestions=[format_item(item) for item in entry.items],
        best=entry.best,
    )
