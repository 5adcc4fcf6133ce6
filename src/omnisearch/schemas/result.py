from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, NamedTuple, TypedDict


class MatchSegment(NamedTuple):
    """A run of item-name text, flagged when it matched a query word."""

    text: str
    is_match: bool


@dataclass(slots=True)
class RankedItem:
    """A single API item after preprocessing and scoring.

    Attributes:
        name: Display name with any trailing media type removed.
        type: Media type, or the API category when no media type is given.
        status: Escaped status line (airing status, related works, alt name).
        weight: Relevance score computed for the current query.
        url: Canonical page URL of the item.
        year: Start year as shown in the description.
        score: Community score as shown in the description.
        aired: Air or publication dates.
        image_url: Raw image URL reported by the API.
        segments: Match mask of ``name`` against the query words.
    """

    name: str
    type: str = ""
    status: str = ""
    weight: int = 0
    url: str = ""
    year: str = ""
    score: str = ""
    aired: str = ""
    image_url: str = ""
    segments: list[MatchSegment] = field(default_factory=list)

    def to_record(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "status": self.status,
            "weight": self.weight,
            "url": self.url,
            "year": self.year,
            "score": self.score,
            "aired": self.aired,
            "image_url": self.image_url,
            "segments": [[s.text, s.is_match] for s in self.segments],
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> RankedItem:
        return cls(
            name=str(data["name"]),
            type=str(data.get("type", "")),
            status=str(data.get("status", "")),
            weight=int(data.get("weight", 0)),
            url=str(data.get("url", "")),
            year=str(data.get("year", "")),
            score=str(data.get("score", "")),
            aired=str(data.get("aired", "")),
            image_url=str(data.get("image_url", "")),
            segments=[
                MatchSegment(str(text), bool(flag))
                for text, flag in data.get("segments", [])
            ],
        )


class Suggestion(TypedDict):
    """One omnibox suggestion row.

    Attributes:
        content: Text put into the box (and committed) when chosen.
        description: Annotated markup shown for the row.
    """

    content: str
    description: str


class BestItem(TypedDict):
    """The top-ranked item, shown as an image notification.

    Attributes:
        title: Name followed by the media type in parentheses.
        text: Air or publication dates.
        note: Status line.
        image: Canonical image URL with resize path and query removed.
    """

    title: str
    text: str
    note: str
    image: str


class SuggestResult(TypedDict):
    """Value handed to the display layer after a search."""

    site_link: str
    suggestions: list[Suggestion]
    best: BestItem | None
