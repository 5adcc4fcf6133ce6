"""
Cache entry variants stored by :class:`~omnisearch.core.cache_store.CacheStore`.

A stored value is either a resolved record (a JSON object) or an alias (a
bare string naming the canonical key suffix). These classes give each form
an explicit type so callers never branch on raw storage values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .result import BestItem, RankedItem


@dataclass(frozen=True, slots=True)
class AliasEntry:
    """Points at the canonical key suffix holding the resolved entry."""

    target: str

    def to_record(self) -> str:
        return self.target


@dataclass(slots=True)
class ResolvedEntry:
    """A cooked search result together with its expiry time.

    Attributes:
        expires_at: Epoch milliseconds after which the entry is stale.
        site_link: Default suggestion markup with the category summary.
        items: Items in ranked order.
        best: Top item prepared for the notification, if any.
    """

    expires_at: int
    site_link: str
    items: list[RankedItem] = field(default_factory=list)
    best: BestItem | None = None

    def is_expired(self, now_ms: int) -> bool:
        return self.expires_at <= now_ms

    def to_record(self) -> dict[str, Any]:
        return {
            "expires": self.expires_at,
            "site_link": self.site_link,
            "items": [item.to_record() for item in self.items],
            "best": dict(self.best) if self.best else None,
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> ResolvedEntry:
        """Rebuild an entry from its stored form.

        Raises:
            KeyError, TypeError, ValueError: If the record is malformed.
        """
        best = data.get("best")
        return cls(
            expires_at=int(data["expires"]),
            site_link=str(data.get("site_link", "")),
            items=[RankedItem.from_record(i) for i in data.get("items", [])],
            best=BestItem(
                title=str(best.get("title", "")),
                text=str(best.get("text", "")),
                note=str(best.get("note", "")),
                image=str(best.get("image", "")),
            )
            if isinstance(best, dict)
            else None,
        )


CacheEntry = AliasEntry | ResolvedEntry


def entry_from_record(value: Any) -> CacheEntry | None:
    """Decode a raw stored value into a cache entry.

    Returns:
        The decoded entry, or None for values that are neither an alias nor
        a well-formed resolved record.
    """
    if isinstance(value, str):
        return AliasEntry(value)
    if isinstance(value, dict):
        try:
            return ResolvedEntry.from_record(value)
        except (KeyError, TypeError, ValueError):
            return None
    return None
