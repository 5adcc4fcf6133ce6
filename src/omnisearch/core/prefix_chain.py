"""
Tracks the prefixes typed during one uninterrupted typing burst.

Typing "onizuka" one key at a time leaves the chain
``o, on, oni, oniz, onizu, onizuk, onizuka``. Once the final text has been
fetched, every shorter member is stored as an alias of its result instead
of being fetched (and cached) on its own.
"""

from __future__ import annotations

__all__ = ["PrefixChain"]


class PrefixChain:
    """Ordered, strictly extending chain of lowercased prefixes.

    Invariant: every member is a strict prefix of the next one, and all
    members were typed under the same category key.
    """

    __slots__ = ("_entries", "_category_key")

    def __init__(self) -> None:
        self._entries: list[str] = []
        self._category_key = ""

    def observe(self, text: str, category_key: str = "") -> None:
        """Record newly typed text.

        Members that ``text`` no longer extends (deleted characters, pasted
        text, a retype of the same value) are dropped from the tail before
        ``text`` is appended. A category change starts a new chain.

        Args:
            text: Normalized query text.
            category_key: Category suffix the text was typed under.
        """
        if category_key != self._category_key:
            self._entries.clear()
            self._category_key = category_key

        lowered = text.lower()
        while self._entries:
            last = self._entries[-1]
            if not last or not lowered.startswith(last) or lowered == last:
                self._entries.pop()
            else:
                break
        self._entries.append(lowered)

    def consume(self, text: str) -> list[str]:
        """Take the members that ``text`` extends and reset the chain.

        Args:
            text: The text whose result has just been stored.

        Returns:
            Every recorded strict prefix of ``text``, shortest first.
        """
        lowered = text.lower()
        partials = [
            p for p in self._entries if p and p != lowered and lowered.startswith(p)
        ]
        self._entries.clear()
        return partials

    def clear(self) -> None:
        self._entries.clear()

    @property
    def category_key(self) -> str:
        return self._category_key

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<PrefixChain {self._entries!r}>"
