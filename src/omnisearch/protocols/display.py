from typing import Protocol

from omnisearch.schemas import BestItem, Suggestion


class SuggestDisplay(Protocol):
    """Surface that renders suggestions, e.g. a browser address bar."""

    def set_default_suggestion(self, description: str) -> None:
        """Replaces the description of the first, default row.

        Args:
            description: Markup for the row (``<match>``, ``<dim>``, ``<url>``).
        """
        ...

    def suggest(self, suggestions: list[Suggestion]) -> None:
        """Shows the ranked suggestion rows."""
        ...

    def notify(self, best: BestItem, image_uri: str) -> None:
        """Shows a one-shot notification for the best match.

        Args:
            best: The top-ranked item.
            image_uri: The item's image as a ``data:`` URI.
        """
        ...
