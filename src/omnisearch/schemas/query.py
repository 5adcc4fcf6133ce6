from dataclasses import dataclass
from urllib.parse import quote


@dataclass(frozen=True, slots=True)
class Query:
    """A single keystroke's worth of normalized omnibox input.

    Attributes:
        raw_text: Text exactly as delivered by the input source.
        text: Sanitized search text, original case preserved.
        category: Full category name sent to the API ("all" when none).
        category_key: Category suffix typed by the user, e.g. "/a", or "".
        force: Whether a trailing "!" requested a fresh search.
    """

    raw_text: str
    text: str
    category: str = "all"
    category_key: str = ""
    force: bool = False

    @property
    def cache_suffix(self) -> str:
        """Cache key without its namespace prefix."""
        return self.text.lower() + self.category_key

    @property
    def url_text(self) -> str:
        return quote(self.text, safe="")
