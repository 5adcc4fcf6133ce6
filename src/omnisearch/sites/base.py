"""
Base class describing a site whose prefix-search API feeds the omnibox.
"""

from __future__ import annotations

import re
from typing import ClassVar

from omnisearch.schemas import Query

_URL_LIKE = re.compile(r"^https?:", re.I)
_IMAGE_RESIZE = re.compile(r"/r/\d+x\d+|\?.*")


class BaseSite:
    """Static description of a search site.

    Subclasses fill in the URL templates and the category table. ``%t`` in
    ``API_URL`` is replaced by the full category name and ``%c`` in
    ``SEARCH_URL`` by the category used for the site's own search page.
    """

    site_key: ClassVar[str]
    site_name: ClassVar[str]

    SITE_URL: ClassVar[str]
    API_URL: ClassVar[str]
    SEARCH_URL: ClassVar[str]
    SEARCH_ALL_URL: ClassVar[str]

    CATEGORIES: ClassVar[dict[str, str]] = {"": "all"}
    HEADERS: ClassVar[dict[str, str]] = {}

    @property
    def default_description(self) -> str:
        return f"Open <url>{self.SITE_URL}</url>"

    def category_for(self, letter: str) -> str:
        return self.CATEGORIES.get(letter.lower(), self.CATEGORIES.get("", "all"))

    def build_api_url(self, query: Query) -> str:
        return self.API_URL.replace("%t", query.category) + query.url_text

    def make_search_url(self, query: Query) -> str:
        if query.category == self.CATEGORIES.get(""):
            return self.SEARCH_ALL_URL + query.url_text
        return self.SEARCH_URL.replace("%c", query.category) + query.url_text

    def make_image_url(self, url: str) -> str:
        """Strip the resize path segment and query string from an image URL."""
        return _IMAGE_RESIZE.sub("", url or "")

    def commit_url(self, raw_text: str, query: Query) -> str:
        """Destination opened when the user accepts the typed text.

        Args:
            raw_text: The text exactly as typed.
            query: The normalized query for ``raw_text``.

        Returns:
            ``raw_text`` itself when it already looks like a URL, the site's
            search page when there is something to search for, or the site
            root otherwise.
        """
        if _URL_LIKE.match(raw_text):
            return raw_text
        if raw_text.strip() and query.text:
            return self.make_search_url(query)
        return self.SITE_URL

    def __repr__(self) -> str:
        return f"<{type(self).__name__} key={self.site_key!r}>"
