"""
Turns raw omnibox text into a :class:`~omnisearch.schemas.Query`.

Input grammar: ``<text>[/<category letter>][!]`` where the optional
category letter narrows the search and a trailing ``!`` forces a fresh
request even when a cached result is still valid.
"""

from __future__ import annotations

__all__ = ["parse_input"]

import re
from functools import lru_cache

from omnisearch.libs.text import sanitize_input
from omnisearch.schemas import Query
from omnisearch.sites.base import BaseSite


@lru_cache(maxsize=16)
def _category_splitter(letters: str) -> re.Pattern[str]:
    category = f"(/[{re.escape(letters)}])?" if letters else "()"
    return re.compile(rf"^(.*?){category}!?$", re.I | re.S)


def parse_input(raw_text: str, site: BaseSite) -> Query:
    """Parse one keystroke's text.

    Args:
        raw_text: Text as delivered by the input source.
        site: Profile providing the category table.

    Returns:
        The normalized query. ``text`` is empty when nothing searchable
        remains after sanitizing.
    """
    text = raw_text.strip()
    letters = "".join(k for k in site.CATEGORIES if k)
    m = _category_splitter(letters).match(text)
    # the pattern always matches, group 1 may be empty
    assert m is not None
    category_key = (m.group(2) or "").lower()

    return Query(
        raw_text=raw_text,
        text=sanitize_input(m.group(1)),
        category=site.category_for(category_key[1:]),
        category_key=category_key,
        force=text.endswith("!"),
    )
