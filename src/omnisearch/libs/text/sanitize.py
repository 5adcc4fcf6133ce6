"""
Cleanup of raw omnibox input before it is used as a query.
"""

__all__ = ["sanitize_input"]

import re

# ASCII punctuation: !-/ :-? [-` {-~
_EDGE_LEADING = re.compile(r"^[!-/:-?\[-`{-~\s]+")
_EDGE_TRAILING = re.compile(r"[!-/:-?\[-`{-~\s]+$")
_MULTI_SPACE = re.compile(r"\s{2,}")


def sanitize_input(s: str) -> str:
    """Trim punctuation at both ends and collapse repeated whitespace.

    Args:
        s: Raw text typed by the user.

    Returns:
        The cleaned text, possibly empty.
    """
    s = _EDGE_LEADING.sub("", s)
    s = _MULTI_SPACE.sub(" ", s)
    return _EDGE_TRAILING.sub("", s)
