"""
Minimal XML entity handling for suggestion descriptions.

Suggestion descriptions are rendered as a tiny XML dialect (``<match>``,
``<dim>``, ``<url>``), so any untrusted text embedded in them must have its
markup-significant characters escaped exactly once.
"""

__all__ = ["escape_xml", "unescape_xml", "reescape_xml"]

import re

_SPECIAL = re.compile(r"[\"'<>&]")

_ESCAPES = (
    ("&", "&amp;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
    ("<", "&lt;"),
    (">", "&gt;"),
)

# ``&amp;`` must be decoded last so "&amp;lt;" becomes "&lt;", not "<".
_UNESCAPES = (
    ("&quot;", '"'),
    ("&apos;", "'"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
)


def escape_xml(s: str | None) -> str:
    """Escape ``& < > " '`` as XML entities.

    Args:
        s: Text to escape. ``None`` is treated as an empty string.

    Returns:
        The escaped text.
    """
    if not s or not _SPECIAL.search(s):
        return s or ""
    for raw, entity in _ESCAPES:
        s = s.replace(raw, entity)
    return s


def unescape_xml(s: str | None) -> str:
    """Reverse :func:`escape_xml` for the five predefined XML entities."""
    if not s or not _SPECIAL.search(s):
        return s or ""
    for entity, raw in _UNESCAPES:
        s = s.replace(entity, raw)
    return s


def reescape_xml(s: str | None) -> str:
    """Normalize text that may or may not already carry entities.

    Upstream payloads mix plain and pre-escaped strings; decoding first and
    then encoding guarantees each special character ends up escaped once.
    """
    return escape_xml(unescape_xml(s))
