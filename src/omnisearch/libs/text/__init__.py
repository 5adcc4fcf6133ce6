"""
Text helpers shared by the normalizer and the suggestion formatter.
"""

__all__ = [
    "escape_xml",
    "unescape_xml",
    "reescape_xml",
    "sanitize_input",
]

from .markup import escape_xml, reescape_xml, unescape_xml
from .sanitize import sanitize_input
