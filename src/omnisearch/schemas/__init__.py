"""
Data contracts and type definitions.
"""

__all__ = [
    "CacheConfig",
    "FetcherConfig",
    "SearchConfig",
    "SessionConfig",
    "AliasEntry",
    "CacheEntry",
    "ResolvedEntry",
    "entry_from_record",
    "Query",
    "BestItem",
    "MatchSegment",
    "RankedItem",
    "Suggestion",
    "SuggestResult",
]

from .cache import AliasEntry, CacheEntry, ResolvedEntry, entry_from_record
from .config import CacheConfig, FetcherConfig, SearchConfig, SessionConfig
from .query import Query
from .result import BestItem, MatchSegment, RankedItem, Suggestion, SuggestResult
