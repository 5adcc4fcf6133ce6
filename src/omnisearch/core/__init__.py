"""
Incremental search core: normalization, prefix-aware caching, debounced
fetching, and ranking of suggestions.
"""

__all__ = [
    "CacheStore",
    "CancelToken",
    "PrefixChain",
    "SearchOrchestrator",
    "SearchState",
    "build_result",
    "cook_suggestions",
    "parse_input",
]

from .cache_store import CacheStore
from .cancel import CancelToken
from .formatting import build_result
from .normalizer import parse_input
from .orchestrator import SearchOrchestrator, SearchState
from .prefix_chain import PrefixChain
from .ranking import cook_suggestions
