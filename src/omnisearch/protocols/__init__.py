"""
Capability protocols the search engine drives or is driven by.

The engine never talks to a storage backend, timer facility, or user
interface directly; it relies on these structural interfaces so hosts can
plug in their own implementations.
"""

__all__ = [
    "AlarmScheduler",
    "KeyValueStore",
    "StoreKeys",
    "SuggestDisplay",
]

from .alarms import AlarmScheduler
from .display import SuggestDisplay
from .store import KeyValueStore, StoreKeys
