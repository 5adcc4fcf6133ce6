"""
Debounced, cancelable search pipeline for a single query surface.

Every call to :meth:`SearchOrchestrator.search` supersedes the previous one:
its debounce timer is cleared and its request aborted, and the superseded
call resolves to ``None``. At most one request is in flight at any time.
"""

from __future__ import annotations

__all__ = ["SearchOrchestrator", "SearchState", "SuggestionSource"]

import enum
import logging
from collections.abc import Callable
from typing import Any, Protocol

from omnisearch.errors import FetchCancelled, PayloadError
from omnisearch.infra.alarms import epoch_ms
from omnisearch.schemas import Query, ResolvedEntry
from omnisearch.sites.base import BaseSite

from .cache_store import CacheStore
from .cancel import CancelToken
from .prefix_chain import PrefixChain
from .ranking import cook_suggestions

logger = logging.getLogger(__name__)

DEFAULT_MAX_CACHE_AGE = 7 * 24 * 3600


class SuggestionSource(Protocol):
    """Anything able to fetch the raw prefix-search payload for a query."""

    site: BaseSite

    async def fetch_suggestions(self, query: Query, token: CancelToken) -> Any: ...


class SearchState(enum.Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    FETCHING = "fetching"
    COMPLETED = "completed"
    ABORTED = "aborted"


class SearchOrchestrator:
    """Single-slot search scheduler with prefix-aware caching.

    The orchestrator owns all per-surface state: the prefix chain of the
    current typing burst and the cancel token of the pending search.

    Args:
        source: Fetcher for raw API payloads.
        cache: Cache of cooked results.
        request_delay: Quiet period before a request is sent, in seconds.
        max_cache_age: Lifetime of fetched results, in seconds.
        clock: Returns the current time in epoch milliseconds.
    """

    def __init__(
        self,
        source: SuggestionSource,
        cache: CacheStore,
        *,
        request_delay: float = 0.2,
        max_cache_age: float = DEFAULT_MAX_CACHE_AGE,
        clock: Callable[[], int] = epoch_ms,
    ) -> None:
        self._source = source
        self._cache = cache
        self._request_delay = request_delay
        self._max_age_ms = int(max_cache_age * 1000)
        self._clock = clock

        self._chain = PrefixChain()
        self._token: CancelToken | None = None
        self._state = SearchState.IDLE

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def chain(self) -> PrefixChain:
        return self._chain

    def observe(self, query: Query) -> None:
        """Record a keystroke in the current typing burst."""
        self._chain.observe(query.text, query.category_key)

    def cancel(self) -> None:
        """Clear the pending debounce timer and abort any in-flight request."""
        if self._token is not None:
            self._token.cancel()
            self._token = None
        self._state = SearchState.IDLE

    async def search(self, query: Query) -> ResolvedEntry | None:
        """Return a result for ``query``, from cache or from the network.

        Returns:
            The cached or freshly cooked entry, or None when the query is
            empty, the call was superseded, or the request failed.
        """
        self.cancel()
        if not query.text:
            return None

        key = self._cache.key_for(query.cache_suffix)
        entry = self._cache.resolve(key)
        if entry and not query.force and not entry.is_expired(self._clock()):
            logger.debug("Cache hit for %r", key)
            return entry

        token = self._token = CancelToken()

        self._set_state(token, SearchState.DEBOUNCING)
        if not await token.sleep(self._request_delay):
            logger.debug("Search for %r superseded while debouncing", query.text)
            return None

        self._set_state(token, SearchState.FETCHING)
        entry = await self._fetch(query, token)
        if entry is None or token.cancelled:
            self._finish(token, SearchState.ABORTED)
            return None

        self._update_cache(query, entry)
        self._finish(token, SearchState.COMPLETED)
        return entry

    async def _fetch(self, query: Query, token: CancelToken) -> ResolvedEntry | None:
        try:
            found = await self._source.fetch_suggestions(query, token)
            return cook_suggestions(
                found,
                query,
                self._source.site,
                expires_at=self._clock() + self._max_age_ms,
            )
        except FetchCancelled:
            logger.debug("Request for %r aborted", query.text)
        except OSError as e:
            logger.warning("Request for %r failed: %s", query.text, e)
        except (ValueError, PayloadError) as e:
            logger.warning("Unusable response for %r: %s", query.text, e)
        except Exception as e:
            # backend-specific transport errors (aiohttp, httpx, curl_cffi)
            logger.warning(
                "Request for %r failed: %s: %s", query.text, type(e).__name__, e
            )
        return None

    def _update_cache(self, query: Query, entry: ResolvedEntry) -> None:
        key = self._cache.key_for(query.cache_suffix)
        self._cache.put(key, entry)

        partials = self._chain.consume(query.text)
        if partials:
            self._cache.put_aliases(
                [self._cache.key_for(p + query.category_key) for p in partials],
                query.cache_suffix,
            )

        self._cache.schedule_expiry(key, entry.expires_at)
        logger.debug("Cached %r with %d aliases", key, len(partials))

    def _set_state(self, token: CancelToken, state: SearchState) -> None:
        if self._token is token:
            logger.debug("Search state %s -> %s", self._state.value, state.value)
            self._state = state

    def _finish(self, token: CancelToken, outcome: SearchState) -> None:
        self._set_state(token, outcome)
        if self._token is token:
            self._token = None
            self._state = SearchState.IDLE
