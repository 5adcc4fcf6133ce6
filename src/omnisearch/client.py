"""
Omnibox-facing facade wiring the search core to its host capabilities.

A host forwards its input events (text changed, text accepted, input
cancelled, alarm fired) to :class:`OmniboxSearch` and renders whatever the
facade pushes to its :class:`~omnisearch.protocols.SuggestDisplay`.
"""

from __future__ import annotations

__all__ = ["OmniboxSearch"]

import base64
import logging
import types
from typing import Self

from omnisearch.core import (
    CacheStore,
    SearchOrchestrator,
    build_result,
    parse_input,
)
from omnisearch.core.cancel import CancelToken
from omnisearch.core.formatting import site_link_for
from omnisearch.errors import FetchCancelled
from omnisearch.fetcher import SuggestFetcher
from omnisearch.infra.alarms import LoopAlarms
from omnisearch.infra.persistence import create_store
from omnisearch.protocols import KeyValueStore, SuggestDisplay
from omnisearch.schemas import BestItem, SearchConfig, SuggestResult
from omnisearch.sites import BaseSite, get_site

logger = logging.getLogger(__name__)


class OmniboxSearch:
    """One query box backed by a site's prefix-search API.

    Args:
        site: Active site profile.
        orchestrator: Search pipeline owning the per-box state.
        cache: Cache shared with ``orchestrator``.
        fetcher: Fetcher used by ``orchestrator``; also loads images.
        display: Optional surface receiving descriptions and suggestions.
        min_length: Shortest normalized text that triggers a search.
    """

    def __init__(
        self,
        site: BaseSite,
        orchestrator: SearchOrchestrator,
        cache: CacheStore,
        fetcher: SuggestFetcher,
        display: SuggestDisplay | None = None,
        *,
        min_length: int = 1,
        alarms: LoopAlarms | None = None,
    ) -> None:
        self.site = site
        self.display = display
        self._orchestrator = orchestrator
        self._cache = cache
        self._fetcher = fetcher
        self._alarms = alarms
        self._min_length = max(1, min_length)
        # live until the next keystroke or cancel
        self._input_token: CancelToken | None = None

    @classmethod
    async def from_config(
        cls,
        config: SearchConfig | None = None,
        display: SuggestDisplay | None = None,
        *,
        store: KeyValueStore | None = None,
    ) -> Self:
        """Build a ready-to-use instance from settings.

        Args:
            config: Search settings; defaults apply when omitted.
            display: Optional display surface.
            store: Key/value store to use instead of ``config.cache_cfg``.
        """
        config = config or SearchConfig()
        cache_cfg = config.cache_cfg
        site = get_site(config.site)

        fetcher = SuggestFetcher(site, config.fetcher_cfg)
        await fetcher.init()

        alarms = LoopAlarms()
        cache = CacheStore(
            store if store is not None else create_store(cache_cfg),
            alarms,
            key_prefix=cache_cfg.key_prefix,
            storage_quota=cache_cfg.storage_quota,
        )
        alarms.on_alarm = cache.on_alarm

        orchestrator = SearchOrchestrator(
            fetcher,
            cache,
            request_delay=config.request_delay,
            max_cache_age=cache_cfg.max_cache_age,
        )
        return cls(
            site,
            orchestrator,
            cache,
            fetcher,
            display,
            min_length=config.min_length,
            alarms=alarms,
        )

    async def on_input_changed(self, text: str) -> SuggestResult | None:
        """Handle an edit of the query box.

        Returns:
            The suggestions for ``text``, or None when there is nothing to
            show for this keystroke.
        """
        query = parse_input(text, self.site)
        self._orchestrator.observe(query)
        token = self._supersede()

        if self.display is not None:
            default = (
                site_link_for(query.text)
                if query.text
                else self.site.default_description
            )
            self.display.set_default_suggestion(default)
        if len(query.text) < self._min_length:
            return None

        entry = await self._orchestrator.search(query)
        if entry is None or token.cancelled:
            return None

        result = build_result(entry)
        await self._show(result, token)
        return None if token.cancelled else result

    def on_input_entered(self, text: str) -> str:
        """URL to open when the user accepts ``text``."""
        return self.site.commit_url(text, parse_input(text, self.site))

    def on_input_cancelled(self) -> None:
        self._supersede().cancel()

    def _supersede(self) -> CancelToken:
        """Cancel everything started for earlier input and open a new token."""
        self._orchestrator.cancel()
        if self._input_token is not None:
            self._input_token.cancel()
        self._input_token = CancelToken()
        return self._input_token

    def on_alarm(self, name: str) -> None:
        self._cache.on_alarm(name)

    async def close(self) -> None:
        self._supersede().cancel()
        if self._alarms is not None:
            self._alarms.clear_all()
        await self._fetcher.close()
        close_store = getattr(self._cache.store, "close", None)
        if callable(close_store):
            close_store()

    async def _show(self, result: SuggestResult, token: CancelToken) -> None:
        if self.display is None:
            return

        self.display.set_default_suggestion(result["site_link"])
        self.display.suggest(result["suggestions"])

        best = result["best"]
        if best and best["image"]:
            image_uri = await self._load_image(best, token)
            if image_uri and not token.cancelled:
                self.display.notify(best, image_uri)

    async def _load_image(self, best: BestItem, token: CancelToken) -> str | None:
        try:
            content, content_type = await self._fetcher.fetch_binary(
                best["image"], token
            )
        except FetchCancelled:
            logger.debug("Image for %r abandoned", best["title"])
            return None
        except Exception as e:
            logger.warning("Could not load image for %r: %s", best["title"], e)
            return None
        encoded = base64.b64encode(content).decode("ascii")
        return f"data:{content_type or 'image/jpeg'};base64,{encoded}"

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        await self.close()
