"""
HTTP access to a site's prefix-search API.
"""

from __future__ import annotations

__all__ = ["SuggestFetcher"]

import logging
import types
from collections.abc import Mapping
from typing import Any, Self

from omnisearch.core.cancel import CancelToken
from omnisearch.infra.http_defaults import ACCEPT_IMAGE
from omnisearch.infra.sessions import BaseSession, create_session
from omnisearch.schemas import FetcherConfig, Query
from omnisearch.sites.base import BaseSite

logger = logging.getLogger(__name__)


class SuggestFetcher:
    """Fetches raw suggestion payloads and images for one site.

    ``SuggestFetcher`` manages the underlying HTTP session and applies the
    site's request headers. Requests that take a :class:`CancelToken` are
    abandoned as soon as the token is cancelled.
    """

    def __init__(
        self,
        site: BaseSite,
        config: FetcherConfig | None = None,
        *,
        session: BaseSession | None = None,
        **kwargs: Any,
    ) -> None:
        """Initializes a new fetcher instance.

        Args:
            site: Profile describing the API endpoints.
            config: Optional fetcher configuration.
            session: Optional preconfigured HTTP session. If omitted, a new
                session is created via :func:`create_session`.
            **kwargs: Forwarded to :func:`create_session` when ``session`` is
                not provided.
        """
        config = config or FetcherConfig()

        self.site = site
        self.session = session or create_session(
            backend=config.backend,
            cfg=config.session_cfg,
            **kwargs,
        )

    async def init(self) -> None:
        await self.session.init()

    async def close(self) -> None:
        await self.session.close()

    async def fetch_suggestions(self, query: Query, token: CancelToken) -> Any:
        """Fetch the prefix-search payload for ``query``.

        Raises:
            FetchCancelled: If ``token`` is cancelled before the response.
            ConnectionError: If the server answers with a non-2xx status.
            ValueError: If the body is not valid JSON.
        """
        url = self.site.build_api_url(query)
        logger.debug("Fetching suggestions: %s", url)
        return await self.fetch_json(url, token, headers=self.site.HEADERS)

    async def fetch_json(
        self,
        url: str,
        token: CancelToken,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """GET ``url`` and decode its JSON body, honoring ``token``."""
        resp = await token.run(self.session.get(url, headers=dict(headers or {})))
        if not resp.ok:
            raise ConnectionError(f"Request to {url} failed with status {resp.status}")
        return resp.json()

    async def fetch_binary(
        self, url: str, token: CancelToken | None = None
    ) -> tuple[bytes, str]:
        """GET ``url`` and return its raw body and content type.

        Raises:
            FetchCancelled: If ``token`` is cancelled before the response.
            ConnectionError: If the server answers with a non-2xx status.
        """
        request = self.session.get(url, headers={"Accept": ACCEPT_IMAGE})
        resp = await (token.run(request) if token is not None else request)
        if not resp.ok:
            raise ConnectionError(f"Request to {url} failed with status {resp.status}")
        return resp.content, resp.content_type

    async def __aenter__(self) -> Self:
        await self.init()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        await self.close()
