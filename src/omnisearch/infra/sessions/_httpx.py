from typing import Any, Unpack

import httpx

from .base import BaseSession, GetRequestKwargs
from .response import BaseResponse


class HttpxSession(BaseSession):
    """Session backend based on httpx with optional HTTP/2."""

    _session: httpx.AsyncClient | None

    async def init(self, **kwargs: Any) -> None:
        if self._session and not self._session.is_closed:
            return

        self._session = httpx.AsyncClient(
            http2=self._http2,
            timeout=self._timeout,
            verify=self._verify_ssl,
            headers=self._headers,
            limits=httpx.Limits(
                max_keepalive_connections=self._max_connections,
                max_connections=self._max_connections,
            ),
            proxy=self._build_proxy_config(
                self._proxy, self._proxy_user, self._proxy_pass
            ),
            trust_env=self._trust_env,
        )

    async def close(self) -> None:
        if self._session is None:
            return
        if not self._session.is_closed:
            await self._session.aclose()
        self._session = None

    async def get(
        self,
        url: str,
        *,
        encoding: str = "utf-8",
        **kwargs: Unpack[GetRequestKwargs],
    ) -> BaseResponse:
        r = await self.session.get(url, follow_redirects=True, **kwargs)
        return BaseResponse(
            content=r.content,
            headers=r.headers.multi_items(),
            status=r.status_code,
            encoding=r.charset_encoding or encoding,
        )

    @property
    def session(self) -> httpx.AsyncClient:
        if self._session is None:
            raise RuntimeError("Session is not initialized or has been shut down.")
        return self._session

    @staticmethod
    def _build_proxy_config(
        proxy: str | None = None,
        proxy_user: str | None = None,
        proxy_pass: str | None = None,
    ) -> str | httpx.Proxy | None:
        """Builds proxy configuration."""
        if not proxy or "@" in proxy:
            return proxy or None
        if proxy_user and proxy_pass:
            return httpx.Proxy(proxy, auth=(proxy_user, proxy_pass))
        return proxy
