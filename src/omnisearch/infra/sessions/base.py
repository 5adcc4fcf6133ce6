from __future__ import annotations

import abc
import types
from collections.abc import Mapping
from typing import Any, Self, TypedDict, Unpack

from omnisearch.infra.http_defaults import DEFAULT_USER_HEADERS
from omnisearch.schemas import SessionConfig

from .response import BaseResponse


class GetRequestKwargs(TypedDict, total=False):
    headers: Mapping[str, str]
    params: dict[str, Any] | None


class BaseSession(abc.ABC):
    """Backend-agnostic asynchronous HTTP session.

    Only what the suggestion engine needs is exposed: a GET request that
    returns a :class:`BaseResponse`, plus lifecycle management. Aborting a
    request is done by cancelling the task awaiting :meth:`get`; every
    backend releases the connection when that happens.
    """

    def __init__(self, cfg: SessionConfig | None = None, **kwargs: Any) -> None:
        """Initializes the session using the provided configuration.

        Args:
            cfg: Optional configuration object defining session behavior.
            **kwargs: Additional parameters reserved for backend-specific
                initialization.
        """
        cfg = cfg or SessionConfig()

        self._timeout = cfg.timeout
        self._max_connections = cfg.max_connections
        self._verify_ssl = cfg.verify_ssl
        self._impersonate = cfg.impersonate
        self._http2 = cfg.http2
        self._proxy = cfg.proxy
        self._proxy_user = cfg.proxy_user
        self._proxy_pass = cfg.proxy_pass
        self._trust_env = cfg.trust_env
        self._session: Any = None

        self._headers = DEFAULT_USER_HEADERS.copy()
        if cfg.headers:
            self._headers.update(cfg.headers)
        if cfg.user_agent:
            self._headers["User-Agent"] = cfg.user_agent

    @abc.abstractmethod
    async def init(self, **kwargs: Any) -> None:
        """Initializes backend-specific resources."""
        ...

    @abc.abstractmethod
    async def close(self) -> None:
        """Releases and cleans up any allocated resources."""
        ...

    @abc.abstractmethod
    async def get(
        self,
        url: str,
        *,
        encoding: str = "utf-8",
        **kwargs: Unpack[GetRequestKwargs],
    ) -> BaseResponse:
        """Performs an HTTP GET request.

        Args:
            url: Target URL.
            encoding: Fallback text encoding when the server declares none.
            **kwargs: Additional request parameters forwarded to the backend.

        Returns:
            BaseResponse: A response wrapper for the GET request.

        Raises:
            RuntimeError: If the session has not been initialized.
        """
        ...

    @property
    def is_open(self) -> bool:
        return self._session is not None

    @property
    def headers(self) -> dict[str, str]:
        """Returns a copy of the current session headers."""
        return self._headers.copy()

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
