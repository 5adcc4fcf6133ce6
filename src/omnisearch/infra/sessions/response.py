"""
Backend-independent response objects returned by session backends.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from typing import Any


class Headers(Mapping[str, str]):
    """Read-only, case-insensitive view over response headers.

    When a header is repeated, the first value wins for item access while
    :meth:`get_all` returns every value in arrival order.
    """

    __slots__ = ("_store",)

    def __init__(
        self,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
    ) -> None:
        self._store: dict[str, list[str]] = {}
        if not headers:
            return
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        for key, value in pairs:
            self._store.setdefault(key.lower(), []).append(value or "")

    def get_all(self, key: str) -> list[str]:
        return list(self._store.get(key.lower(), []))

    def __getitem__(self, key: str) -> str:
        values = self._store.get(key.lower())
        if not values:
            raise KeyError(key)
        return values[0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._store

    def __repr__(self) -> str:
        return f"<Headers {sorted(self._store)}>"


class BaseResponse:
    """A lightweight, backend-agnostic HTTP response.

    Args:
        content: Raw response body as bytes.
        headers: Optional header mapping or sequence of header pairs.
        status: HTTP status code.
        encoding: Text encoding used when decoding the body.
    """

    __slots__ = ("content", "headers", "status", "encoding")

    def __init__(
        self,
        *,
        content: bytes,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
        status: int = 200,
        encoding: str = "utf-8",
    ) -> None:
        self.content = content
        self.headers = Headers(headers)
        self.status = status
        self.encoding = encoding

    @property
    def text(self) -> str:
        """Returns the body decoded with the response encoding.

        Undecodable bytes are replaced rather than raising, since the only
        consumer is a JSON parser that reports its own errors.
        """
        try:
            return self.content.decode(self.encoding, errors="replace")
        except LookupError:
            return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Parses the response body as JSON.

        Raises:
            json.JSONDecodeError: If the content is not valid JSON.
        """
        return json.loads(self.text)

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "").split(";", 1)[0].strip()

    @property
    def ok(self) -> bool:
        """True when the status code is a 2xx success."""
        return 200 <= self.status < 300

    def __repr__(self) -> str:
        return f"<BaseResponse status={self.status} len={len(self.content)}>"
