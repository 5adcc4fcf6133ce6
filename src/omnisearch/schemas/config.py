"""
Defines structured configuration models using dataclasses.
"""

from dataclasses import dataclass, field


@dataclass
class SessionConfig:
    """Configuration for HTTP session behavior.

    Attributes:
        timeout: Request timeout in seconds.
        max_connections: Maximum number of concurrent connections.
        user_agent: Custom User-Agent string.
        headers: Additional headers to attach to requests.
        impersonate: Browser impersonation mode. (`curl_cffi`)
        verify_ssl: Whether to verify SSL certificates.
        http2: Whether HTTP/2 should be used. (`httpx`)
        trust_env: Whether environment variables are used for proxies.
        proxy: Proxy server URL.
        proxy_user: Proxy authentication username.
        proxy_pass: Proxy authentication password.
    """

    timeout: float = 10.0
    max_connections: int = 4
    user_agent: str | None = None
    headers: dict[str, str] | None = None
    impersonate: str | None = "chrome"
    verify_ssl: bool = True
    http2: bool = True
    trust_env: bool = False
    proxy: str | None = None
    proxy_user: str | None = None
    proxy_pass: str | None = None


@dataclass
class FetcherConfig:
    """Configuration for fetching suggestions from the remote API.

    Attributes:
        backend: HTTP backend name (aiohttp, httpx, curl_cffi).
        session_cfg: HTTP session configuration.
    """

    backend: str = "aiohttp"
    session_cfg: SessionConfig = field(default_factory=SessionConfig)


@dataclass
class CacheConfig:
    """Configuration for the suggestion cache.

    Attributes:
        backend: Key/value store backend ("sqlite" or "memory").
        path: Location of the sqlite file. Defaults to the user cache dir.
        key_prefix: Namespace prepended to every cache key.
        max_cache_age: Lifetime of a fetched result, in seconds.
        storage_quota: Store size in bytes; eviction starts past half of it.
    """

    backend: str = "sqlite"
    path: str | None = None
    key_prefix: str = "input:"
    max_cache_age: float = 7 * 24 * 3600
    storage_quota: int = 5242880


@dataclass
class SearchConfig:
    """Top-level configuration for an omnibox search surface.

    Attributes:
        site: Site profile key (e.g., "myanimelist").
        request_delay: Debounce delay before a request is sent, in seconds.
        min_length: Shortest normalized text that triggers a search.
        fetcher_cfg: Configuration for the fetcher.
        cache_cfg: Configuration for the cache.
    """

    site: str = "myanimelist"
    request_delay: float = 0.2
    min_length: int = 1
    fetcher_cfg: FetcherConfig = field(default_factory=FetcherConfig)
    cache_cfg: CacheConfig = field(default_factory=CacheConfig)
