from __future__ import annotations

from typing import Any

from omnisearch.schemas import (
    CacheConfig,
    FetcherConfig,
    SearchConfig,
    SessionConfig,
)


class ConfigAdapter:
    """High-level accessor for general and site-specific settings.

    Resolution order for every value:

    **site-specific -> general -> built-in defaults**

    Args:
        config: Loaded settings mapping with a ``general`` table and an
            optional ``sites`` table keyed by site key.
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        self._config: dict[str, Any] = dict(config or {})

    def get_config(self) -> dict[str, Any]:
        """Return the full raw configuration mapping."""
        return self._config

    def get_default_site(self) -> str:
        site = self._gen_cfg().get("site")
        return site if isinstance(site, str) and site else "myanimelist"

    def get_search_config(self, site: str | None = None) -> SearchConfig:
        """Build the complete configuration for one search surface.

        Args:
            site: Site key; the general ``site`` setting when omitted.
        """
        site = site or self.get_default_site()
        cfg = self._merged(site)

        return SearchConfig(
            site=site,
            request_delay=float(cfg.get("request_delay", 0.2)),
            min_length=int(cfg.get("min_length", 1)),
            fetcher_cfg=self.get_fetcher_config(site),
            cache_cfg=self.get_cache_config(site),
        )

    def get_fetcher_config(self, site: str) -> FetcherConfig:
        cfg = self._merged(site)
        return FetcherConfig(
            backend=cfg.get("backend", "aiohttp"),
            session_cfg=self.get_session_config(site),
        )

    def get_session_config(self, site: str) -> SessionConfig:
        cfg = self._merged(site)
        return SessionConfig(
            timeout=cfg.get("timeout", 10.0),
            max_connections=cfg.get("max_connections", 4),
            user_agent=cfg.get("user_agent"),
            headers=cfg.get("headers"),
            impersonate=cfg.get("impersonate", "chrome"),
            verify_ssl=cfg.get("verify_ssl", True),
            http2=cfg.get("http2", True),
            trust_env=cfg.get("trust_env", False),
            proxy=cfg.get("proxy"),
            proxy_user=cfg.get("proxy_user"),
            proxy_pass=cfg.get("proxy_pass"),
        )

    def get_cache_config(self, site: str) -> CacheConfig:
        """Build the cache settings from the ``cache`` sub-tables."""
        general_cache = self._gen_cfg().get("cache") or {}
        site_cache = self._site_cfg(site).get("cache") or {}
        cfg = {**general_cache, **site_cache}

        return CacheConfig(
            backend=cfg.get("backend", "sqlite"),
            path=cfg.get("path"),
            key_prefix=cfg.get("key_prefix", "input:"),
            max_cache_age=float(cfg.get("max_cache_age", 7 * 24 * 3600)),
            storage_quota=int(cfg.get("storage_quota", 5242880)),
        )

    def _merged(self, site: str) -> dict[str, Any]:
        return {**self._gen_cfg(), **self._site_cfg(site)}

    def _gen_cfg(self) -> dict[str, Any]:
        general = self._config.get("general")
        return general if isinstance(general, dict) else {}

    def _site_cfg(self, site: str) -> dict[str, Any]:
        sites = self._config.get("sites")
        if not isinstance(sites, dict):
            return {}
        cfg = sites.get(site)
        return cfg if isinstance(cfg, dict) else {}
