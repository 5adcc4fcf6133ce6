"""
Registry of site profiles.

Profiles register themselves with :func:`register_site` when their module is
imported; :func:`get_site` imports ``omnisearch.sites.<key>`` on demand.
"""

from __future__ import annotations

__all__ = ["BaseSite", "get_site", "list_sites", "register_site"]

from collections.abc import Callable
from importlib import import_module
from typing import TypeVar

from omnisearch.errors import UnknownSiteError

from .base import BaseSite

S = TypeVar("S", bound=type[BaseSite])

_SITES_PKG = "omnisearch.sites"
_BUILTIN_SITES = ("myanimelist",)

_registry: dict[str, type[BaseSite]] = {}


def register_site(site_key: str | None = None) -> Callable[[S], S]:
    """Decorator for registering a site profile class."""

    def deco(cls: S) -> S:
        key = (site_key or cls.site_key).lower()
        _registry[key] = cls
        return cls

    return deco


def get_site(site_key: str) -> BaseSite:
    """Return a profile instance for ``site_key``.

    Raises:
        UnknownSiteError: If no profile is registered under that key.
    """
    key = site_key.lower()
    if key not in _registry:
        _try_import(key)
    cls = _registry.get(key)
    if cls is None:
        raise UnknownSiteError(site_key)
    return cls()


def list_sites() -> list[str]:
    """Keys of every built-in or registered site."""
    for key in _BUILTIN_SITES:
        import_module(f"{_SITES_PKG}.{key}")
    return sorted(_registry)


def _try_import(key: str) -> None:
    """Import the profile module for ``key`` if it exists."""
    modname = f"{_SITES_PKG}.{key}"
    try:
        import_module(modname)
    except ModuleNotFoundError as e:
        if e.name and modname.startswith(e.name):
            return
        raise
