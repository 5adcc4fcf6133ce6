"""
Command-line entry point.

Usage:
  omnisearch suggest "naruto/a"
  omnisearch url "naruto/m"
  omnisearch init-config
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import re
import sys
from pathlib import Path
from typing import Any

from omnisearch import __version__
from omnisearch.client import OmniboxSearch
from omnisearch.core import parse_input
from omnisearch.errors import UnknownSiteError
from omnisearch.infra.config import ConfigAdapter, copy_default_config, load_config
from omnisearch.infra.paths import DEFAULT_CONFIG_FILENAME
from omnisearch.libs.text import unescape_xml
from omnisearch.schemas import SearchConfig
from omnisearch.sites import get_site, list_sites

logger = logging.getLogger("omnisearch")

_TAG = re.compile(r"<[^>]+>")


def to_plain(markup: str) -> str:
    """Strip description markup for terminal output."""
    return unescape_xml(_TAG.sub("", markup).replace("&#x20;", " ")).strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="omnisearch",
        description="Incremental search suggestions from prefix-search APIs.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--config", help="path to a settings.toml/json file")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logs")
    sub = parser.add_subparsers(dest="command", required=True)

    p_suggest = sub.add_parser("suggest", help="print suggestions for TEXT")
    p_suggest.add_argument("text")
    p_suggest.add_argument("--site", choices=list_sites())
    p_suggest.add_argument("--backend", choices=["aiohttp", "httpx", "curl_cffi"])
    p_suggest.add_argument(
        "--no-cache", action="store_true", help="keep the cache in memory only"
    )

    p_url = sub.add_parser("url", help="print the URL opened for TEXT")
    p_url.add_argument("text")
    p_url.add_argument("--site", choices=list_sites())

    p_init = sub.add_parser("init-config", help="write a sample settings file")
    p_init.add_argument("target", nargs="?", default=DEFAULT_CONFIG_FILENAME)

    return parser


def _load_settings(path: str | None) -> dict[str, Any]:
    try:
        return load_config(path)
    except FileNotFoundError:
        if path:
            raise
        logger.debug("No settings file found, using defaults")
        return {}


async def _suggest(cfg: SearchConfig, text: str) -> int:
    box = await OmniboxSearch.from_config(cfg)
    async with box:
        result = await box.on_input_changed(text)

    if result is None:
        print("No suggestions.")
        return 1

    print(to_plain(result["site_link"]))
    for i, s in enumerate(result["suggestions"], 1):
        print(f"{i:2d}. {to_plain(s['description'])}")
        print(f"    {s['content']}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "init-config":
        target = Path(args.target)
        copy_default_config(target)
        print(f"Wrote {target}")
        return 0

    try:
        adapter = ConfigAdapter(_load_settings(args.config))
        cfg = adapter.get_search_config(args.site)
        site = get_site(cfg.site)
    except UnknownSiteError as e:
        print(f"omnisearch: unknown site {e}", file=sys.stderr)
        return 2
    except (FileNotFoundError, ValueError) as e:
        print(f"omnisearch: {e}", file=sys.stderr)
        return 2

    if args.command == "url":
        print(site.commit_url(args.text, parse_input(args.text, site)))
        return 0

    # single shot: nothing to debounce
    cfg.request_delay = 0
    if args.backend:
        cfg.fetcher_cfg.backend = args.backend
    if args.no_cache:
        cfg.cache_cfg.backend = "memory"
    return asyncio.run(_suggest(cfg, args.text))


if __name__ == "__main__":
    sys.exit(main())
