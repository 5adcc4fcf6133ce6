from __future__ import annotations

import asyncio

import aiohttp.web
import pytest
import pytest_asyncio

import omnisearch.sites as sites
from omnisearch.sites.myanimelist import MyAnimeListSite

from .fakes import IMAGE_BYTES, make_item, make_payload


@pytest_asyncio.fixture
async def api_server(aiohttp_server):
    """A stand-in for the prefix-search API and its image CDN.

    Special keywords: ``error`` answers 500, ``slow`` takes a second,
    ``noimage`` points the items at a missing image and ``slowimage`` at
    one that takes a second to download.
    """
    seen: dict[str, list] = {"queries": [], "lcontrol": [], "images": []}

    async def handler_prefix(request):
        seen["queries"].append(dict(request.query))
        seen["lcontrol"].append(request.headers.get("X-LControl"))
        keyword = request.query.get("keyword", "")
        if keyword == "error":
            return aiohttp.web.Response(text="oops", status=500)
        if keyword == "slow":
            await asyncio.sleep(1)

        origin = str(request.url.origin())
        image = origin + {
            "noimage": "/images/missing.jpg",
            "slowimage": "/r/50x70/images/anime/13/slow.jpg?s=abc",
        }.get(keyword, "/r/50x70/images/anime/13/17405.jpg?s=abc")
        return aiohttp.web.json_response(
            make_payload(
                (
                    "anime",
                    [
                        make_item("Naruto: Shippuden", image_url=image),
                        make_item("Naruto", image_url=image),
                    ],
                )
            )
        )

    async def handler_image(request):
        seen["images"].append(request.path)
        if request.path.endswith("/slow.jpg"):
            await asyncio.sleep(1)
        return aiohttp.web.Response(body=IMAGE_BYTES, content_type="image/jpeg")

    app = aiohttp.web.Application()
    app.router.add_get("/search/prefix.json", handler_prefix)
    app.router.add_get("/images/anime/13/17405.jpg", handler_image)
    app.router.add_get("/images/anime/13/slow.jpg", handler_image)

    server = await aiohttp_server(app)
    server.seen = seen
    return server


@pytest.fixture
def local_site(api_server, monkeypatch):
    """A MyAnimeList profile pointed at :func:`api_server`, registered as "local"."""
    base = str(api_server.make_url("/"))
    monkeypatch.setattr(sites, "_registry", dict(sites._registry))

    @sites.register_site("local")
    class LocalSite(MyAnimeListSite):
        site_key = "local"
        SITE_URL = base
        API_URL = base + "search/prefix.json?type=%t&v=1&keyword="
        SEARCH_URL = base + "%c.php?q="
        SEARCH_ALL_URL = base + "search/all?q="

    return LocalSite()
