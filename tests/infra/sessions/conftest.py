from __future__ import annotations

import asyncio

import aiohttp.web
import pytest_asyncio


@pytest_asyncio.fixture
async def test_server(aiohttp_server):
    async def handler_json(request):
        return aiohttp.web.json_response(
            {"keyword": request.query.get("keyword"), "type": request.query.get("type")}
        )

    async def handler_status(request):
        return aiohttp.web.Response(text="nope", status=int(request.match_info["code"]))

    async def handler_echo_headers(request):
        return aiohttp.web.json_response({"headers": dict(request.headers)})

    async def handler_latin1(request):
        return aiohttp.web.Response(
            body="café".encode("latin-1"),
            headers={"Content-Type": "text/plain; charset=latin-1"},
        )

    async def handler_slow(request):
        await asyncio.sleep(1)
        return aiohttp.web.Response(text="late")

    async def handler_image(request):
        return aiohttp.web.Response(body=b"\x89PNG", content_type="image/png")

    app = aiohttp.web.Application()
    app.router.add_get("/json", handler_json)
    app.router.add_get("/status/{code}", handler_status)
    app.router.add_get("/echo-headers", handler_echo_headers)
    app.router.add_get("/latin1", handler_latin1)
    app.router.add_get("/slow", handler_slow)
    app.router.add_get("/image.png", handler_image)

    server = await aiohttp_server(app)
    return server
