import asyncio

import pytest

from omnisearch.core.cancel import CancelToken
from omnisearch.errors import FetchCancelled
from omnisearch.infra.http_defaults import DEFAULT_USER_AGENT
from omnisearch.schemas import SessionConfig

from .utils import SUPPORTED_BACKENDS, safe_create


@pytest.mark.parametrize("backend", sorted(SUPPORTED_BACKENDS))
@pytest.mark.asyncio
async def test_get_json_with_params(backend, test_server):
    base = str(test_server.make_url("/"))

    async with safe_create(backend, SessionConfig()) as s:
        r = await s.get(base + "json", params={"keyword": "naruto", "type": "all"})

    assert r.status == 200
    assert r.ok
    assert r.content_type == "application/json"
    assert r.json() == {"keyword": "naruto", "type": "all"}


@pytest.mark.parametrize("backend", sorted(SUPPORTED_BACKENDS))
@pytest.mark.asyncio
async def test_error_status_is_returned_not_raised(backend, test_server):
    base = str(test_server.make_url("/"))

    async with safe_create(backend, SessionConfig()) as s:
        r = await s.get(base + "status/503")

    assert r.status == 503
    assert not r.ok


@pytest.mark.parametrize("backend", sorted(SUPPORTED_BACKENDS))
@pytest.mark.asyncio
async def test_declared_charset_is_used(backend, test_server):
    base = str(test_server.make_url("/"))

    async with safe_create(backend, SessionConfig()) as s:
        r = await s.get(base + "latin1")

    assert r.text == "café"


@pytest.mark.parametrize("backend", sorted(SUPPORTED_BACKENDS))
@pytest.mark.asyncio
async def test_binary_body(backend, test_server):
    base = str(test_server.make_url("/"))

    async with safe_create(backend, SessionConfig()) as s:
        r = await s.get(base + "image.png")

    assert r.content == b"\x89PNG"
    assert r.content_type == "image/png"


@pytest.mark.parametrize("backend", sorted(SUPPORTED_BACKENDS))
def test_headers_property_returns_copy(backend):
    cfg = SessionConfig(headers={"A": "1", "B": "2"})
    s = safe_create(backend, cfg)

    h1 = s.headers
    h1["A"] = "999"
    h1["C"] = "new"

    h2 = s.headers
    assert h2["A"] == "1"
    assert h2["B"] == "2"
    assert "C" not in h2
    assert h2["User-Agent"] == DEFAULT_USER_AGENT


@pytest.mark.parametrize("backend", sorted(SUPPORTED_BACKENDS))
@pytest.mark.asyncio
async def test_user_agent_override_sent_to_server(backend, test_server):
    custom_ua = "OmnisearchTestAgent/1.0"
    cfg = SessionConfig(user_agent=custom_ua)
    base = str(test_server.make_url("/"))

    async with safe_create(backend, cfg) as s:
        r = await s.get(base + "echo-headers")

    assert r.json()["headers"].get("User-Agent") == custom_ua


@pytest.mark.parametrize("backend", sorted(SUPPORTED_BACKENDS))
@pytest.mark.asyncio
async def test_per_request_headers_sent_to_server(backend, test_server):
    base = str(test_server.make_url("/"))

    async with safe_create(backend, SessionConfig()) as s:
        r = await s.get(base + "echo-headers", headers={"X-LControl": "x-no-cache"})

    assert r.json()["headers"].get("X-LControl") == "x-no-cache"


@pytest.mark.parametrize("backend", sorted(SUPPORTED_BACKENDS))
@pytest.mark.asyncio
async def test_cancelled_request_is_abandoned(backend, test_server):
    base = str(test_server.make_url("/"))
    token = CancelToken()

    async with safe_create(backend, SessionConfig(timeout=30)) as s:
        asyncio.get_running_loop().call_later(0.05, token.cancel)
        with pytest.raises(FetchCancelled):
            await asyncio.wait_for(token.run(s.get(base + "slow")), timeout=0.8)
