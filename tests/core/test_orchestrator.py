import asyncio

import pytest

from omnisearch.core import CacheStore, SearchOrchestrator, SearchState, parse_input
from omnisearch.infra.persistence import MemoryStore
from omnisearch.sites import get_site

from ..fakes import NOW_MS, FakeAlarms, FakeClock, FakeSource, make_entry

MAX_AGE = 60
SITE = get_site("myanimelist")


def q(text):
    return parse_input(text, SITE)


async def wait_for_calls(source, n=1):
    for _ in range(200):
        if len(source.calls) >= n:
            return
        await asyncio.sleep(0.005)
    raise AssertionError("source was never called")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def alarms():
    return FakeAlarms()


@pytest.fixture
def cache(store, alarms):
    return CacheStore(store, alarms, storage_quota=10**9)


@pytest.fixture
def source():
    return FakeSource()


@pytest.fixture
def make_orchestrator(cache, clock):
    def factory(source, request_delay=0.02):
        return SearchOrchestrator(
            source,
            cache,
            request_delay=request_delay,
            max_cache_age=MAX_AGE,
            clock=clock,
        )

    return factory


@pytest.mark.asyncio
async def test_search_fetches_and_caches(make_orchestrator, source, store, alarms):
    orch = make_orchestrator(source)

    entry = await orch.search(q("naruto"))

    assert entry is not None
    assert entry.items[0].name == "Naruto"
    assert entry.expires_at == NOW_MS + MAX_AGE * 1000
    assert source.texts == ["naruto"]
    assert source.calls[0].category == "all"
    assert store.get("input:naruto")["input:naruto"]["expires"] == entry.expires_at
    assert alarms.alarms == {"input:naruto": entry.expires_at}
    assert orch.state is SearchState.IDLE


@pytest.mark.asyncio
async def test_cache_hit_skips_debounce_and_network(make_orchestrator, source):
    first = await make_orchestrator(source).search(q("naruto"))

    slow = make_orchestrator(source, request_delay=10)
    again = await asyncio.wait_for(slow.search(q("Naruto")), timeout=1)

    assert again == first
    assert source.texts == ["naruto"]


@pytest.mark.asyncio
async def test_new_search_supersedes_debouncing_one(make_orchestrator, source):
    orch = make_orchestrator(source)

    t1 = asyncio.create_task(orch.search(q("a")))
    await asyncio.sleep(0)
    assert orch.state is SearchState.DEBOUNCING

    second = await orch.search(q("ab"))

    assert await t1 is None
    assert second is not None
    assert source.texts == ["ab"]


@pytest.mark.asyncio
async def test_prefix_typed_before_result_becomes_alias(
    make_orchestrator, source, store, cache
):
    orch = make_orchestrator(source)

    orch.observe(q("oni"))
    t1 = asyncio.create_task(orch.search(q("oni")))
    await asyncio.sleep(0)
    orch.observe(q("onizuka"))
    entry = await orch.search(q("onizuka"))

    assert await t1 is None
    assert source.texts == ["onizuka"]
    assert store.get("input:oni") == {"input:oni": "onizuka"}
    assert isinstance(store.get("input:onizuka")["input:onizuka"], dict)
    assert cache.resolve("input:oni") == entry
    assert len(orch.chain) == 0

    # the alias now answers the shorter query without a request
    assert await orch.search(q("oni")) == entry
    assert source.texts == ["onizuka"]


@pytest.mark.asyncio
async def test_aliases_carry_the_category_key(make_orchestrator, source, store):
    orch = make_orchestrator(source)
    for text in ("o/a", "on/a", "oni/a"):
        orch.observe(q(text))

    await orch.search(q("oni/a"))

    assert source.calls[0].category == "anime"
    assert store.get(["input:o/a", "input:on/a"]) == {
        "input:o/a": "oni/a",
        "input:on/a": "oni/a",
    }


@pytest.mark.asyncio
async def test_prefixes_from_another_category_are_not_aliased(
    make_orchestrator, source, store
):
    orch = make_orchestrator(source)
    orch.observe(q("on"))
    orch.observe(q("oni/a"))

    await orch.search(q("oni/a"))

    assert list(store.get(None)) == ["input:oni/a"]


@pytest.mark.asyncio
async def test_stale_entry_is_refetched(make_orchestrator, source, cache, clock):
    cache.put("input:bleach", make_entry(expires_at=NOW_MS - 1, name="old"))
    orch = make_orchestrator(source)

    entry = await orch.search(q("bleach"))

    assert source.texts == ["bleach"]
    assert entry is not None
    assert entry.expires_at == clock() + MAX_AGE * 1000
    assert cache.resolve("input:bleach") == entry


@pytest.mark.asyncio
async def test_force_bypasses_fresh_entry(make_orchestrator, source, cache):
    cache.put("input:naruto", make_entry(name="cached"))
    orch = make_orchestrator(source)

    assert (await orch.search(q("naruto"))).items[0].name == "cached"
    forced = await orch.search(q("naruto!"))

    assert source.texts == ["naruto"]
    assert forced.items[0].name == "Naruto"
    assert cache.resolve("input:naruto") == forced


@pytest.mark.asyncio
async def test_cancel_aborts_in_flight_request(make_orchestrator, store):
    source = FakeSource(gate=asyncio.Event())
    orch = make_orchestrator(source)

    task = asyncio.create_task(orch.search(q("naruto")))
    await wait_for_calls(source)
    assert orch.state is SearchState.FETCHING

    orch.cancel()

    assert await asyncio.wait_for(task, timeout=1) is None
    assert orch.state is SearchState.IDLE
    assert store.get(None) == {}


@pytest.mark.asyncio
async def test_only_one_request_in_flight(make_orchestrator):
    gate = asyncio.Event()
    source = FakeSource(gate=gate)
    orch = make_orchestrator(source)

    t1 = asyncio.create_task(orch.search(q("naruto")))
    await wait_for_calls(source)
    t2 = asyncio.create_task(orch.search(q("bleach")))

    assert await asyncio.wait_for(t1, timeout=1) is None
    gate.set()
    second = await asyncio.wait_for(t2, timeout=1)

    assert second is not None
    assert source.texts == ["naruto", "bleach"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [ConnectionError("refused"), ValueError("bad json"), RuntimeError("transport")],
)
async def test_failed_request_resolves_to_none(make_orchestrator, store, error):
    source = FakeSource(error=error)
    orch = make_orchestrator(source)

    assert await orch.search(q("naruto")) is None
    assert orch.state is SearchState.IDLE
    assert store.get(None) == {}


@pytest.mark.asyncio
async def test_unusable_payload_resolves_to_none(make_orchestrator, store):
    orch = make_orchestrator(FakeSource({"error": "bad request"}))

    assert await orch.search(q("naruto")) is None
    assert store.get(None) == {}


@pytest.mark.asyncio
async def test_empty_query_cancels_pending_search(make_orchestrator, source):
    orch = make_orchestrator(source)

    t1 = asyncio.create_task(orch.search(q("a")))
    await asyncio.sleep(0)

    assert await orch.search(q("  ")) is None
    assert await t1 is None
    assert source.calls == []
