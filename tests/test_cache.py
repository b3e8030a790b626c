import asyncio

import pytest

from crew_directory.core.cache import QueryCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def make_loader(values):
    """Returns a loader that yields the next value on each call, and a call counter."""
    calls = {"count": 0}

    async def loader():
        value = values[min(calls["count"], len(values) - 1)]
        calls["count"] += 1
        return value

    return loader, calls


def test_hit_within_ttl_does_not_reload():
    cache = QueryCache(clock=FakeClock())
    loader, calls = make_loader(["first", "second"])

    async def run():
        a = await cache.cached("k", 60, ["t"], loader)
        b = await cache.cached("k", 60, ["t"], loader)
        return a, b

    assert asyncio.run(run()) == ("first", "first")
    assert calls["count"] == 1


def test_reload_after_ttl_expires():
    clock = FakeClock()
    cache = QueryCache(clock=clock)
    loader, calls = make_loader(["first", "second"])

    async def run():
        a = await cache.cached("k", 60, ["t"], loader)
        clock.now += 61
        b = await cache.cached("k", 60, ["t"], loader)
        return a, b

    assert asyncio.run(run()) == ("first", "second")
    assert calls["count"] == 2


def test_revalidate_tag_drops_only_tagged_entries():
    cache = QueryCache(clock=FakeClock())
    tagged, tagged_calls = make_loader(["a1", "a2"])
    other, other_calls = make_loader(["b1", "b2"])

    async def run():
        await cache.cached("a", 60, ["freelancers"], tagged)
        await cache.cached("b", 60, ["crew-directory"], other)
        cache.revalidate_tag("freelancers")
        return (
            await cache.cached("a", 60, ["freelancers"], tagged),
            await cache.cached("b", 60, ["crew-directory"], other),
        )

    assert asyncio.run(run()) == ("a2", "b1")
    assert tagged_calls["count"] == 2
    assert other_calls["count"] == 1


def test_revalidate_unknown_tag_is_harmless():
    cache = QueryCache()
    cache.revalidate_tag("nothing-here")
    cache.revalidate_tag("nothing-here")


def test_loader_error_propagates_and_is_not_cached():
    cache = QueryCache(clock=FakeClock())
    calls = {"count": 0}

    async def flaky():
        calls["count"] += 1
        if calls["count"] == 1:
            raise ConnectionError("database unreachable")
        return "ok"

    with pytest.raises(ConnectionError):
        asyncio.run(cache.cached("k", 60, ["t"], flaky))

    assert asyncio.run(cache.cached("k", 60, ["t"], flaky)) == "ok"
    assert calls["count"] == 2


def test_result_loaded_during_invalidation_is_not_stored():
    cache = QueryCache(clock=FakeClock())
    calls = {"count": 0}

    async def loader():
        calls["count"] += 1
        if calls["count"] == 1:
            # a write lands while this read is still in flight
            cache.revalidate_tag("t")
            return "stale"
        return "fresh"

    async def run():
        first = await cache.cached("k", 60, ["t"], loader)
        second = await cache.cached("k", 60, ["t"], loader)
        return first, second

    assert asyncio.run(run()) == ("stale", "fresh")
    assert calls["count"] == 2
