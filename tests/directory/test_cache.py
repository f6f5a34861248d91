"""Tests for DirectoryPageCache."""

import asyncio

import pytest

from directory_api.directory.cache import DirectoryPageCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class TestGetSet:
    """Tests for plain get/set/invalidate."""

    def test_miss(self) -> None:
        assert DirectoryPageCache().get("austin", "coffee-shop") is None

    def test_set_then_get(self) -> None:
        cache: DirectoryPageCache[str] = DirectoryPageCache()
        cache.set("austin", "coffee-shop", "page")
        assert cache.get("austin", "coffee-shop") == "page"
        assert ("austin", "coffee-shop") in cache
        assert len(cache) == 1

    def test_ttl_expiry(self) -> None:
        clock = FakeClock()
        cache: DirectoryPageCache[str] = DirectoryPageCache(ttl_seconds=60, clock=clock)
        cache.set("austin", "coffee-shop", "page")

        clock.now += 59
        assert cache.get("austin", "coffee-shop") == "page"

        clock.now += 1
        assert cache.get("austin", "coffee-shop") is None
        assert len(cache) == 0

    def test_zero_ttl_never_expires(self) -> None:
        clock = FakeClock()
        cache: DirectoryPageCache[str] = DirectoryPageCache(clock=clock)
        cache.set("austin", "coffee-shop", "page")
        clock.now += 10**9
        assert cache.get("austin", "coffee-shop") == "page"

    def test_invalidate_only_that_page(self) -> None:
        """Invalidating one page leaves every other key cached."""
        cache: DirectoryPageCache[str] = DirectoryPageCache()
        cache.set("austin", "coffee-shop", "a")
        cache.set("denver", "coffee-shop", "b")
        cache.set("austin", "plumber", "c")

        assert cache.invalidate("austin", "coffee-shop") is True
        assert cache.invalidate("austin", "coffee-shop") is False
        assert sorted(cache.keys()) == [("austin", "plumber"), ("denver", "coffee-shop")]

    def test_invalidate_category(self) -> None:
        cache: DirectoryPageCache[str] = DirectoryPageCache()
        cache.set("austin", "coffee-shop", "a")
        cache.set("denver", "coffee-shop", "b")
        cache.set("austin", "plumber", "c")

        assert cache.invalidate_category("coffee-shop") == 2
        assert cache.keys() == [("austin", "plumber")]
        assert cache.invalidate_category("coffee-shop") == 0

    def test_clear(self) -> None:
        cache: DirectoryPageCache[str] = DirectoryPageCache()
        cache.set("austin", "coffee-shop", "a")
        cache.set("austin", "plumber", "b")
        assert cache.clear() == 2
        assert len(cache) == 0
        assert cache.stats() == {"entries": 0, "categories": 0, "in_flight": 0}


@pytest.mark.asyncio
class TestGetOrLoad:
    """Tests for single-flight loading."""

    async def test_loads_and_caches(self) -> None:
        cache: DirectoryPageCache[str] = DirectoryPageCache()
        calls = 0

        async def loader() -> str:
            nonlocal calls
            calls += 1
            return "page"

        assert await cache.get_or_load("austin", "coffee-shop", loader) == "page"
        assert await cache.get_or_load("austin", "coffee-shop", loader) == "page"
        assert calls == 1

    async def test_concurrent_misses_share_one_load(self) -> None:
        cache: DirectoryPageCache[str] = DirectoryPageCache()
        calls = 0
        release = asyncio.Event()

        async def loader() -> str:
            nonlocal calls
            calls += 1
            await release.wait()
            return "page"

        tasks = [
            asyncio.ensure_future(cache.get_or_load("austin", "coffee-shop", loader))
            for _ in range(5)
        ]
        await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(*tasks)

        assert results == ["page"] * 5
        assert calls == 1
        assert cache.stats()["in_flight"] == 0

    async def test_none_is_not_cached(self) -> None:
        cache: DirectoryPageCache[str] = DirectoryPageCache()
        calls = 0

        async def loader() -> None:
            nonlocal calls
            calls += 1
            return None

        assert await cache.get_or_load("atlantis", "coffee-shop", loader) is None
        assert await cache.get_or_load("atlantis", "coffee-shop", loader) is None
        assert calls == 2
        assert len(cache) == 0

    async def test_loader_error_stores_nothing(self) -> None:
        cache: DirectoryPageCache[str] = DirectoryPageCache()

        async def loader() -> str:
            raise RuntimeError("db down")

        with pytest.raises(RuntimeError):
            await cache.get_or_load("austin", "coffee-shop", loader)

        assert len(cache) == 0
        assert cache.stats()["in_flight"] == 0

    async def test_invalidation_during_load_discards_result(self) -> None:
        """A load that started before an invalidation is not stored."""
        cache: DirectoryPageCache[str] = DirectoryPageCache()
        started = asyncio.Event()
        release = asyncio.Event()

        async def loader() -> str:
            started.set()
            await release.wait()
            return "stale"

        task = asyncio.ensure_future(cache.get_or_load("austin", "coffee-shop", loader))
        await started.wait()
        cache.invalidate("austin", "coffee-shop")
        release.set()

        assert await task == "stale"
        assert cache.get("austin", "coffee-shop") is None

    async def test_category_invalidation_during_load_discards_result(self) -> None:
        cache: DirectoryPageCache[str] = DirectoryPageCache()
        started = asyncio.Event()
        release = asyncio.Event()

        async def loader() -> str:
            started.set()
            await release.wait()
            return "stale"

        task = asyncio.ensure_future(cache.get_or_load("austin", "coffee-shop", loader))
        await started.wait()
        cache.invalidate_category("coffee-shop")
        release.set()
        await task

        assert ("austin", "coffee-shop") not in cache
