"""Per-page cache for directory query results.

Entries are keyed by the literal (location_slug, category_slug) pair, so a
single page can be invalidated without touching any other. A secondary
index from category slug to cached keys supports category-wide
invalidation.

Concurrent loads of the same uncached key are serialized by a per-key lock:
the first caller computes, later callers re-check the cache once the lock
is released and reuse the stored value.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import structlog

logger = structlog.get_logger()

T = TypeVar("T")

CacheKey = tuple[str, str]


@dataclass
class CacheEntry(Generic[T]):
    """A cached value and its expiry (monotonic seconds, None = never)."""

    value: T
    expires_at: float | None = None


class DirectoryPageCache(Generic[T]):
    """In-memory key-value cache for composed directory pages.

    Example usage:
        cache = DirectoryPageCache()
        page = await cache.get_or_load("austin", "coffee-shop", loader)
        cache.invalidate("austin", "coffee-shop")
    """

    def __init__(
        self,
        ttl_seconds: float = 0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize cache.

        Args:
            ttl_seconds: Entry lifetime; 0 keeps entries until invalidated.
            clock: Monotonic time source.
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[CacheKey, CacheEntry[T]] = {}
        self._by_category: dict[str, set[CacheKey]] = {}
        self._locks: dict[CacheKey, asyncio.Lock] = {}
        self._waiters: dict[CacheKey, int] = {}
        # Bumped by invalidation while a load for the key is in flight.
        self._versions: dict[CacheKey, int] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def keys(self) -> list[CacheKey]:
        """Get cached keys."""
        return list(self._entries)

    def get(self, location_slug: str, category_slug: str) -> T | None:
        """Get a cached page.

        Args:
            location_slug: Location slug.
            category_slug: Category slug.

        Returns:
            Cached value if present and not expired.
        """
        key = (location_slug, category_slug)
        entry = self._entries.get(key)
        if entry is None:
            return None

        if entry.expires_at is not None and self._clock() >= entry.expires_at:
            self._drop(key)
            return None

        return entry.value

    def set(self, location_slug: str, category_slug: str, value: T) -> None:
        """Store a page.

        Args:
            location_slug: Location slug.
            category_slug: Category slug.
            value: Composed page to cache.
        """
        key = (location_slug, category_slug)
        expires_at = self._clock() + self.ttl_seconds if self.ttl_seconds > 0 else None
        self._entries[key] = CacheEntry(value=value, expires_at=expires_at)
        self._by_category.setdefault(category_slug, set()).add(key)

    def invalidate(self, location_slug: str, category_slug: str) -> bool:
        """Invalidate one page.

        Args:
            location_slug: Location slug.
            category_slug: Category slug.

        Returns:
            True if an entry was removed.
        """
        key = (location_slug, category_slug)
        self._bump(key)
        removed = self._drop(key)

        logger.info(
            "Directory page invalidated",
            location_slug=location_slug,
            category_slug=category_slug,
            removed=removed,
        )
        return removed

    def invalidate_category(self, category_slug: str) -> int:
        """Invalidate every cached page of a category.

        Args:
            category_slug: Category slug.

        Returns:
            Number of entries removed.
        """
        keys = list(self._by_category.get(category_slug, ()))
        for key in self._locks:
            if key[1] == category_slug:
                self._bump(key)

        removed = sum(1 for key in keys if self._drop(key))

        logger.info(
            "Directory category invalidated",
            category_slug=category_slug,
            removed=removed,
        )
        return removed

    def clear(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries removed.
        """
        count = len(self._entries)
        for key in self._locks:
            self._bump(key)
        self._entries.clear()
        self._by_category.clear()
        return count

    async def get_or_load(
        self,
        location_slug: str,
        category_slug: str,
        loader: Callable[[], Awaitable[T | None]],
    ) -> T | None:
        """Get a cached page, computing it at most once at a time.

        A loader result of None (page does not exist) is returned but not
        cached. If the loader raises or is cancelled nothing is stored.

        Args:
            location_slug: Location slug.
            category_slug: Category slug.
            loader: Coroutine factory computing the page.

        Returns:
            The cached or freshly computed value.
        """
        cached = self.get(location_slug, category_slug)
        if cached is not None:
            return cached

        key = (location_slug, category_slug)
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            async with lock:
                cached = self.get(location_slug, category_slug)
                if cached is not None:
                    return cached

                version = self._versions.get(key, 0)
                value = await loader()

                if value is not None and self._versions.get(key, 0) == version:
                    self.set(location_slug, category_slug, value)
                return value
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                del self._locks[key]
                self._versions.pop(key, None)

    def stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        return {
            "entries": len(self._entries),
            "categories": len(self._by_category),
            "in_flight": len(self._locks),
        }

    def _bump(self, key: CacheKey) -> None:
        if key in self._locks:
            self._versions[key] = self._versions.get(key, 0) + 1

    def _drop(self, key: CacheKey) -> bool:
        entry = self._entries.pop(key, None)
        if entry is None:
            return False

        keys = self._by_category.get(key[1])
        if keys is not None:
            keys.discard(key)
            if not keys:
                del self._by_category[key[1]]
        return True
