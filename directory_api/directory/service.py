"""Directory query service.

Resolves one directory page: the location, the category and the
top-rated listings for the pair. The composed page is the unit of caching.
"""

import asyncio
from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from directory_api.catalog.models import Category, Listing, Location
from directory_api.catalog.repository import CatalogRepository
from directory_api.directory.cache import DirectoryPageCache
from directory_api.directory.page_meta import PageMeta, build_page_meta
from directory_api.infrastructure.config import settings
from directory_api.infrastructure.database import async_session_factory

logger = structlog.get_logger()

FALLBACK_CITY = {"name": "Austin", "slug": "austin", "state": "TX"}
FALLBACK_CATEGORY_SLUG = "coffee-shop"


async def join_lookups(*lookups: Coroutine[Any, Any, Any]) -> list[Any]:
    """Run lookups concurrently and return their results in order.

    The first failure propagates and every lookup still running is cancelled.
    """
    tasks = [asyncio.ensure_future(lookup) for lookup in lookups]
    try:
        return await asyncio.gather(*tasks)
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()


# ============================================================================
# Result Types
# ============================================================================


@dataclass
class DirectoryPage:
    """Composed result for one (location, category) page.

    Attributes:
        location: Page location.
        category: Page category.
        items: Listings ordered by rating descending, capped at page size.
    """

    location: Location
    category: Category
    items: list[Listing] = field(default_factory=list)

    def meta(self, year: int | None = None) -> PageMeta:
        """Derive title, description and hero text."""
        return build_page_meta(self.location, self.category, year=year)


@dataclass
class HomeData:
    """Reference data for the home page and navigation.

    Attributes:
        categories: All categories.
        top_locations: First locations in insertion order.
        default_city: First location, or a fixed fallback city.
        default_category_slug: First category slug, or a fixed fallback.
    """

    categories: list[Category]
    top_locations: list[Location]
    default_city: dict[str, Any]
    default_category_slug: str


# ============================================================================
# Directory Service
# ============================================================================


class DirectoryService:
    """Service for directory page queries.

    Each concurrent lookup runs on its own session from the factory; an
    AsyncSession must not be shared between tasks.

    Example usage:
        service = DirectoryService(async_session_factory, cache=DirectoryPageCache())
        page = await service.get_page("austin", "coffee-shop")
        if page is None:
            ...  # 404
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        cache: DirectoryPageCache[DirectoryPage] | None = None,
        page_size: int | None = None,
        home_location_limit: int | None = None,
    ) -> None:
        """Initialize service.

        Args:
            session_factory: Factory for read sessions.
            cache: Page cache (None disables caching).
            page_size: Maximum listings per page.
            home_location_limit: Locations returned by ``get_home``.
        """
        self.session_factory = session_factory
        self.cache = cache
        self.page_size = page_size if page_size is not None else settings.directory_page_size
        self.home_location_limit = (
            home_location_limit
            if home_location_limit is not None
            else settings.home_location_limit
        )

    async def _find_location(self, slug: str) -> Location | None:
        async with self.session_factory() as session:
            return await CatalogRepository(session).find_location_by_slug(slug)

    async def _find_category(self, slug: str) -> Category | None:
        async with self.session_factory() as session:
            return await CatalogRepository(session).find_category_by_slug(slug)

    async def load_page(
        self,
        location_slug: str,
        category_slug: str,
    ) -> DirectoryPage | None:
        """Compute a directory page without the cache.

        Args:
            location_slug: Location slug.
            category_slug: Category slug.

        Returns:
            Composed page, or None if the location or category is absent.

        Raises:
            SQLAlchemyError: If either lookup fails; the other is cancelled.
        """
        location, category = await join_lookups(
            self._find_location(location_slug),
            self._find_category(category_slug),
        )

        if location is None or category is None:
            logger.debug(
                "Directory page not found",
                location_slug=location_slug,
                category_slug=category_slug,
                location_found=location is not None,
                category_found=category is not None,
            )
            return None

        async with self.session_factory() as session:
            items = await CatalogRepository(session).list_listings(
                location_slug,
                category_slug,
                limit=self.page_size,
            )

        return DirectoryPage(location=location, category=category, items=list(items))

    async def get_page(
        self,
        location_slug: str,
        category_slug: str,
    ) -> DirectoryPage | None:
        """Get a directory page, served from the cache when possible.

        Args:
            location_slug: Location slug.
            category_slug: Category slug.

        Returns:
            Composed page, or None if the page does not exist.
        """
        if self.cache is None:
            return await self.load_page(location_slug, category_slug)

        return await self.cache.get_or_load(
            location_slug,
            category_slug,
            lambda: self.load_page(location_slug, category_slug),
        )

    def invalidate_page(self, location_slug: str, category_slug: str) -> bool:
        """Invalidate one cached page.

        Returns:
            True if a cached entry was removed.
        """
        if self.cache is None:
            return False
        return self.cache.invalidate(location_slug, category_slug)

    def invalidate_category(self, category_slug: str) -> int:
        """Invalidate all cached pages of a category.

        Returns:
            Number of cached entries removed.
        """
        if self.cache is None:
            return 0
        return self.cache.invalidate_category(category_slug)

    async def get_listing(self, slug: str) -> Listing | None:
        """Get a single listing by slug."""
        async with self.session_factory() as session:
            return await CatalogRepository(session).find_listing_by_slug(slug)

    async def _categories(self) -> list[Category]:
        async with self.session_factory() as session:
            return list(await CatalogRepository(session).list_categories())

    async def _top_locations(self) -> list[Location]:
        async with self.session_factory() as session:
            return list(
                await CatalogRepository(session).list_locations(self.home_location_limit)
            )

    async def get_home(self) -> HomeData:
        """Get reference data for the home page.

        Returns:
            Categories, top locations and navigation defaults.
        """
        categories, locations = await join_lookups(
            self._categories(),
            self._top_locations(),
        )

        if locations:
            first = locations[0]
            default_city = {"name": first.name, "slug": first.slug, "state": first.state}
        else:
            default_city = dict(FALLBACK_CITY)

        return HomeData(
            categories=categories,
            top_locations=locations,
            default_city=default_city,
            default_category_slug=categories[0].slug if categories else FALLBACK_CATEGORY_SLUG,
        )


# ============================================================================
# Singletons
# ============================================================================

_page_cache: DirectoryPageCache[DirectoryPage] | None = None
_directory_service: DirectoryService | None = None


def get_page_cache() -> DirectoryPageCache[DirectoryPage]:
    """Get page cache singleton."""
    global _page_cache
    if _page_cache is None:
        _page_cache = DirectoryPageCache(ttl_seconds=settings.cache_ttl_seconds)
    return _page_cache


def get_directory_service() -> DirectoryService:
    """Get directory service singleton."""
    global _directory_service
    if _directory_service is None:
        _directory_service = DirectoryService(
            async_session_factory,
            cache=get_page_cache(),
        )
    return _directory_service
