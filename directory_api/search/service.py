"""Omni-search across listings, locations and categories.

Fans out three bounded substring lookups in parallel and joins them into
one envelope with a section per entity type. If any lookup fails the whole
search fails: callers never receive a partial envelope.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from directory_api.catalog.repository import CatalogRepository
from directory_api.domain.exceptions import SearchBackendError, SearchTimeoutError
from directory_api.infrastructure.config import settings
from directory_api.infrastructure.database import async_session_factory

logger = structlog.get_logger()

T = TypeVar("T")


# ============================================================================
# Result Types
# ============================================================================


@dataclass(frozen=True)
class ListingHit:
    """Listing search result."""

    name: str
    slug: str
    description: str


@dataclass(frozen=True)
class LocationHit:
    """Location search result."""

    name: str
    slug: str
    state: str | None


@dataclass(frozen=True)
class CategoryHit:
    """Category search result."""

    name: str
    slug: str


@dataclass
class SearchResults:
    """Merged search envelope.

    Each section keeps the order returned by its own lookup; there is no
    cross-section ranking and no overall cap beyond the per-section limits.
    """

    listings: list[ListingHit] = field(default_factory=list)
    locations: list[LocationHit] = field(default_factory=list)
    categories: list[CategoryHit] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Check whether every section is empty."""
        return not (self.listings or self.locations or self.categories)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """Convert to dictionary."""
        return {
            "listings": [
                {"name": h.name, "slug": h.slug, "description": h.description}
                for h in self.listings
            ],
            "locations": [
                {"name": h.name, "slug": h.slug, "state": h.state}
                for h in self.locations
            ],
            "categories": [
                {"name": h.name, "slug": h.slug}
                for h in self.categories
            ],
        }


# ============================================================================
# Search Service
# ============================================================================


class SearchService:
    """Service for the omni-search box.

    Example usage:
        service = SearchService(async_session_factory)
        results = await service.search("coffee")
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        min_query_length: int | None = None,
        listing_limit: int | None = None,
        location_limit: int | None = None,
        category_limit: int | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize service.

        Args:
            session_factory: Factory for read sessions (one per lookup).
            min_query_length: Queries shorter than this return nothing.
            listing_limit: Cap for the listings section.
            location_limit: Cap for the locations section.
            category_limit: Cap for the categories section.
            timeout_seconds: Bound on the join of all lookups.
        """
        self.session_factory = session_factory
        self.min_query_length = (
            min_query_length if min_query_length is not None else settings.search_min_query_length
        )
        self.listing_limit = (
            listing_limit if listing_limit is not None else settings.search_listing_limit
        )
        self.location_limit = (
            location_limit if location_limit is not None else settings.search_location_limit
        )
        self.category_limit = (
            category_limit if category_limit is not None else settings.search_category_limit
        )
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.search_timeout_seconds
        )

    async def _lookup(
        self,
        name: str,
        query: Callable[[CatalogRepository], Awaitable[Sequence[T]]],
    ) -> Sequence[T]:
        """Run one lookup on its own session.

        Raises:
            SearchBackendError: If the store fails.
        """
        try:
            async with self.session_factory() as session:
                return await query(CatalogRepository(session))
        except (SQLAlchemyError, OSError) as e:
            raise SearchBackendError(name, str(e)) from e

    async def search(self, query: str | None) -> SearchResults:
        """Search listings, locations and categories.

        Args:
            query: Free-text query.

        Returns:
            Merged envelope; empty for missing or too-short queries.

        Raises:
            SearchBackendError: If any lookup fails.
            SearchTimeoutError: If the lookups do not finish in time.
        """
        term = (query or "").strip()
        if len(term) < self.min_query_length:
            return SearchResults()

        tasks = [
            asyncio.ensure_future(
                self._lookup("listings", lambda r: r.search_listings(term, self.listing_limit))
            ),
            asyncio.ensure_future(
                self._lookup("locations", lambda r: r.search_locations(term, self.location_limit))
            ),
            asyncio.ensure_future(
                self._lookup("categories", lambda r: r.search_categories(term, self.category_limit))
            ),
        ]

        try:
            listings, locations, categories = await asyncio.wait_for(
                asyncio.gather(*tasks),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.warning("Search timed out", query=term, timeout=self.timeout_seconds)
            raise SearchTimeoutError(self.timeout_seconds) from e
        except SearchBackendError as e:
            logger.error("Search lookup failed", query=term, lookup=e.lookup, error=e.message)
            raise
        finally:
            # Fail-fast: abandon lookups still running after the first error.
            for task in tasks:
                if not task.done():
                    task.cancel()

        results = SearchResults(
            listings=[
                ListingHit(name=row.name, slug=row.slug, description=row.description)
                for row in listings
            ],
            locations=[
                LocationHit(name=row.name, slug=row.slug, state=row.state)
                for row in locations
            ],
            categories=[CategoryHit(name=c.name, slug=c.slug) for c in categories],
        )

        logger.debug(
            "Search complete",
            query=term,
            listings=len(results.listings),
            locations=len(results.locations),
            categories=len(results.categories),
        )
        return results


_search_service: SearchService | None = None


def get_search_service() -> SearchService:
    """Get search service singleton."""
    global _search_service
    if _search_service is None:
        _search_service = SearchService(async_session_factory)
    return _search_service
