"""Catalog repository for database operations.

Read lookups for directory pages and search, plus the bulk write
operations used by the seeder. Every read is bounded.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import delete, func, insert, or_, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.catalog.models import Category, Listing, Location, RefKey

LIKE_ESCAPE = "\\"


def contains_pattern(term: str) -> str:
    """Build a ``%term%`` pattern matching the term literally.

    Args:
        term: User-supplied search term.

    Returns:
        LIKE pattern with wildcard characters in the term escaped.
    """
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


class CatalogRepository:
    """Repository for Location, Category and Listing database operations.

    Example usage:
        async with async_session_factory() as session:
            repo = CatalogRepository(session)
            location = await repo.find_location_by_slug("austin")
            listings = await repo.list_listings("austin", "coffee-shop", limit=50)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    # ------------------------------------------------------------------
    # Reference lookups
    # ------------------------------------------------------------------

    async def find_location_by_slug(self, slug: str) -> Location | None:
        """Get location by slug.

        Args:
            slug: Location slug.

        Returns:
            Location if found, None otherwise.
        """
        result = await self.session.execute(
            select(Location).where(Location.slug == slug)
        )
        return result.scalar_one_or_none()

    async def find_category_by_slug(self, slug: str) -> Category | None:
        """Get category by slug.

        Args:
            slug: Category slug.

        Returns:
            Category if found, None otherwise.
        """
        result = await self.session.execute(
            select(Category).where(Category.slug == slug)
        )
        return result.scalar_one_or_none()

    async def find_listing_by_slug(self, slug: str) -> Listing | None:
        """Get listing by slug.

        Args:
            slug: Listing slug.

        Returns:
            Listing if found, None otherwise.
        """
        result = await self.session.execute(
            select(Listing).where(Listing.slug == slug)
        )
        return result.scalar_one_or_none()

    async def list_categories(self, limit: int = 1000) -> Sequence[Category]:
        """List categories in insertion order."""
        result = await self.session.execute(
            select(Category).order_by(Category.id).limit(limit)
        )
        return result.scalars().all()

    async def list_locations(self, limit: int = 12) -> Sequence[Location]:
        """List locations in insertion order."""
        result = await self.session.execute(
            select(Location).order_by(Location.id).limit(limit)
        )
        return result.scalars().all()

    async def list_location_slugs(self) -> list[str]:
        """Get all location slugs.

        Bounded by reference-data cardinality, not listing count.

        Returns:
            Location slugs ordered by id.
        """
        result = await self.session.execute(
            select(Location.slug).order_by(Location.id)
        )
        return list(result.scalars().all())

    async def list_category_slugs(self) -> list[str]:
        """Get all category slugs.

        Returns:
            Category slugs ordered by id.
        """
        result = await self.session.execute(
            select(Category.slug).order_by(Category.id)
        )
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Directory page listings
    # ------------------------------------------------------------------

    async def list_listings(
        self,
        location_slug: str,
        category_slug: str,
        limit: int = 50,
    ) -> Sequence[Listing]:
        """Get the top-rated listings for a location/category pair.

        Served by ``pseo_lookup_idx`` (location_slug, category_slug, rating).

        Args:
            location_slug: Location slug.
            category_slug: Category slug.
            limit: Maximum results.

        Returns:
            Listings ordered by rating descending, then id.
        """
        query = (
            select(Listing)
            .where(
                Listing.location_slug == location_slug,
                Listing.category_slug == category_slug,
            )
            .order_by(Listing.rating.desc(), Listing.id.asc())
            .limit(limit)
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def search_listings(self, term: str, limit: int = 5) -> Sequence[Listing]:
        """Case-insensitive substring search over listings.

        Matches name, description or category slug.

        Args:
            term: Search term.
            limit: Maximum results.

        Returns:
            Matching listings.
        """
        pattern = contains_pattern(term)
        query = (
            select(Listing)
            .where(
                or_(
                    Listing.name.ilike(pattern, escape=LIKE_ESCAPE),
                    Listing.description.ilike(pattern, escape=LIKE_ESCAPE),
                    Listing.category_slug.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
            .limit(limit)
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def search_locations(self, term: str, limit: int = 3) -> Sequence[Location]:
        """Case-insensitive substring search over location names."""
        query = (
            select(Location)
            .where(Location.name.ilike(contains_pattern(term), escape=LIKE_ESCAPE))
            .limit(limit)
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def search_categories(self, term: str, limit: int = 3) -> Sequence[Category]:
        """Case-insensitive substring search over category names."""
        query = (
            select(Category)
            .where(Category.name.ilike(contains_pattern(term), escape=LIKE_ESCAPE))
            .limit(limit)
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    # ------------------------------------------------------------------
    # Counts
    # ------------------------------------------------------------------

    async def count_locations(self) -> int:
        """Count locations."""
        result = await self.session.execute(select(func.count(Location.id)))
        return result.scalar_one()

    async def count_categories(self) -> int:
        """Count categories."""
        result = await self.session.execute(select(func.count(Category.id)))
        return result.scalar_one()

    async def count_listings(self) -> int:
        """Count listings."""
        result = await self.session.execute(select(func.count(Listing.id)))
        return result.scalar_one()

    # ------------------------------------------------------------------
    # Bulk writes (seeder)
    # ------------------------------------------------------------------

    async def truncate_all(self) -> None:
        """Delete every listing, category and location.

        PostgreSQL truncates and restarts identities; other dialects delete
        children before parents.
        """
        if self.session.get_bind().dialect.name == "postgresql":
            await self.session.execute(
                text(
                    "TRUNCATE TABLE listings, locations, categories "
                    "RESTART IDENTITY CASCADE"
                )
            )
            return

        await self.session.execute(delete(Listing))
        await self.session.execute(delete(Category))
        await self.session.execute(delete(Location))

    async def insert_locations(self, rows: list[dict[str, Any]]) -> list[RefKey]:
        """Insert locations in one statement.

        Args:
            rows: Location column mappings.

        Returns:
            Generated (id, slug) keys in insertion order.
        """
        if not rows:
            return []
        result = await self.session.execute(
            insert(Location).returning(Location.id, Location.slug, sort_by_parameter_order=True),
            rows,
        )
        return [RefKey(id=row.id, slug=row.slug) for row in result.all()]

    async def insert_categories(self, rows: list[dict[str, Any]]) -> list[RefKey]:
        """Insert categories in one statement.

        Args:
            rows: Category column mappings.

        Returns:
            Generated (id, slug) keys in insertion order.
        """
        if not rows:
            return []
        result = await self.session.execute(
            insert(Category).returning(Category.id, Category.slug, sort_by_parameter_order=True),
            rows,
        )
        return [RefKey(id=row.id, slug=row.slug) for row in result.all()]

    async def insert_listings(self, rows: list[dict[str, Any]]) -> int:
        """Insert one batch of listing rows.

        Rows must come from ``Listing.row_for_pair``.

        Args:
            rows: Listing column mappings.

        Returns:
            Number of rows inserted.
        """
        if not rows:
            return 0
        await self.session.execute(insert(Listing), rows)
        return len(rows)

    async def delete_category(self, slug: str) -> int:
        """Delete a category; its listings are removed by the FK cascade.

        Args:
            slug: Category slug.

        Returns:
            Number of categories deleted.
        """
        result = await self.session.execute(
            delete(Category).where(Category.slug == slug)
        )
        return result.rowcount

    async def delete_location(self, slug: str) -> int:
        """Delete a location.

        Listings are not cascaded, so the database rejects deleting a
        location that is still referenced.

        Args:
            slug: Location slug.

        Returns:
            Number of locations deleted.
        """
        result = await self.session.execute(
            delete(Location).where(Location.slug == slug)
        )
        return result.rowcount
