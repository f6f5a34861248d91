"""Sitemap enumeration.

One entry per location x category pair plus the home page. The work is
bounded by reference-data cardinality, never by the number of listings.
"""

import asyncio
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime, timezone
from xml.sax.saxutils import escape

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from directory_api.catalog.repository import CatalogRepository
from directory_api.infrastructure.config import settings
from directory_api.infrastructure.database import async_session_factory

logger = structlog.get_logger()

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


@dataclass(frozen=True)
class SitemapEntry:
    """A single sitemap URL.

    Attributes:
        url: Absolute URL.
        last_modified: Last modification time.
        change_frequency: Sitemap changefreq value.
        priority: Relative priority, 0.0-1.0.
    """

    url: str
    last_modified: datetime
    change_frequency: str
    priority: float


def directory_urls(
    base_url: str,
    location_slugs: Iterable[str],
    category_slugs: Iterable[str],
) -> Iterator[str]:
    """Enumerate directory page URLs for the location x category product.

    Args:
        base_url: Public site URL.
        location_slugs: All location slugs.
        category_slugs: All category slugs.

    Yields:
        One URL per combination, grouped by location.
    """
    base = base_url.rstrip("/")
    categories = list(category_slugs)
    for location in location_slugs:
        for category in categories:
            yield f"{base}/directory/{location}/{category}"


class SitemapService:
    """Builds sitemap entries for all directory pages.

    Example usage:
        service = SitemapService(async_session_factory)
        xml = render_sitemap_xml(await service.entries())
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        base_url: str | None = None,
    ) -> None:
        """Initialize service.

        Args:
            session_factory: Factory for read sessions.
            base_url: Public site URL.
        """
        self.session_factory = session_factory
        self.base_url = (base_url or settings.site_url).rstrip("/")

    async def _location_slugs(self) -> list[str]:
        async with self.session_factory() as session:
            return await CatalogRepository(session).list_location_slugs()

    async def _category_slugs(self) -> list[str]:
        async with self.session_factory() as session:
            return await CatalogRepository(session).list_category_slugs()

    async def entries(self, now: datetime | None = None) -> list[SitemapEntry]:
        """Build all sitemap entries.

        Args:
            now: Timestamp for lastmod (defaults to current UTC time).

        Returns:
            Home entry followed by one entry per directory page.
        """
        now = now or datetime.now(timezone.utc)
        location_slugs, category_slugs = await asyncio.gather(
            self._location_slugs(),
            self._category_slugs(),
        )

        entries = [
            SitemapEntry(
                url=self.base_url,
                last_modified=now,
                change_frequency="daily",
                priority=1.0,
            )
        ]
        entries.extend(
            SitemapEntry(
                url=url,
                last_modified=now,
                change_frequency="weekly",
                priority=0.8,
            )
            for url in directory_urls(self.base_url, location_slugs, category_slugs)
        )

        logger.info(
            "Sitemap generated",
            url_count=len(entries),
            locations=len(location_slugs),
            categories=len(category_slugs),
        )
        return entries


def render_sitemap_xml(entries: Iterable[SitemapEntry]) -> str:
    """Render entries as a sitemap urlset document.

    Args:
        entries: Sitemap entries.

    Returns:
        XML document.
    """
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<urlset xmlns="{SITEMAP_NS}">',
    ]
    for entry in entries:
        lines.append(
            "<url>"
            f"<loc>{escape(entry.url)}</loc>"
            f"<lastmod>{entry.last_modified.isoformat()}</lastmod>"
            f"<changefreq>{entry.change_frequency}</changefreq>"
            f"<priority>{entry.priority:.1f}</priority>"
            "</url>"
        )
    lines.append("</urlset>")
    return "\n".join(lines)


def get_sitemap_service() -> SitemapService:
    """Get sitemap service."""
    return SitemapService(async_session_factory)
