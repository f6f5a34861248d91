"""Catalog seeder.

Clears the catalog and repopulates it in three ordered phases: locations,
then categories, then listings in sequential batches. The whole run is one
transaction; any failure rolls it back and raises ``SeedError``.
"""

import time
from dataclasses import dataclass
from typing import Any

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.catalog.generator import CatalogGenerator, GeneratorConfig
from directory_api.catalog.repository import CatalogRepository
from directory_api.domain.exceptions import SeedError

logger = structlog.get_logger()


@dataclass
class SeedResult:
    """Summary of a completed seeding run.

    Attributes:
        locations: Locations inserted.
        categories: Categories inserted.
        listings: Listings inserted.
        batches: Listing batches flushed.
        elapsed_seconds: Wall-clock duration.
    """

    locations: int
    categories: int
    listings: int
    batches: int
    elapsed_seconds: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "locations": self.locations,
            "categories": self.categories,
            "listings": self.listings,
            "batches": self.batches,
            "elapsed_seconds": round(self.elapsed_seconds, 2),
        }


class CatalogSeeder:
    """Seeds the catalog with synthetic data.

    Example usage:
        async with async_session_factory() as session:
            seeder = CatalogSeeder(session, GeneratorConfig.load_test())
            result = await seeder.run()
    """

    def __init__(
        self,
        session: AsyncSession,
        config: GeneratorConfig | None = None,
        generator: CatalogGenerator | None = None,
    ) -> None:
        """Initialize seeder.

        Args:
            session: Async SQLAlchemy session; the run owns its transaction.
            config: Generator configuration (defaults to small).
            generator: Pre-built generator, overrides ``config``.
        """
        self.session = session
        self.repository = CatalogRepository(session)
        self.generator = generator or CatalogGenerator(config or GeneratorConfig.small())
        self.config = self.generator.config

    async def run(self) -> SeedResult:
        """Run a full clear-then-repopulate.

        Returns:
            Seeding summary.

        Raises:
            SeedError: If any phase fails; nothing is committed.
        """
        started = time.perf_counter()
        phase = "clear"
        batch_number: int | None = None

        logger.info(
            "Seeding catalog",
            locations=self.config.locations,
            categories=self.config.categories,
            listings=self.config.listings,
            batch_size=self.config.batch_size,
        )

        try:
            await self.repository.truncate_all()

            phase = "locations"
            locations = await self.repository.insert_locations(self.generator.location_rows())

            phase = "categories"
            categories = await self.repository.insert_categories(self.generator.category_rows())

            logger.info(
                "Reference data inserted",
                locations=len(locations),
                categories=len(categories),
            )

            phase = "listings"
            inserted = 0
            batch_number = 0
            for batch in self.generator.listing_batches(locations, categories):
                batch_number += 1
                before = inserted
                inserted += await self.repository.insert_listings(batch)
                self._report_progress(before, inserted, started)
            batches = batch_number
            batch_number = None

            phase = "commit"
            await self.session.commit()
        except (SQLAlchemyError, ValueError) as e:
            await self.session.rollback()
            logger.error(
                "Seeding aborted",
                phase=phase,
                batch=batch_number,
                error=str(e),
            )
            raise SeedError(phase, str(e), batch=batch_number) from e

        result = SeedResult(
            locations=len(locations),
            categories=len(categories),
            listings=inserted,
            batches=batches,
            elapsed_seconds=time.perf_counter() - started,
        )
        logger.info("Seeding complete", **result.to_dict())
        return result

    def _report_progress(self, before: int, after: int, started: float) -> None:
        """Log progress each time a progress interval is crossed."""
        interval = self.config.progress_interval
        if after // interval == before // interval:
            return

        total = self.config.listings
        logger.info(
            "Seeding progress",
            rows=after,
            percent=round(after / total * 100, 1) if total else 100.0,
            elapsed_seconds=round(time.perf_counter() - started, 1),
        )
