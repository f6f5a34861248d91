"""Synthetic directory data generator with deterministic seeding.

Builds location, category and listing rows for the seeder. Uses seeded
random for reproducibility; listing rows are produced in fixed-size
batches so a million-row run never holds more than one batch in memory.
"""

import random
import re
import unicodedata
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from directory_api.catalog.models import Listing, RefKey


# ============================================================================
# Constants
# ============================================================================

# Always seeded first, in this order
BASE_CITIES: list[tuple[str, str]] = [
    ("Austin", "TX"),
    ("New York", "NY"),
    ("San Francisco", "CA"),
    ("Chicago", "IL"),
    ("Miami", "FL"),
]

# Pool for the remaining locations (duplicates allowed, slugs stay unique)
CITY_POOL: list[tuple[str, str]] = [
    ("Seattle", "WA"),
    ("Portland", "OR"),
    ("Denver", "CO"),
    ("Boston", "MA"),
    ("Atlanta", "GA"),
    ("Nashville", "TN"),
    ("Phoenix", "AZ"),
    ("Dallas", "TX"),
    ("Houston", "TX"),
    ("San Diego", "CA"),
    ("Los Angeles", "CA"),
    ("Philadelphia", "PA"),
    ("Minneapolis", "MN"),
    ("Detroit", "MI"),
    ("Charlotte", "NC"),
    ("Raleigh", "NC"),
    ("Tampa", "FL"),
    ("Orlando", "FL"),
    ("Salt Lake City", "UT"),
    ("Las Vegas", "NV"),
    ("Kansas City", "MO"),
    ("St. Louis", "MO"),
    ("Columbus", "OH"),
    ("Cleveland", "OH"),
    ("Pittsburgh", "PA"),
    ("Baltimore", "MD"),
    ("Milwaukee", "WI"),
    ("Indianapolis", "IN"),
    ("Sacramento", "CA"),
    ("San Antonio", "TX"),
    ("Albuquerque", "NM"),
    ("Tucson", "AZ"),
    ("Boise", "ID"),
    ("Omaha", "NE"),
    ("Richmond", "VA"),
    ("New Orleans", "LA"),
    ("Louisville", "KY"),
    ("Buffalo", "NY"),
    ("Madison", "WI"),
    ("Spokane", "WA"),
]

SERVICES: list[str] = [
    "Coffee Shop",
    "Gym",
    "Plumber",
    "Dentist",
    "Lawyer",
    "Bakery",
    "Mechanic",
    "Florist",
    "Barber",
    "Yoga Studio",
    "Electrician",
    "HVAC",
    "Landscaper",
    "Painter",
    "Roofer",
]

# Hero templates for some categories; the rest fall back to the default
HERO_TEMPLATES: dict[str, str] = {
    "Coffee Shop": "Best coffee in {city}",
    "Plumber": "Trusted plumbers serving {city}",
    "Dentist": "Top-rated dentists in {city}",
    "Yoga Studio": "Find your flow in {city}",
    "HVAC": "Heating & cooling experts in {city}",
}

SURNAMES = [
    "Anderson", "Baker", "Carter", "Diaz", "Evans", "Foster", "Garcia",
    "Harris", "Jenkins", "Kim", "Lopez", "Morgan", "Nguyen", "Owens",
    "Patel", "Quinn", "Reyes", "Schmidt", "Turner", "Walsh", "Young",
]

COMPANY_SUFFIXES = ["LLC", "Inc", "Group", "and Sons", "& Co", "Partners", "Collective"]

COMPANY_WORDS = [
    "Summit", "Harbor", "Evergreen", "Blue Sky", "Cornerstone", "Pioneer",
    "Golden", "Riverbend", "Maple", "Ironwood", "Lakeside", "Northstar",
]

DESCRIPTION_OPENERS = [
    "Family-owned and operated since {year}.",
    "Serving the neighborhood for over {years} years.",
    "Locally loved with a focus on quality.",
    "A modern team with old-fashioned service.",
]

DESCRIPTION_CLOSERS = [
    "Call today for a free estimate.",
    "Walk-ins welcome, appointments preferred.",
    "Licensed, insured and ready to help.",
    "Ask about our seasonal specials.",
]

TLDS = ["com", "net", "co", "biz"]


# ============================================================================
# Helpers
# ============================================================================


def slugify(value: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL slug.

    Args:
        value: Text to convert.

    Returns:
        ASCII slug (may be empty if the text has no alphanumerics).
    """
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode()
    normalized = normalized.replace("&", " and ")
    slug = re.sub(r"[^a-zA-Z0-9]+", "-", normalized).strip("-")
    return slug.lower()


# ============================================================================
# Generator Configuration
# ============================================================================


@dataclass
class GeneratorConfig:
    """Configuration for directory data generation.

    Attributes:
        seed: Random seed for reproducibility (None for a fresh seed).
        locations: Number of locations.
        categories: Number of categories (at most len(SERVICES)).
        listings: Number of listings.
        batch_size: Listings per bulk insert.
        progress_interval: Rows between progress log lines.
    """

    seed: int | None = 42
    locations: int = 10
    categories: int = 10
    listings: int = 1000
    batch_size: int = 500
    progress_interval: int = 500

    def __post_init__(self) -> None:
        if self.locations < 1 or self.categories < 1:
            raise ValueError("at least one location and one category are required")
        if self.categories > len(SERVICES):
            raise ValueError(f"at most {len(SERVICES)} categories are available")
        if self.listings < 0:
            raise ValueError("listings must not be negative")
        if self.batch_size < 1 or self.progress_interval < 1:
            raise ValueError("batch_size and progress_interval must be positive")

    @classmethod
    def small(cls, seed: int | None = 42) -> "GeneratorConfig":
        """Create config for interactive development (~1k listings).

        Args:
            seed: Random seed.

        Returns:
            Config for a small catalog.
        """
        return cls(
            seed=seed,
            locations=10,
            categories=10,
            listings=1000,
            batch_size=500,
            progress_interval=500,
        )

    @classmethod
    def load_test(cls, seed: int | None = 42) -> "GeneratorConfig":
        """Create config for load testing (1M listings).

        Args:
            seed: Random seed.

        Returns:
            Config for a load-test catalog.
        """
        return cls(
            seed=seed,
            locations=50,
            categories=15,
            listings=1_000_000,
            batch_size=2000,
            progress_interval=50_000,
        )


# ============================================================================
# Catalog Generator
# ============================================================================


class CatalogGenerator:
    """Generates directory rows with deterministic seeding.

    Reference rows are plain column mappings; listing rows are built with
    ``Listing.row_for_pair`` against the captured (id, slug) keys, which is
    where the denormalized slugs are established.

    Example usage:
        generator = CatalogGenerator(GeneratorConfig.small())
        locations = await repo.insert_locations(generator.location_rows())
        categories = await repo.insert_categories(generator.category_rows())
        for batch in generator.listing_batches(locations, categories):
            await repo.insert_listings(batch)
    """

    def __init__(self, config: GeneratorConfig) -> None:
        """Initialize generator with configuration.

        Args:
            config: Generator configuration.
        """
        self.config = config
        self.rng = random.Random(config.seed)

    def _random_token(self, length: int = 3) -> str:
        return "".join(self.rng.choice("abcdefghijklmnopqrstuvwxyz") for _ in range(length))

    def location_rows(self) -> list[dict[str, Any]]:
        """Generate location rows.

        Base cities come first; the rest are drawn from the pool. Each slug
        gets a short random suffix so repeated city names stay unique.

        Returns:
            Location column mappings.
        """
        rows: list[dict[str, Any]] = []
        used: set[str] = set()

        for i in range(self.config.locations):
            city, state = BASE_CITIES[i] if i < len(BASE_CITIES) else self.rng.choice(CITY_POOL)

            slug = slugify(f"{city}-{self._random_token()}")
            while slug in used:
                slug = slugify(f"{city}-{self._random_token()}")
            used.add(slug)

            rows.append({
                "slug": slug,
                "name": city,
                "state": state,
                "meta_title": f"Best Services in {city}",
                "meta_description": f"Find top rated services in {city}",
            })

        return rows

    def category_rows(self) -> list[dict[str, Any]]:
        """Generate category rows.

        Returns:
            Category column mappings.
        """
        rows = []
        for service in SERVICES[: self.config.categories]:
            template = HERO_TEMPLATES.get(service)
            rows.append({
                "slug": slugify(service),
                "name": service,
                "template_data": {"heroText": template} if template else {},
            })
        return rows

    def company_name(self) -> str:
        """Generate a fictional business name."""
        style = self.rng.randint(0, 2)
        if style == 0:
            return f"{self.rng.choice(SURNAMES)} {self.rng.choice(COMPANY_SUFFIXES)}"
        if style == 1:
            return f"{self.rng.choice(SURNAMES)} & {self.rng.choice(SURNAMES)}"
        return f"{self.rng.choice(COMPANY_WORDS)} {self.rng.choice(SURNAMES)} {self.rng.choice(COMPANY_SUFFIXES)}"

    def _description(self) -> str:
        opener = self.rng.choice(DESCRIPTION_OPENERS).format(
            year=self.rng.randint(1950, 2020),
            years=self.rng.randint(2, 40),
        )
        return f"{opener} {self.rng.choice(DESCRIPTION_CLOSERS)}"

    def _listing_row(
        self,
        index: int,
        location: RefKey,
        category: RefKey,
    ) -> dict[str, Any]:
        name = self.company_name()
        base = slugify(name) or "listing"
        return Listing.row_for_pair(
            location,
            category,
            name=name,
            # Running index keeps slugs unique across colliding names.
            slug=f"{base}-{index}",
            description=self._description(),
            rating=self.rng.randint(1, 5),
            website_url=f"https://www.{base}.{self.rng.choice(TLDS)}",
        )

    def listing_batches(
        self,
        locations: Sequence[RefKey],
        categories: Sequence[RefKey],
    ) -> Iterator[list[dict[str, Any]]]:
        """Generate listing rows in batches of ``batch_size``.

        Each listing picks a location and category uniformly at random from
        the captured sets, which stay fixed for the whole run.

        Args:
            locations: Captured location keys.
            categories: Captured category keys.

        Yields:
            Batches of listing column mappings; the last may be short.

        Raises:
            ValueError: If either captured set is empty.
        """
        if not locations or not categories:
            raise ValueError("listings need at least one location and one category")

        batch: list[dict[str, Any]] = []
        for i in range(self.config.listings):
            location = self.rng.choice(locations)
            category = self.rng.choice(categories)
            batch.append(self._listing_row(i, location, category))

            if len(batch) >= self.config.batch_size:
                yield batch
                batch = []

        if batch:
            yield batch

    @property
    def expected_batches(self) -> int:
        """Get expected number of listing batches.

        Returns:
            Batch count for the configured listings.
        """
        return -(-self.config.listings // self.config.batch_size)
