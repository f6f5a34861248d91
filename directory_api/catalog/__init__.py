"""Directory catalog store.

Provides the Location/Category/Listing schema, the repository used by the
read path, and the synthetic data generator and seeder for the write path.
"""

from directory_api.catalog.generator import CatalogGenerator, GeneratorConfig, slugify
from directory_api.catalog.models import Category, Listing, Location, RefKey
from directory_api.catalog.repository import CatalogRepository
from directory_api.catalog.seeder import CatalogSeeder, SeedResult

__all__ = [
    # Models
    "Category",
    "Listing",
    "Location",
    "RefKey",
    # Repository
    "CatalogRepository",
    # Generator
    "CatalogGenerator",
    "GeneratorConfig",
    "slugify",
    # Seeder
    "CatalogSeeder",
    "SeedResult",
]
