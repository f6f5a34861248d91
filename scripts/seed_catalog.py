#!/usr/bin/env python3
"""Seed directory catalog script.

Clears the catalog and repopulates it with synthetic locations, categories
and listings. Destructive: this is a seed, not a migration.

Usage:
    python scripts/seed_catalog.py --mode small
    python scripts/seed_catalog.py --mode load-test
    python scripts/seed_catalog.py --mode small --listings 5000 --seed 7
"""

import argparse
import asyncio
import sys
from dataclasses import replace
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import structlog

from directory_api.catalog.generator import GeneratorConfig
from directory_api.catalog.seeder import CatalogSeeder, SeedResult
from directory_api.domain.exceptions import SeedError
from directory_api.infrastructure.config import settings
from directory_api.infrastructure.database import async_session_factory, create_tables, engine
from directory_api.infrastructure.logging_config import configure_logging

logger = structlog.get_logger()


def build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build generator config from CLI arguments.

    Args:
        args: Parsed arguments.

    Returns:
        Generator configuration.
    """
    if args.mode == "load-test":
        config = GeneratorConfig.load_test(seed=args.seed)
    else:
        config = GeneratorConfig.small(seed=args.seed)

    overrides = {}
    if args.listings is not None:
        overrides["listings"] = args.listings
    if args.batch_size is not None:
        overrides["batch_size"] = args.batch_size
    return replace(config, **overrides)


async def seed(config: GeneratorConfig) -> SeedResult:
    """Create tables and run the seeder.

    Args:
        config: Generator configuration.

    Returns:
        Seeding result.
    """
    await create_tables()
    try:
        async with async_session_factory() as session:
            return await CatalogSeeder(session, config).run()
    finally:
        await engine.dispose()


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the directory catalog with synthetic data",
    )
    parser.add_argument(
        "--mode",
        choices=["small", "load-test"],
        default="small",
        help="Catalog size: small (~1k listings) or load-test (1M listings)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--listings",
        type=int,
        default=None,
        help="Override the number of listings",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Override the listing batch size",
    )

    args = parser.parse_args()
    configure_logging(settings.log_level, json=False)

    config = build_config(args)

    print("=" * 60)
    print("Directory Catalog Seeder")
    print("=" * 60)
    print(f"Mode: {args.mode}")
    print(f"Locations: {config.locations}  Categories: {config.categories}")
    print(f"Listings: {config.listings:,}  Batch size: {config.batch_size:,}")
    print()

    try:
        result = asyncio.run(seed(config))
    except SeedError as e:
        logger.error("Seed failed", **e.details)
        print(f"  ✗ Error: {e.message}")
        print("  The catalog was left unchanged; re-run to try again.")
        return 1

    print(f"  ✓ Locations: {result.locations}")
    print(f"  ✓ Categories: {result.categories}")
    print(f"  ✓ Listings: {result.listings:,} in {result.batches} batches")
    print(f"  ✓ Elapsed: {result.elapsed_seconds:.2f}s")
    print()
    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
