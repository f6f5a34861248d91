"""Omni-search aggregator."""

from directory_api.search.service import (
    CategoryHit,
    ListingHit,
    LocationHit,
    SearchResults,
    SearchService,
    get_search_service,
)

__all__ = [
    "CategoryHit",
    "ListingHit",
    "LocationHit",
    "SearchResults",
    "SearchService",
    "get_search_service",
]
