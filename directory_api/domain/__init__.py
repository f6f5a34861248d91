"""Domain layer - errors raised by the directory services.

Example usage:
    from directory_api.domain import SearchBackendError

    try:
        results = await search_service.search("coffee")
    except SearchBackendError as e:
        logger.error("Search failed", lookup=e.lookup)
"""

from directory_api.domain.exceptions import (
    DirectoryError,
    SearchBackendError,
    SearchTimeoutError,
    SeedError,
)

__all__ = [
    "DirectoryError",
    "SearchBackendError",
    "SearchTimeoutError",
    "SeedError",
]
