"""Domain exceptions.

Errors raised by the directory services. Not-found is deliberately absent:
missing locations, categories and pages are returned as ``None`` and turned
into 404 responses by the API layer.
"""

from typing import Any


class DirectoryError(Exception):
    """Base class for all directory exceptions.

    All service errors inherit from this class to allow catching
    directory-specific errors at the API layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize directory error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Search Errors
# ============================================================================


class SearchBackendError(DirectoryError):
    """Raised when any of the parallel search lookups fails.

    The whole search request fails; no partial envelope is returned.
    """

    def __init__(self, lookup: str, reason: str) -> None:
        """Initialize search backend error.

        Args:
            lookup: Name of the failing lookup ("listings", "locations", ...).
            reason: Underlying error description.
        """
        super().__init__(
            f"Search lookup '{lookup}' failed: {reason}",
            details={"lookup": lookup, "reason": reason},
        )
        self.lookup = lookup


class SearchTimeoutError(SearchBackendError):
    """Raised when the search lookups do not complete in time."""

    def __init__(self, timeout_seconds: float) -> None:
        """Initialize search timeout error.

        Args:
            timeout_seconds: Timeout that was exceeded.
        """
        super().__init__("all", f"timed out after {timeout_seconds}s")
        self.timeout_seconds = timeout_seconds


# ============================================================================
# Seeding Errors
# ============================================================================


class SeedError(DirectoryError):
    """Raised when a seeding run aborts.

    The run's transaction is rolled back, so the catalog is left as it was
    before the run started.
    """

    def __init__(self, phase: str, reason: str, batch: int | None = None) -> None:
        """Initialize seed error.

        Args:
            phase: Seeding phase ("clear", "locations", "categories",
                "listings", "commit").
            reason: Underlying error description.
            batch: 1-based listing batch number, if a batch failed.
        """
        where = f"{phase} (batch {batch})" if batch is not None else phase
        super().__init__(
            f"Seeding failed during {where}: {reason}",
            details={"phase": phase, "batch": batch, "reason": reason},
        )
        self.phase = phase
        self.batch = batch
