"""Search API endpoint.

Backs the omni-search box with one GET endpoint.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from directory_api.api.schemas import (
    CategoryHitSchema,
    ErrorResponse,
    ListingHitSchema,
    LocationHitSchema,
    SearchResponse,
)
from directory_api.domain.exceptions import SearchBackendError, SearchTimeoutError
from directory_api.search.service import SearchResults, SearchService, get_search_service

router = APIRouter(prefix="/api", tags=["Search"])


def results_to_response(results: SearchResults) -> SearchResponse:
    """Convert search results to response schema."""
    return SearchResponse(
        listings=[
            ListingHitSchema(name=h.name, slug=h.slug, description=h.description)
            for h in results.listings
        ],
        locations=[
            LocationHitSchema(name=h.name, slug=h.slug, state=h.state)
            for h in results.locations
        ],
        categories=[CategoryHitSchema(name=h.name, slug=h.slug) for h in results.categories],
    )


@router.get(
    "/search",
    response_model=SearchResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Search listings, locations and categories",
    description=(
        "Case-insensitive substring search. Queries shorter than two "
        "characters return an empty envelope."
    ),
)
async def search(
    service: Annotated[SearchService, Depends(get_search_service)],
    q: Annotated[str | None, Query(description="Free-text query")] = None,
) -> SearchResponse:
    """Search the directory.

    Args:
        service: Search service.
        q: Free-text query.

    Returns:
        Envelope with listings, locations and categories sections.

    Raises:
        HTTPException: 500 if any backend lookup fails.
    """
    try:
        results = await service.search(q)
    except SearchTimeoutError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error_code": "SEARCH_TIMEOUT", "message": e.message},
        ) from e
    except SearchBackendError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error_code": "SEARCH_FAILED", "message": "Search is temporarily unavailable"},
        ) from e

    return results_to_response(results)
