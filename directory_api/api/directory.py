"""Directory API endpoints.

Serves the composed data behind directory pages, listing details and the
home page reference data.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from directory_api.api.schemas import (
    CategoryRefSchema,
    CategorySchema,
    DefaultCitySchema,
    DirectoryPageResponse,
    ErrorResponse,
    HomeResponse,
    ListingSchema,
    LocationRefSchema,
    LocationSchema,
    PageMetaSchema,
)
from directory_api.catalog.models import Listing
from directory_api.directory.service import (
    DirectoryPage,
    DirectoryService,
    HomeData,
    get_directory_service,
)

router = APIRouter(prefix="/api", tags=["Directory"])


# ============================================================================
# Converters
# ============================================================================


def listing_to_schema(listing: Listing) -> ListingSchema:
    """Convert Listing model to schema."""
    return ListingSchema(**listing.to_dict())


def page_to_response(page: DirectoryPage) -> DirectoryPageResponse:
    """Convert DirectoryPage to response schema."""
    meta = page.meta()
    return DirectoryPageResponse(
        location=LocationSchema(**page.location.to_dict()),
        category=CategorySchema(**page.category.to_dict()),
        items=[listing_to_schema(item) for item in page.items],
        meta=PageMetaSchema(**meta.to_dict()),
    )


def home_to_response(home: HomeData) -> HomeResponse:
    """Convert HomeData to response schema."""
    return HomeResponse(
        all_categories=[
            CategoryRefSchema(id=c.id, name=c.name, slug=c.slug) for c in home.categories
        ],
        top_locations=[
            LocationRefSchema(id=loc.id, name=loc.name, slug=loc.slug, state=loc.state)
            for loc in home.top_locations
        ],
        default_city=DefaultCitySchema(**home.default_city),
        default_category_slug=home.default_category_slug,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/home",
    response_model=HomeResponse,
    summary="Home page data",
    description="All categories, the first locations and navigation defaults.",
)
async def get_home(
    service: Annotated[DirectoryService, Depends(get_directory_service)],
) -> HomeResponse:
    """Get home page reference data."""
    return home_to_response(await service.get_home())


@router.get(
    "/directory/{location_slug}/{category_slug}",
    response_model=DirectoryPageResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get directory page",
    description="Location, category, top-rated listings and page metadata.",
)
async def get_directory_page(
    location_slug: str,
    category_slug: str,
    service: Annotated[DirectoryService, Depends(get_directory_service)],
) -> DirectoryPageResponse:
    """Get one directory page.

    Args:
        location_slug: Location slug.
        category_slug: Category slug.
        service: Directory service.

    Returns:
        Directory page data.

    Raises:
        HTTPException: If the location or category does not exist.
    """
    page = await service.get_page(location_slug, category_slug)

    if page is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error_code": "DIRECTORY_PAGE_NOT_FOUND",
                "message": f"Directory page not found: {location_slug}/{category_slug}",
            },
        )

    return page_to_response(page)


@router.get(
    "/listings/{slug}",
    response_model=ListingSchema,
    responses={404: {"model": ErrorResponse}},
    summary="Get listing",
)
async def get_listing(
    slug: str,
    service: Annotated[DirectoryService, Depends(get_directory_service)],
) -> ListingSchema:
    """Get a listing by slug.

    Raises:
        HTTPException: If the listing does not exist.
    """
    listing = await service.get_listing(slug)

    if listing is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error_code": "LISTING_NOT_FOUND",
                "message": f"Listing not found: {slug}",
            },
        )

    return listing_to_schema(listing)
