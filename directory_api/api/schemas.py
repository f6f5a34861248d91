"""API schemas for the directory API.

Pydantic models for request/response validation and serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Catalog Schemas
# ============================================================================


class LocationSchema(BaseModel):
    """Location representation."""

    id: int
    slug: str
    name: str
    state: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None


class CategorySchema(BaseModel):
    """Category representation."""

    id: int
    slug: str
    name: str
    template_data: Any | None = Field(
        default=None, description="Template document (heroText with {city})"
    )


class ListingSchema(BaseModel):
    """Listing representation."""

    id: int
    name: str
    slug: str
    description: str
    location_id: int
    category_id: int
    location_slug: str
    category_slug: str
    website_url: str | None = None
    rating: int = Field(..., ge=0, le=5)


# ============================================================================
# Directory Schemas
# ============================================================================


class PageMetaSchema(BaseModel):
    """SEO metadata and hero text for a directory page."""

    title: str
    description: str
    hero_text: str


class DirectoryPageResponse(BaseModel):
    """One directory page: location, category and top-rated listings."""

    location: LocationSchema
    category: CategorySchema
    items: list[ListingSchema] = Field(
        default_factory=list, description="Listings by rating, highest first"
    )
    meta: PageMetaSchema


class CategoryRefSchema(BaseModel):
    """Category reference for navigation."""

    id: int
    name: str
    slug: str


class LocationRefSchema(BaseModel):
    """Location reference for navigation."""

    id: int
    name: str
    slug: str
    state: str | None = None


class DefaultCitySchema(BaseModel):
    """Default city for the home page."""

    name: str
    slug: str
    state: str | None = None


class HomeResponse(BaseModel):
    """Home page reference data."""

    all_categories: list[CategoryRefSchema]
    top_locations: list[LocationRefSchema]
    default_city: DefaultCitySchema
    default_category_slug: str


# ============================================================================
# Search Schemas
# ============================================================================


class ListingHitSchema(BaseModel):
    """Listing search hit."""

    name: str
    slug: str
    description: str


class LocationHitSchema(BaseModel):
    """Location search hit."""

    name: str
    slug: str
    state: str | None = None


class CategoryHitSchema(BaseModel):
    """Category search hit."""

    name: str
    slug: str


class SearchResponse(BaseModel):
    """Merged search envelope, one section per entity type."""

    listings: list[ListingHitSchema] = Field(default_factory=list)
    locations: list[LocationHitSchema] = Field(default_factory=list)
    categories: list[CategoryHitSchema] = Field(default_factory=list)


# ============================================================================
# Revalidation Schemas
# ============================================================================


class RevalidateRequest(BaseModel):
    """Request to invalidate cached directory pages.

    With a location slug one page is invalidated; without it every cached
    page of the category is.
    """

    category_slug: str = Field(..., min_length=1)
    location_slug: str | None = Field(default=None, min_length=1)


class RevalidateResponse(BaseModel):
    """Result of a revalidation request."""

    scope: str = Field(..., description="'page' or 'category'")
    category_slug: str
    location_slug: str | None = None
    invalidated: int = Field(..., description="Cached entries removed")
