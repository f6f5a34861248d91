"""Cache revalidation endpoint.

Invalidates cached directory pages after catalog changes, either one page
or every cached page of a category. Guarded by a shared token.
"""

import hmac
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Header, HTTPException, status

from directory_api.api.schemas import ErrorResponse, RevalidateRequest, RevalidateResponse
from directory_api.directory.service import DirectoryService, get_directory_service
from directory_api.infrastructure.config import settings

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["Cache"])


def verify_revalidate_token(
    authorization: Annotated[str | None, Header()] = None,
) -> None:
    """Check the ``Authorization: Bearer <token>`` header.

    Raises:
        HTTPException: 401 if the header is missing or the token is wrong.
    """
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not hmac.compare_digest(
        token.encode(), settings.revalidate_token.encode()
    ):
        logger.warning("Rejected revalidation request")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error_code": "INVALID_REVALIDATE_TOKEN",
                "message": "Missing or invalid revalidation token",
            },
            headers={"WWW-Authenticate": "Bearer"},
        )


@router.post(
    "/revalidate",
    response_model=RevalidateResponse,
    responses={401: {"model": ErrorResponse}},
    dependencies=[Depends(verify_revalidate_token)],
    summary="Invalidate cached directory pages",
)
async def revalidate(
    request: RevalidateRequest,
    service: Annotated[DirectoryService, Depends(get_directory_service)],
) -> RevalidateResponse:
    """Invalidate one page or a whole category.

    Args:
        request: Page or category to invalidate.
        service: Directory service.

    Returns:
        Scope and number of cached entries removed.
    """
    if request.location_slug is not None:
        removed = service.invalidate_page(request.location_slug, request.category_slug)
        return RevalidateResponse(
            scope="page",
            category_slug=request.category_slug,
            location_slug=request.location_slug,
            invalidated=int(removed),
        )

    return RevalidateResponse(
        scope="category",
        category_slug=request.category_slug,
        invalidated=service.invalidate_category(request.category_slug),
    )
