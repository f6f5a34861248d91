"""Sitemap endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from directory_api.sitemap.service import SitemapService, get_sitemap_service, render_sitemap_xml

router = APIRouter(tags=["Sitemap"])


@router.get(
    "/sitemap.xml",
    response_class=Response,
    summary="XML sitemap of every directory page",
)
async def sitemap(
    service: Annotated[SitemapService, Depends(get_sitemap_service)],
) -> Response:
    """Render the sitemap for all location x category pages."""
    entries = await service.entries()
    return Response(content=render_sitemap_xml(entries), media_type="application/xml")
