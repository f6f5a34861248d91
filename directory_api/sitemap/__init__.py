"""Sitemap enumeration for directory pages."""

from directory_api.sitemap.service import (
    SitemapEntry,
    SitemapService,
    directory_urls,
    get_sitemap_service,
    render_sitemap_xml,
)

__all__ = [
    "SitemapEntry",
    "SitemapService",
    "directory_urls",
    "get_sitemap_service",
    "render_sitemap_xml",
]
