"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from directory_api.api.directory import router as directory_router
from directory_api.api.health import router as health_router
from directory_api.api.revalidate import router as revalidate_router
from directory_api.api.search import router as search_router
from directory_api.api.sitemap import router as sitemap_router

__all__ = [
    "directory_router",
    "health_router",
    "revalidate_router",
    "search_router",
    "sitemap_router",
]
