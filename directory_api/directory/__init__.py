"""Directory page queries, page metadata and the per-page cache."""

from directory_api.directory.cache import DirectoryPageCache
from directory_api.directory.page_meta import PageMeta, build_page_meta, render_hero_text
from directory_api.directory.service import (
    DirectoryPage,
    DirectoryService,
    HomeData,
    get_directory_service,
    get_page_cache,
)

__all__ = [
    "DirectoryPage",
    "DirectoryPageCache",
    "DirectoryService",
    "HomeData",
    "PageMeta",
    "build_page_meta",
    "get_directory_service",
    "get_page_cache",
    "render_hero_text",
]
