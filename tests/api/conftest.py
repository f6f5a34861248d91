"""Shared fixtures for API tests.

Services are replaced with mocks through FastAPI dependency overrides, so
these tests never touch a database.
"""

from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from directory_api.catalog.models import Category, Listing, Location
from directory_api.directory.service import DirectoryPage, DirectoryService, get_directory_service
from directory_api.infrastructure.config import settings
from directory_api.main import app
from directory_api.search.service import SearchResults, SearchService, get_search_service
from directory_api.sitemap.service import SitemapService, get_sitemap_service


@pytest.fixture
def austin() -> Location:
    return Location(id=1, slug="austin", name="Austin", state="TX")


@pytest.fixture
def coffee_shop() -> Category:
    return Category(
        id=1,
        slug="coffee-shop",
        name="coffee-shop",
        template_data={"heroText": "Best coffee in {city}"},
    )


@pytest.fixture
def joes(austin: Location, coffee_shop: Category) -> Listing:
    return Listing(
        id=1,
        **Listing.row_for_pair(
            austin,
            coffee_shop,
            name="Joe's",
            slug="joes-0",
            description="Espresso and pastries downtown.",
            rating=5,
        ),
    )


@pytest.fixture
def directory_page(austin: Location, coffee_shop: Category, joes: Listing) -> DirectoryPage:
    return DirectoryPage(location=austin, category=coffee_shop, items=[joes])


@pytest.fixture
def search_service() -> MagicMock:
    """Search service returning an empty envelope by default."""
    service = MagicMock(spec=SearchService)
    service.search = AsyncMock(return_value=SearchResults())
    return service


@pytest.fixture
def directory_service() -> MagicMock:
    """Directory service that finds nothing by default."""
    service = MagicMock(spec=DirectoryService)
    service.get_page = AsyncMock(return_value=None)
    service.get_home = AsyncMock()
    service.get_listing = AsyncMock(return_value=None)
    service.invalidate_page = MagicMock(return_value=False)
    service.invalidate_category = MagicMock(return_value=0)
    return service


@pytest.fixture
def sitemap_service() -> MagicMock:
    service = MagicMock(spec=SitemapService)
    service.entries = AsyncMock(return_value=[])
    return service


@pytest.fixture
def client(
    search_service: MagicMock,
    directory_service: MagicMock,
    sitemap_service: MagicMock,
) -> Generator[TestClient, None, None]:
    """Create test client with mocked services."""
    app.dependency_overrides[get_search_service] = lambda: search_service
    app.dependency_overrides[get_directory_service] = lambda: directory_service
    app.dependency_overrides[get_sitemap_service] = lambda: sitemap_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Get revalidation authentication headers."""
    return {"Authorization": f"Bearer {settings.revalidate_token}"}
