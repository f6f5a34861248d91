"""Tests for directory endpoints."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from directory_api.catalog.models import Category, Listing, Location
from directory_api.directory.service import DirectoryPage, HomeData


class TestDirectoryPageEndpoint:
    """Tests for GET /api/directory/{location}/{category}."""

    def test_page(
        self,
        client: TestClient,
        directory_service: MagicMock,
        directory_page: DirectoryPage,
    ) -> None:
        directory_service.get_page.return_value = directory_page

        response = client.get("/api/directory/austin/coffee-shop")

        assert response.status_code == 200
        data = response.json()
        assert data["location"]["name"] == "Austin"
        assert data["category"]["slug"] == "coffee-shop"
        assert [item["name"] for item in data["items"]] == ["Joe's"]
        assert data["items"][0]["location_slug"] == "austin"
        assert data["meta"]["hero_text"] == "Best coffee in Austin"
        year = datetime.now(timezone.utc).year
        assert data["meta"]["title"] == f"Best coffee-shop in Austin | Top Rated in {year}"
        directory_service.get_page.assert_awaited_once_with("austin", "coffee-shop")

    def test_page_without_listings(
        self,
        client: TestClient,
        directory_service: MagicMock,
        austin: Location,
    ) -> None:
        plumber = Category(id=2, slug="plumber", name="Plumber", template_data=None)
        directory_service.get_page.return_value = DirectoryPage(location=austin, category=plumber)

        response = client.get("/api/directory/austin/plumber")

        assert response.status_code == 200
        assert response.json()["items"] == []
        assert response.json()["meta"]["hero_text"] == "Best Plumber in Austin"

    def test_not_found(self, client: TestClient) -> None:
        response = client.get("/api/directory/atlantis/coffee-shop")

        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "DIRECTORY_PAGE_NOT_FOUND"
        assert "request_id" in data


class TestListingEndpoint:
    """Tests for GET /api/listings/{slug}."""

    def test_listing(self, client: TestClient, directory_service: MagicMock, joes: Listing) -> None:
        directory_service.get_listing.return_value = joes

        response = client.get("/api/listings/joes-0")

        assert response.status_code == 200
        assert response.json()["rating"] == 5
        assert response.json()["category_slug"] == "coffee-shop"

    def test_not_found(self, client: TestClient) -> None:
        response = client.get("/api/listings/missing")
        assert response.status_code == 404
        assert response.json()["error_code"] == "LISTING_NOT_FOUND"


class TestHomeEndpoint:
    """Tests for GET /api/home."""

    def test_home(
        self,
        client: TestClient,
        directory_service: MagicMock,
        austin: Location,
        coffee_shop: Category,
    ) -> None:
        directory_service.get_home.return_value = HomeData(
            categories=[coffee_shop],
            top_locations=[austin],
            default_city={"name": "Austin", "slug": "austin", "state": "TX"},
            default_category_slug="coffee-shop",
        )

        response = client.get("/api/home")

        assert response.status_code == 200
        data = response.json()
        assert data["all_categories"] == [{"id": 1, "name": "coffee-shop", "slug": "coffee-shop"}]
        assert data["top_locations"] == [
            {"id": 1, "name": "Austin", "slug": "austin", "state": "TX"}
        ]
        assert data["default_city"]["slug"] == "austin"
        assert data["default_category_slug"] == "coffee-shop"
