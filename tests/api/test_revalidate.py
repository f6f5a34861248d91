"""Tests for the revalidation endpoint."""

from unittest.mock import MagicMock

from fastapi.testclient import TestClient


class TestRevalidateAuth:
    """Revalidation requires the shared bearer token."""

    def test_missing_token(self, client: TestClient, directory_service: MagicMock) -> None:
        response = client.post("/api/revalidate", json={"category_slug": "coffee-shop"})

        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_REVALIDATE_TOKEN"
        assert response.headers["WWW-Authenticate"] == "Bearer"
        directory_service.invalidate_category.assert_not_called()

    def test_wrong_token(self, client: TestClient, directory_service: MagicMock) -> None:
        response = client.post(
            "/api/revalidate",
            json={"category_slug": "coffee-shop"},
            headers={"Authorization": "Bearer wrong"},
        )
        assert response.status_code == 401
        directory_service.invalidate_category.assert_not_called()

    def test_wrong_scheme(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        token = auth_headers["Authorization"].split(" ", 1)[1]
        response = client.post(
            "/api/revalidate",
            json={"category_slug": "coffee-shop"},
            headers={"Authorization": f"Basic {token}"},
        )
        assert response.status_code == 401


class TestRevalidate:
    """Tests for POST /api/revalidate."""

    def test_page_scope(
        self,
        client: TestClient,
        directory_service: MagicMock,
        auth_headers: dict[str, str],
    ) -> None:
        directory_service.invalidate_page.return_value = True

        response = client.post(
            "/api/revalidate",
            json={"category_slug": "coffee-shop", "location_slug": "austin"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {
            "scope": "page",
            "category_slug": "coffee-shop",
            "location_slug": "austin",
            "invalidated": 1,
        }
        directory_service.invalidate_page.assert_called_once_with("austin", "coffee-shop")
        directory_service.invalidate_category.assert_not_called()

    def test_category_scope(
        self,
        client: TestClient,
        directory_service: MagicMock,
        auth_headers: dict[str, str],
    ) -> None:
        directory_service.invalidate_category.return_value = 3

        response = client.post(
            "/api/revalidate",
            json={"category_slug": "plumber"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["scope"] == "category"
        assert data["location_slug"] is None
        assert data["invalidated"] == 3
        directory_service.invalidate_category.assert_called_once_with("plumber")

    def test_category_slug_required(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
    ) -> None:
        response = client.post("/api/revalidate", json={"location_slug": "austin"}, headers=auth_headers)
        assert response.status_code == 422
