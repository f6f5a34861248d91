"""Tests for the sitemap endpoint."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from directory_api.sitemap.service import SitemapEntry


def test_sitemap_xml(client: TestClient, sitemap_service: MagicMock) -> None:
    """Sitemap is served as XML with one url element per entry."""
    now = datetime(2024, 5, 1, tzinfo=timezone.utc)
    sitemap_service.entries.return_value = [
        SitemapEntry("https://example.com", now, "daily", 1.0),
        SitemapEntry("https://example.com/directory/austin/gym", now, "weekly", 0.8),
    ]

    response = client.get("/sitemap.xml")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    assert response.text.count("<url>") == 2
    assert "<loc>https://example.com/directory/austin/gym</loc>" in response.text
