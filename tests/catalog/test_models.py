"""Tests for catalog models."""

import pytest

from directory_api.catalog.models import Category, Listing, Location, RefKey


class TestListingFactory:
    """Listing rows derive their slugs from the referenced entities."""

    def test_row_for_pair_copies_slugs(self) -> None:
        row = Listing.row_for_pair(
            RefKey(id=3, slug="austin"),
            RefKey(id=9, slug="coffee-shop"),
            name="Joe's",
            slug="joes-0",
            description="Coffee.",
            rating=5,
        )
        assert row["location_id"] == 3
        assert row["location_slug"] == "austin"
        assert row["category_id"] == 9
        assert row["category_slug"] == "coffee-shop"
        assert row["website_url"] is None

    def test_for_pair_accepts_models(self) -> None:
        location = Location(id=1, slug="denver", name="Denver")
        category = Category(id=2, slug="plumber", name="Plumber")

        listing = Listing.for_pair(
            location,
            category,
            name="Rocky Pipes",
            slug="rocky-pipes-1",
            description="Repairs.",
            rating=4,
        )

        assert listing.location_slug == location.slug
        assert listing.category_slug == category.slug
        assert listing.location_id == 1
        assert listing.category_id == 2

    def test_for_pair_does_not_accept_slug_overrides(self) -> None:
        with pytest.raises(TypeError):
            Listing.for_pair(
                RefKey(id=1, slug="austin"),
                RefKey(id=2, slug="gym"),
                name="X",
                slug="x-0",
                description="",
                location_slug="somewhere-else",
            )

    @pytest.mark.parametrize("rating", [-1, 6])
    def test_rating_out_of_range(self, rating: int) -> None:
        with pytest.raises(ValueError):
            Listing.row_for_pair(
                RefKey(id=1, slug="austin"),
                RefKey(id=2, slug="gym"),
                name="X",
                slug="x-0",
                description="",
                rating=rating,
            )

    def test_to_dict(self) -> None:
        listing = Listing.for_pair(
            RefKey(id=1, slug="austin"),
            RefKey(id=2, slug="gym"),
            name="Lift",
            slug="lift-0",
            description="Weights.",
            rating=3,
            website_url="https://lift.example",
        )
        data = listing.to_dict()
        assert data["name"] == "Lift"
        assert data["location_slug"] == "austin"
        assert data["website_url"] == "https://lift.example"
