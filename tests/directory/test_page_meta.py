"""Tests for directory page metadata."""

from datetime import datetime, timezone

import pytest

from directory_api.catalog.models import Category, Location
from directory_api.directory.page_meta import (
    build_page_meta,
    hero_template,
    render_hero_text,
)


@pytest.fixture
def austin() -> Location:
    return Location(id=1, slug="austin", name="Austin", state="TX")


def category(template_data=None, name: str = "Coffee Shop") -> Category:
    return Category(id=1, slug="coffee-shop", name=name, template_data=template_data)


class TestHeroTemplate:
    """Tests for hero template extraction."""

    def test_dict(self) -> None:
        assert hero_template({"heroText": "Top {city}"}) == "Top {city}"

    def test_serialized_json(self) -> None:
        assert hero_template('{"heroText": "Top {city}"}') == "Top {city}"

    @pytest.mark.parametrize(
        "template_data",
        [
            None,
            {},
            "not json",
            "[1, 2]",
            ["heroText"],
            {"heroText": 42},
            {"heroText": "   "},
        ],
    )
    def test_missing_or_malformed(self, template_data) -> None:
        assert hero_template(template_data) is None


class TestRenderHeroText:
    """Tests for hero text rendering."""

    def test_template_substitutes_city(self, austin: Location) -> None:
        coffee = category({"heroText": "Best coffee in {city}"})
        assert render_hero_text(austin, coffee) == "Best coffee in Austin"

    def test_default_when_absent(self, austin: Location) -> None:
        assert render_hero_text(austin, category()) == "Best Coffee Shop in Austin"

    def test_default_when_malformed(self, austin: Location) -> None:
        assert render_hero_text(austin, category("{broken")) == "Best Coffee Shop in Austin"

    def test_every_placeholder_replaced(self, austin: Location) -> None:
        coffee = category({"heroText": "{city} loves coffee. Visit {city}!"})
        assert render_hero_text(austin, coffee) == "Austin loves coffee. Visit Austin!"


class TestBuildPageMeta:
    """Tests for build_page_meta."""

    def test_title_and_description(self, austin: Location) -> None:
        meta = build_page_meta(austin, category(), year=2024)
        assert meta.title == "Best Coffee Shop in Austin | Top Rated in 2024"
        assert meta.description == "Find the highest-rated Coffee Shop in Austin."
        assert meta.hero_text == "Best Coffee Shop in Austin"

    def test_defaults_to_current_year(self, austin: Location) -> None:
        meta = build_page_meta(austin, category())
        assert meta.title.endswith(str(datetime.now(timezone.utc).year))

    def test_to_dict(self, austin: Location) -> None:
        data = build_page_meta(austin, category(), year=2024).to_dict()
        assert set(data) == {"title", "description", "hero_text"}
