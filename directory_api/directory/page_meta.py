"""Directory page metadata.

Derives the title, description and hero text of a directory page from its
location and category. Pure and total: bad template data on a category
falls back to the default hero text instead of raising.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from directory_api.catalog.models import Category, Location

CITY_PLACEHOLDER = "{city}"


@dataclass(frozen=True)
class PageMeta:
    """SEO metadata and hero text for a directory page.

    Attributes:
        title: Document title.
        description: Meta description.
        hero_text: Hero heading with the city substituted.
    """

    title: str
    description: str
    hero_text: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary."""
        return {
            "title": self.title,
            "description": self.description,
            "hero_text": self.hero_text,
        }


def default_hero_template(category: Category) -> str:
    """Get the generated hero template for a category."""
    return f"Best {category.name} in {CITY_PLACEHOLDER}"


def hero_template(template_data: Any) -> str | None:
    """Extract the hero template from stored category template data.

    Accepts the decoded JSON document or its serialized form.

    Args:
        template_data: Value of ``Category.template_data``.

    Returns:
        Non-empty hero template, or None if absent or malformed.
    """
    if isinstance(template_data, (str, bytes)):
        try:
            template_data = json.loads(template_data)
        except (TypeError, ValueError):
            return None

    if not isinstance(template_data, dict):
        return None

    hero = template_data.get("heroText")
    if isinstance(hero, str) and hero.strip():
        return hero
    return None


def render_hero_text(location: Location, category: Category) -> str:
    """Render the hero text for a location/category pair.

    Args:
        location: Page location.
        category: Page category.

    Returns:
        Hero text with every ``{city}`` replaced by the location name.
    """
    template = hero_template(category.template_data) or default_hero_template(category)
    return template.replace(CITY_PLACEHOLDER, location.name)


def build_page_meta(
    location: Location,
    category: Category,
    year: int | None = None,
) -> PageMeta:
    """Build page metadata for a directory page.

    Args:
        location: Page location.
        category: Page category.
        year: Year shown in the title (defaults to the current UTC year).

    Returns:
        Page metadata.
    """
    year = year or datetime.now(timezone.utc).year
    return PageMeta(
        title=f"Best {category.name} in {location.name} | Top Rated in {year}",
        description=f"Find the highest-rated {category.name} in {location.name}.",
        hero_text=render_hero_text(location, category),
    )
