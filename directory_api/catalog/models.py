"""SQLAlchemy models for the directory catalog.

Defines Location, Category and Listing tables. Listings carry denormalized
copies of their location and category slugs so that a directory page is
served from one composite index; the copies are only ever derived from the
referenced rows (see ``Listing.row_for_pair``).
"""

from dataclasses import dataclass
from typing import Any, Union

from sqlalchemy import (
    JSON,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from directory_api.infrastructure.database import Base

MIN_RATING = 0
MAX_RATING = 5


@dataclass(frozen=True)
class RefKey:
    """Identity and slug of an inserted reference row.

    Attributes:
        id: Generated primary key.
        slug: URL slug.
    """

    id: int
    slug: str


class Location(Base):
    """A served geography (city).

    Attributes:
        id: Serial identifier.
        slug: Unique URL key, immutable once referenced by a listing.
        name: Display name (substituted into hero text).
        state: Optional state/region code.
        meta_title: Optional SEO title override.
        meta_description: Optional SEO description override.
    """

    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    state: Mapped[str | None] = mapped_column(Text, nullable=True)
    meta_title: Mapped[str | None] = mapped_column(Text, nullable=True)
    meta_description: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index(
            "locations_name_trgm_idx",
            "name",
            postgresql_using="gin",
            postgresql_ops={"name": "gin_trgm_ops"},
        ).ddl_if(dialect="postgresql"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Location(id={self.id}, slug={self.slug})>"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "id": self.id,
            "slug": self.slug,
            "name": self.name,
            "state": self.state,
            "meta_title": self.meta_title,
            "meta_description": self.meta_description,
        }


class Category(Base):
    """A served service type.

    Attributes:
        id: Serial identifier.
        slug: Unique URL key.
        name: Display name.
        template_data: Optional JSON document; ``heroText`` holds a hero
            template with a ``{city}`` placeholder.
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    template_data: Mapped[Any | None] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=True,
    )

    __table_args__ = (
        Index(
            "categories_name_trgm_idx",
            "name",
            postgresql_using="gin",
            postgresql_ops={"name": "gin_trgm_ops"},
        ).ddl_if(dialect="postgresql"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Category(id={self.id}, slug={self.slug})>"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "id": self.id,
            "slug": self.slug,
            "name": self.name,
            "template_data": self.template_data,
        }


class Listing(Base):
    """A business record listed on one directory page.

    Attributes:
        id: Serial identifier.
        name: Business name.
        slug: Unique URL key.
        description: Free-text description.
        location_id: Referenced location (deletion does not cascade).
        category_id: Referenced category (deletion cascades to listings).
        location_slug: Copy of the referenced location's slug.
        category_slug: Copy of the referenced category's slug.
        website_url: Optional website.
        rating: Integer rating, 0-5.
    """

    __tablename__ = "listings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    location_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("locations.id"),
        nullable=False,
    )
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
    )

    location_slug: Mapped[str] = mapped_column(Text, nullable=False)
    category_slug: Mapped[str] = mapped_column(Text, nullable=False)

    website_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint(
            f"rating >= {MIN_RATING} AND rating <= {MAX_RATING}",
            name="ck_listings_rating_range",
        ),
        # Directory page lookup + sort order in one traversal.
        Index("pseo_lookup_idx", "location_slug", "category_slug", "rating"),
        Index("category_lookup_idx", "category_slug"),
        Index("admin_fk_idx", "location_id", "category_id"),
        Index(
            "listings_name_trgm_idx",
            "name",
            postgresql_using="gin",
            postgresql_ops={"name": "gin_trgm_ops"},
        ).ddl_if(dialect="postgresql"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Listing(id={self.id}, slug={self.slug}, rating={self.rating})>"

    @staticmethod
    def row_for_pair(
        location: Union["Location", RefKey],
        category: Union["Category", RefKey],
        *,
        name: str,
        slug: str,
        description: str,
        rating: int = 0,
        website_url: str | None = None,
    ) -> dict[str, Any]:
        """Build an insertable listing row for a location/category pair.

        This is the single place listing rows are assembled: the foreign
        keys and the denormalized slugs are both read from the referenced
        entities, never supplied separately.

        Args:
            location: Referenced location (model or captured key).
            category: Referenced category (model or captured key).
            name: Business name.
            slug: Unique listing slug.
            description: Description text.
            rating: Rating in 0-5.
            website_url: Optional website URL.

        Returns:
            Column mapping suitable for a bulk insert.

        Raises:
            ValueError: If the rating is out of range.
        """
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValueError(
                f"rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}"
            )
        return {
            "name": name,
            "slug": slug,
            "description": description,
            "location_id": location.id,
            "category_id": category.id,
            "location_slug": location.slug,
            "category_slug": category.slug,
            "website_url": website_url,
            "rating": rating,
        }

    @classmethod
    def for_pair(
        cls,
        location: Union["Location", RefKey],
        category: Union["Category", RefKey],
        **fields: Any,
    ) -> "Listing":
        """Create a Listing entity for a location/category pair.

        Args:
            location: Referenced location.
            category: Referenced category.
            **fields: Remaining listing fields (see ``row_for_pair``).

        Returns:
            New, unsaved Listing.
        """
        return cls(**cls.row_for_pair(location, category, **fields))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "location_id": self.location_id,
            "category_id": self.category_id,
            "location_slug": self.location_slug,
            "category_slug": self.category_slug,
            "website_url": self.website_url,
            "rating": self.rating,
        }


# Full-text search over name + description (PostgreSQL only).
Index(
    "search_idx",
    func.to_tsvector("english", Listing.name + " " + Listing.description),
    postgresql_using="gin",
).ddl_if(dialect="postgresql")
