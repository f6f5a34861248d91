"""Create locations, categories and listings tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create directory tables and their lookup/search indexes."""
    op.execute('CREATE EXTENSION IF NOT EXISTS pg_trgm')

    # Locations table
    op.create_table(
        'locations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('slug', sa.Text(), nullable=False, unique=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('state', sa.Text(), nullable=True),
        sa.Column('meta_title', sa.Text(), nullable=True),
        sa.Column('meta_description', sa.Text(), nullable=True),
    )
    op.create_index(
        'locations_name_trgm_idx',
        'locations',
        ['name'],
        postgresql_using='gin',
        postgresql_ops={'name': 'gin_trgm_ops'},
    )

    # Categories table
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('slug', sa.Text(), nullable=False, unique=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('template_data', postgresql.JSONB(), nullable=True),
    )
    op.create_index(
        'categories_name_trgm_idx',
        'categories',
        ['name'],
        postgresql_using='gin',
        postgresql_ops={'name': 'gin_trgm_ops'},
    )

    # Listings table
    op.create_table(
        'listings',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('slug', sa.Text(), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('location_id', sa.Integer(),
                  sa.ForeignKey('locations.id'), nullable=False),
        sa.Column('category_id', sa.Integer(),
                  sa.ForeignKey('categories.id', ondelete='CASCADE'), nullable=False),
        sa.Column('location_slug', sa.Text(), nullable=False),
        sa.Column('category_slug', sa.Text(), nullable=False),
        sa.Column('website_url', sa.Text(), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=False, server_default='0'),
        sa.CheckConstraint('rating >= 0 AND rating <= 5', name='ck_listings_rating_range'),
    )

    # Directory page lookup: filter on the slug pair, sort by rating
    op.create_index(
        'pseo_lookup_idx',
        'listings',
        ['location_slug', 'category_slug', 'rating'],
    )
    op.create_index('category_lookup_idx', 'listings', ['category_slug'])
    op.create_index('admin_fk_idx', 'listings', ['location_id', 'category_id'])
    op.create_index(
        'listings_name_trgm_idx',
        'listings',
        ['name'],
        postgresql_using='gin',
        postgresql_ops={'name': 'gin_trgm_ops'},
    )
    op.execute(
        "CREATE INDEX search_idx ON listings "
        "USING gin (to_tsvector('english', name || ' ' || description))"
    )


def downgrade() -> None:
    """Drop directory tables."""
    op.drop_index('search_idx', table_name='listings')
    op.drop_table('listings')
    op.drop_table('categories')
    op.drop_table('locations')
