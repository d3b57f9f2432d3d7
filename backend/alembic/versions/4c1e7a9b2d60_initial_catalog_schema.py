"""initial_catalog_schema

Revision ID: 4c1e7a9b2d60
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1e7a9b2d60'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


TAG_CATEGORIES = (
    'style', 'subject', 'body_part', 'color', 'size',
    'technique', 'mood', 'cultural', 'custom',
)
ASSIGNMENT_TYPES = ('manual', 'auto', 'ai_suggested')
TATTOO_STATUSES = ('draft', 'pending_review', 'published', 'archived')
TATTOO_STYLES = (
    'traditional', 'neo_traditional', 'realistic', 'black_and_grey', 'watercolor',
    'geometric', 'minimalist', 'japanese', 'tribal', 'biomechanical', 'portrait',
    'abstract', 'dotwork', 'linework',
)
BODY_PLACEMENTS = (
    'arm', 'leg', 'back', 'chest', 'shoulder', 'hand', 'foot', 'neck', 'face',
    'torso', 'ribs', 'thigh', 'calf', 'forearm',
)
SIZE_CATEGORIES = ('small', 'medium', 'large', 'full_piece')
COLOR_TYPES = ('black_and_grey', 'color', 'single_color')
USER_ROLES = ('client', 'artist', 'admin')


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Create the catalog tables."""
    op.create_table(
        'cities',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('postal_code', sa.String(length=10), nullable=True),
        sa.Column('department_name', sa.String(length=255), nullable=True),
        sa.Column('region_name', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='1'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('role', sa.Enum(*USER_ROLES, name='userrole'), nullable=False, server_default='client'),
        sa.Column('city_id', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='1'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['city_id'], ['cities.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    op.create_table(
        'artists',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=True),
        sa.Column('city_id', sa.Integer(), nullable=True),
        sa.Column('stage_name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='1'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['city_id'], ['cities.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )
    op.create_index('ix_artists_city_id', 'artists', ['city_id'])

    op.create_table(
        'tags',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('slug', sa.String(length=120), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.Enum(*TAG_CATEGORIES, name='tagcategory'), nullable=False),
        sa.Column('parent_tag_id', sa.Integer(), nullable=True),
        sa.Column('level', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('color_code', sa.String(length=7), nullable=True),
        sa.Column('icon_name', sa.String(length=64), nullable=True),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('usage_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('is_trending', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('popularity_score', sa.Float(), nullable=False, server_default='0'),
        sa.Column('requires_approval', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('is_approved', sa.Boolean(), nullable=False, server_default='1'),
        sa.Column('created_by', sa.String(length=255), nullable=True),
        sa.Column('approved_by', sa.String(length=255), nullable=True),
        sa.Column('translations', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['parent_tag_id'], ['tags.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
        sa.UniqueConstraint('slug'),
    )
    op.create_index('ix_tags_category_approved', 'tags', ['category', 'is_approved'])
    op.create_index('ix_tags_usage_approved', 'tags', ['usage_count', 'is_approved'])
    op.create_index('ix_tags_popularity_category', 'tags', ['popularity_score', 'category'])
    op.create_index('ix_tags_trending_category', 'tags', ['is_trending', 'category'])
    op.create_index('ix_tags_parent_tag_id', 'tags', ['parent_tag_id'])

    op.create_table(
        'tattoos',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('artist_id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('original_filename', sa.String(length=512), nullable=True),
        sa.Column('storage_path', sa.String(length=1024), nullable=True),
        sa.Column('image_variants', sa.JSON(), nullable=False, server_default=sa.text("'{}'")),
        sa.Column('dimensions', sa.JSON(), nullable=False, server_default=sa.text("'{}'")),
        sa.Column('file_size', sa.BigInteger(), nullable=True),
        sa.Column('content_type', sa.String(length=50), nullable=False, server_default='image/jpeg'),
        sa.Column('content_hash', sa.String(length=64), nullable=True),
        sa.Column('primary_color', sa.String(length=7), nullable=True),
        sa.Column('tattoo_style', sa.Enum(*TATTOO_STYLES, name='tattoostyle'), nullable=True),
        sa.Column('body_placement', sa.Enum(*BODY_PLACEMENTS, name='bodyplacement'), nullable=True),
        sa.Column('size_category', sa.Enum(*SIZE_CATEGORIES, name='sizecategory'), nullable=True),
        sa.Column('color_type', sa.Enum(*COLOR_TYPES, name='colortype'), nullable=True),
        sa.Column('session_count', sa.Integer(), nullable=True),
        sa.Column('estimated_hours', sa.Float(), nullable=True),
        sa.Column('status', sa.Enum(*TATTOO_STATUSES, name='tattoostatus'), nullable=False, server_default='draft'),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('is_portfolio_highlight', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('view_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('like_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('share_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('engagement_score', sa.Float(), nullable=False, server_default='0'),
        sa.Column('allows_inquiries', sa.Boolean(), nullable=False, server_default='1'),
        sa.Column('shows_pricing', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('price_estimate', sa.Float(), nullable=True),
        sa.Column('price_currency', sa.String(length=3), nullable=False, server_default='EUR'),
        sa.Column('alt_text', sa.JSON(), nullable=True),
        sa.Column('search_keywords', sa.JSON(), nullable=True),
        sa.Column('meta_title', sa.String(length=255), nullable=True),
        sa.Column('meta_description', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['artist_id'], ['artists.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )
    op.create_index('ix_tattoos_artist_status', 'tattoos', ['artist_id', 'status'])
    op.create_index(
        'ix_tattoos_status_featured_published', 'tattoos', ['status', 'is_featured', 'published_at']
    )
    op.create_index('ix_tattoos_style_status', 'tattoos', ['tattoo_style', 'status'])
    op.create_index('ix_tattoos_placement_size', 'tattoos', ['body_placement', 'size_category'])
    op.create_index(
        'ix_tattoos_engagement_published', 'tattoos', ['engagement_score', 'published_at']
    )
    op.create_index('ix_tattoos_content_hash', 'tattoos', ['content_hash'])

    op.create_table(
        'tag_tattoos',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('tag_id', sa.Integer(), nullable=False),
        sa.Column('tattoo_id', sa.String(length=36), nullable=False),
        sa.Column('relevance_score', sa.Float(), nullable=False, server_default='1'),
        sa.Column('is_primary', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('assignment_type', sa.Enum(*ASSIGNMENT_TYPES, name='assignmenttype'), nullable=False, server_default='manual'),
        sa.Column('is_approved', sa.Boolean(), nullable=False, server_default='1'),
        sa.Column('approved_by', sa.String(length=255), nullable=True),
        sa.Column('approval_notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            'relevance_score >= 0 AND relevance_score <= 1',
            name='ck_tag_tattoos_relevance_score',
        ),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tattoo_id'], ['tattoos.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tag_id', 'tattoo_id', name='uq_tag_tattoos_tag_tattoo'),
    )
    op.create_index('ix_tag_tattoos_tattoo_primary', 'tag_tattoos', ['tattoo_id', 'is_primary'])
    op.create_index('ix_tag_tattoos_tag_relevance', 'tag_tattoos', ['tag_id', 'relevance_score'])
    op.create_index(
        'ix_tag_tattoos_approved_relevance', 'tag_tattoos', ['is_approved', 'relevance_score']
    )


def downgrade() -> None:
    """Drop the catalog tables."""
    op.drop_table('tag_tattoos')
    op.drop_table('tattoos')
    op.drop_table('tags')
    op.drop_table('artists')
    op.drop_table('users')
    op.drop_table('cities')
