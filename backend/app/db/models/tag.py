"""Tag model for the tattoo taxonomy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Boolean, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.config import settings
from app.db.base import Base, TimestampMixin
from app.db.models.enums import TagCategory, value_enum

if TYPE_CHECKING:
    from app.db.models.tag_assignment import TagAssignment
    from app.db.models.tattoo import Tattoo

# Thresholds for the instance-level popularity check
POPULAR_MIN_SCORE = 7.0
POPULAR_MIN_USAGE = 50


class Tag(TimestampMixin, Base):
    """A taxonomy label attachable to tattoos.

    Tags form a tree through ``parent_tag_id``; ``level`` records the depth
    chosen at creation time. Names can be translated per locale through the
    ``translations`` map, e.g. ``{"fr": {"name": "Dragon", "description": ...}}``.
    """

    __tablename__ = "tags"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Identification
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Categorization
    category: Mapped[TagCategory] = mapped_column(value_enum(TagCategory), nullable=False)
    parent_tag_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("tags.id", ondelete="SET NULL"), nullable=True
    )
    level: Mapped[int] = mapped_column(Integer, default=0)

    # Display
    color_code: Mapped[str | None] = mapped_column(String(7), nullable=True)
    icon_name: Mapped[str | None] = mapped_column(String(64), nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, default=0)

    # Usage and popularity
    usage_count: Mapped[int] = mapped_column(Integer, default=0)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False)
    is_trending: Mapped[bool] = mapped_column(Boolean, default=False)
    popularity_score: Mapped[float] = mapped_column(Float, default=0.0)

    # Curation
    requires_approval: Mapped[bool] = mapped_column(Boolean, default=False)
    is_approved: Mapped[bool] = mapped_column(Boolean, default=True)
    created_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    approved_by: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Localization
    translations: Mapped[dict[str, dict[str, str]] | None] = mapped_column(
        JSON, nullable=True
    )

    # Relationships
    parent_tag: Mapped[Tag | None] = relationship(
        "Tag", remote_side="Tag.id", back_populates="child_tags"
    )
    child_tags: Mapped[list[Tag]] = relationship(
        "Tag", back_populates="parent_tag", order_by="Tag.display_order"
    )
    assignments: Mapped[list[TagAssignment]] = relationship(
        "TagAssignment", back_populates="tag", cascade="all, delete-orphan"
    )
    tattoos: Mapped[list[Tattoo]] = relationship(
        "Tattoo",
        secondary="tag_tattoos",
        back_populates="tags",
        viewonly=True,
    )

    # Indexes
    __table_args__ = (
        Index("ix_tags_category_approved", "category", "is_approved"),
        Index("ix_tags_usage_approved", "usage_count", "is_approved"),
        Index("ix_tags_popularity_category", "popularity_score", "category"),
        Index("ix_tags_trending_category", "is_trending", "category"),
        Index("ix_tags_parent_tag_id", "parent_tag_id"),
    )

    @property
    def is_hierarchical(self) -> bool:
        """Whether the tag sits below the root of the taxonomy."""
        return (self.level or 0) > 0 or self.parent_tag_id is not None

    @property
    def is_popular(self) -> bool:
        """High score backed by enough usage."""
        return (
            (self.popularity_score or 0.0) > POPULAR_MIN_SCORE
            and (self.usage_count or 0) > POPULAR_MIN_USAGE
        )

    @property
    def display_name(self) -> str:
        """Name in the preferred locale, falling back to ``name``."""
        return self.display_name_for(settings.preferred_locale)

    def display_name_for(self, locale: str) -> str:
        """Translated name for ``locale`` if one is set, else ``name``."""
        translation = (self.translations or {}).get(locale) or {}
        return translation.get("name") or self.name

    def translation_for(self, locale: str) -> dict[str, Any]:
        """Copy of the stored translation fields for ``locale``."""
        return dict((self.translations or {}).get(locale) or {})
