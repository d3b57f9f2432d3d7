"""Tattoo model for portfolio pieces."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.config import settings
from app.db.base import Base, TimestampMixin
from app.db.models.enums import (
    BodyPlacement,
    ColorType,
    SizeCategory,
    TattooStatus,
    TattooStyle,
    value_enum,
)

if TYPE_CHECKING:
    from app.db.models.artist import Artist
    from app.db.models.tag import Tag
    from app.db.models.tag_assignment import TagAssignment

# Engagement score above which a tattoo counts as high engagement
HIGH_ENGAGEMENT_THRESHOLD = 7.0


def _format_amount(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


class Tattoo(TimestampMixin, Base):
    """A portfolio piece owned by an artist.

    Image files are produced by the upload pipeline; the model only stores the
    resulting variant paths in ``image_variants``::

        {"thumbnail": ..., "medium": ..., "large": ..., "original": ...,
         "webp": {"thumbnail": ..., "medium": ..., "large": ...}}

    and the pixel size in ``dimensions`` (``width``, ``height``,
    ``aspect_ratio``).
    """

    __tablename__ = "tattoos"

    # Primary key
    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )

    # Owner
    artist_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("artists.id", ondelete="CASCADE"), nullable=False
    )

    # Content
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    # Media
    original_filename: Mapped[str | None] = mapped_column(String(512), nullable=True)
    storage_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    image_variants: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    dimensions: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    file_size: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    content_type: Mapped[str] = mapped_column(String(50), default="image/jpeg")
    content_hash: Mapped[str | None] = mapped_column(String(64), nullable=True)
    primary_color: Mapped[str | None] = mapped_column(String(7), nullable=True)

    # Characteristics
    tattoo_style: Mapped[TattooStyle | None] = mapped_column(
        value_enum(TattooStyle), nullable=True
    )
    body_placement: Mapped[BodyPlacement | None] = mapped_column(
        value_enum(BodyPlacement), nullable=True
    )
    size_category: Mapped[SizeCategory | None] = mapped_column(
        value_enum(SizeCategory), nullable=True
    )
    color_type: Mapped[ColorType | None] = mapped_column(
        value_enum(ColorType), nullable=True
    )
    session_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    estimated_hours: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Status and visibility
    status: Mapped[TattooStatus] = mapped_column(
        value_enum(TattooStatus), default=TattooStatus.DRAFT
    )
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False)
    is_portfolio_highlight: Mapped[bool] = mapped_column(Boolean, default=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0)

    # Engagement metrics
    view_count: Mapped[int] = mapped_column(Integer, default=0)
    like_count: Mapped[int] = mapped_column(Integer, default=0)
    share_count: Mapped[int] = mapped_column(Integer, default=0)
    engagement_score: Mapped[float] = mapped_column(Float, default=0.0)

    # Pricing
    allows_inquiries: Mapped[bool] = mapped_column(Boolean, default=True)
    shows_pricing: Mapped[bool] = mapped_column(Boolean, default=False)
    price_estimate: Mapped[float | None] = mapped_column(Float, nullable=True)
    price_currency: Mapped[str] = mapped_column(
        String(3), default=lambda: settings.default_currency
    )

    # SEO and discovery
    alt_text: Mapped[dict[str, str] | None] = mapped_column(JSON, nullable=True)
    search_keywords: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    meta_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    meta_description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    artist: Mapped[Artist] = relationship("Artist", back_populates="tattoos")
    assignments: Mapped[list[TagAssignment]] = relationship(
        "TagAssignment", back_populates="tattoo", cascade="all, delete-orphan"
    )
    tags: Mapped[list[Tag]] = relationship(
        "Tag",
        secondary="tag_tattoos",
        back_populates="tattoos",
        viewonly=True,
    )

    # Indexes
    __table_args__ = (
        Index("ix_tattoos_artist_status", "artist_id", "status"),
        Index("ix_tattoos_status_featured_published", "status", "is_featured", "published_at"),
        Index("ix_tattoos_style_status", "tattoo_style", "status"),
        Index("ix_tattoos_placement_size", "body_placement", "size_category"),
        Index("ix_tattoos_engagement_published", "engagement_score", "published_at"),
        Index("ix_tattoos_content_hash", "content_hash"),
    )

    @property
    def is_published(self) -> bool:
        """Published status with a publication timestamp."""
        return self.status == TattooStatus.PUBLISHED and self.published_at is not None

    @property
    def is_high_engagement(self) -> bool:
        return (self.engagement_score or 0.0) > HIGH_ENGAGEMENT_THRESHOLD

    @property
    def thumbnail_url(self) -> str | None:
        return (self.image_variants or {}).get("thumbnail")

    @property
    def display_url(self) -> str | None:
        return (self.image_variants or {}).get("medium")

    @property
    def full_size_url(self) -> str | None:
        return (self.image_variants or {}).get("large")

    @property
    def aspect_ratio(self) -> float | None:
        return (self.dimensions or {}).get("aspect_ratio")

    @property
    def estimated_price_range(self) -> str | None:
        """Price estimate widened into a display range, e.g. ``"210 - 390 EUR"``."""
        if self.price_estimate is None:
            return None
        spread = settings.price_range_spread
        low = _format_amount(self.price_estimate - spread)
        high = _format_amount(self.price_estimate + spread)
        currency = self.price_currency or settings.default_currency
        return f"{low} - {high} {currency}"
