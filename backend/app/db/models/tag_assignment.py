"""TagAssignment model for tag-tattoo associations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin
from app.db.models.enums import AssignmentType, value_enum

if TYPE_CHECKING:
    from app.db.models.tag import Tag
    from app.db.models.tattoo import Tattoo


class TagAssignment(TimestampMixin, Base):
    """Association between a tag and a tattoo, with its pivot metadata."""

    __tablename__ = "tag_tattoos"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # References
    tag_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False
    )
    tattoo_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("tattoos.id", ondelete="CASCADE"), nullable=False
    )

    # Relationship metadata
    relevance_score: Mapped[float] = mapped_column(Float, default=1.0)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False)
    assignment_type: Mapped[AssignmentType] = mapped_column(
        value_enum(AssignmentType), default=AssignmentType.MANUAL
    )

    # Quality control
    is_approved: Mapped[bool] = mapped_column(Boolean, default=True)
    approved_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    approval_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    tag: Mapped[Tag] = relationship("Tag", back_populates="assignments")
    tattoo: Mapped[Tattoo] = relationship("Tattoo", back_populates="assignments")

    __table_args__ = (
        UniqueConstraint("tag_id", "tattoo_id", name="uq_tag_tattoos_tag_tattoo"),
        CheckConstraint(
            "relevance_score >= 0 AND relevance_score <= 1",
            name="ck_tag_tattoos_relevance_score",
        ),
        Index("ix_tag_tattoos_tattoo_primary", "tattoo_id", "is_primary"),
        Index("ix_tag_tattoos_tag_relevance", "tag_id", "relevance_score"),
        Index("ix_tag_tattoos_approved_relevance", "is_approved", "relevance_score"),
    )
