"""Artist model, owner of tattoos."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.db.models.city import City
    from app.db.models.tattoo import Tattoo
    from app.db.models.user import User


class Artist(TimestampMixin, Base):
    """A tattoo artist profile."""

    __tablename__ = "artists"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )

    user_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    city_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("cities.id", ondelete="SET NULL"), nullable=True
    )
    stage_name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Relationships
    user: Mapped[User | None] = relationship("User", back_populates="artist")
    city: Mapped[City | None] = relationship("City", back_populates="artists")
    tattoos: Mapped[list[Tattoo]] = relationship(
        "Tattoo", back_populates="artist", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("ix_artists_city_id", "city_id"),)
