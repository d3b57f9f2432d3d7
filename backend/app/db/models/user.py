"""User account model."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin
from app.db.models.enums import UserRole, value_enum

if TYPE_CHECKING:
    from app.db.models.artist import Artist
    from app.db.models.city import City


class User(TimestampMixin, Base):
    """An account. Authentication lives outside this service."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )

    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    role: Mapped[UserRole] = mapped_column(value_enum(UserRole), default=UserRole.CLIENT)
    city_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("cities.id", ondelete="SET NULL"), nullable=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Relationships
    city: Mapped[City | None] = relationship("City", back_populates="users")
    artist: Mapped[Artist | None] = relationship("Artist", back_populates="user")
