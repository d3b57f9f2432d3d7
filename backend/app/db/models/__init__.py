"""Database models for Inkfolio."""

from app.db.models.artist import Artist
from app.db.models.city import City
from app.db.models.enums import (
    AssignmentType,
    BodyPlacement,
    ColorType,
    SizeCategory,
    TagCategory,
    TattooStatus,
    TattooStyle,
    UserRole,
)
from app.db.models.tag import Tag
from app.db.models.tag_assignment import TagAssignment
from app.db.models.tattoo import Tattoo
from app.db.models.user import User

__all__ = [
    # Models
    "Artist",
    "City",
    "Tag",
    "TagAssignment",
    "Tattoo",
    "User",
    # Enums
    "AssignmentType",
    "BodyPlacement",
    "ColorType",
    "SizeCategory",
    "TagCategory",
    "TattooStatus",
    "TattooStyle",
    "UserRole",
]
