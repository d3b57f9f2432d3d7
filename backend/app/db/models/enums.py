"""Enum types for database models."""

from __future__ import annotations

import enum

from sqlalchemy import Enum


class TagCategory(str, enum.Enum):
    """Taxonomy branch a tag belongs to."""

    STYLE = "style"
    SUBJECT = "subject"
    BODY_PART = "body_part"
    COLOR = "color"
    SIZE = "size"
    TECHNIQUE = "technique"
    MOOD = "mood"
    CULTURAL = "cultural"
    CUSTOM = "custom"


class AssignmentType(str, enum.Enum):
    """How a tag was assigned to a tattoo."""

    MANUAL = "manual"  # Picked by the artist or a moderator
    AUTO = "auto"  # Derived from upload metadata
    AI_SUGGESTED = "ai_suggested"


class TattooStatus(str, enum.Enum):
    """Publication workflow status of a tattoo."""

    DRAFT = "draft"
    PENDING_REVIEW = "pending_review"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class TattooStyle(str, enum.Enum):
    """Artistic style of a tattoo."""

    TRADITIONAL = "traditional"
    NEO_TRADITIONAL = "neo_traditional"
    REALISTIC = "realistic"
    BLACK_AND_GREY = "black_and_grey"
    WATERCOLOR = "watercolor"
    GEOMETRIC = "geometric"
    MINIMALIST = "minimalist"
    JAPANESE = "japanese"
    TRIBAL = "tribal"
    BIOMECHANICAL = "biomechanical"
    PORTRAIT = "portrait"
    ABSTRACT = "abstract"
    DOTWORK = "dotwork"
    LINEWORK = "linework"


class BodyPlacement(str, enum.Enum):
    """Where on the body a tattoo sits."""

    ARM = "arm"
    LEG = "leg"
    BACK = "back"
    CHEST = "chest"
    SHOULDER = "shoulder"
    HAND = "hand"
    FOOT = "foot"
    NECK = "neck"
    FACE = "face"
    TORSO = "torso"
    RIBS = "ribs"
    THIGH = "thigh"
    CALF = "calf"
    FOREARM = "forearm"


class SizeCategory(str, enum.Enum):
    """Rough size bucket of a tattoo."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    FULL_PIECE = "full_piece"


class ColorType(str, enum.Enum):
    """Ink palette of a tattoo."""

    BLACK_AND_GREY = "black_and_grey"
    COLOR = "color"
    SINGLE_COLOR = "single_color"


class UserRole(str, enum.Enum):
    """Account role."""

    CLIENT = "client"
    ARTIST = "artist"
    ADMIN = "admin"


def value_enum(enum_cls: type[enum.Enum]) -> Enum:
    """Column type persisting an enum by its value rather than its name."""
    return Enum(
        enum_cls,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )
