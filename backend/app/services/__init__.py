"""Business logic services for Inkfolio."""

from app.services.tag import TagAssignmentExistsError, TagError, TagService
from app.services.tattoo import TattooError, TattooService

__all__ = [
    "TagAssignmentExistsError",
    "TagError",
    "TagService",
    "TattooError",
    "TattooService",
]
