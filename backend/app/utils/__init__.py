"""Utility functions for Inkfolio."""

from app.utils.slug import slugify, unique_slug

__all__ = [
    "slugify",
    "unique_slug",
]
