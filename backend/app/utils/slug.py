"""Slug generation for tags, tattoos and artists."""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Awaitable, Callable

MAX_SLUG_LENGTH = 100


def slugify(text: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Convert text to a URL-safe slug.

    - Strips accents (``"Épaule"`` -> ``"epaule"``)
    - Replaces ``&`` with ``and``
    - Replaces runs of non-alphanumeric characters with a single hyphen
    - Strips leading/trailing hyphens and truncates to ``max_length``

    Args:
        text: Text to slugify.
        max_length: Maximum slug length.

    Returns:
        URL-safe slug (may be empty if ``text`` has no usable characters).
    """
    normalized = unicodedata.normalize("NFKD", text)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii")
    ascii_text = ascii_text.lower().replace("&", " and ")
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_text)
    return slug.strip("-")[:max_length].rstrip("-")


async def unique_slug(
    text: str,
    exists: Callable[[str], Awaitable[bool]],
    fallback: str = "item",
    max_length: int = MAX_SLUG_LENGTH,
) -> str:
    """Slugify ``text`` and append ``-2``, ``-3``... until ``exists`` says no.

    Args:
        text: Text to slugify.
        exists: Async predicate checking whether a slug is taken.
        fallback: Base slug used when ``text`` slugifies to nothing.
        max_length: Maximum slug length, suffix included.

    Returns:
        A slug not currently taken.
    """
    base = slugify(text, max_length) or fallback
    candidate = base
    counter = 1
    while await exists(candidate):
        counter += 1
        suffix = f"-{counter}"
        candidate = base[: max_length - len(suffix)] + suffix
    return candidate
