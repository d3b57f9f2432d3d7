"""Tests for slug generation."""

from __future__ import annotations

import pytest

from app.utils.slug import slugify, unique_slug


def test_slugify_strips_accents_and_punctuation() -> None:
    assert slugify("Épaule & Dos") == "epaule-and-dos"
    assert slugify("  Noir et gris!  ") == "noir-et-gris"
    assert slugify("Côtes") == "cotes"


def test_slugify_truncates() -> None:
    slug = slugify("a very long tattoo title " * 10, max_length=20)
    assert len(slug) <= 20
    assert not slug.endswith("-")


def test_slugify_empty_when_nothing_usable() -> None:
    assert slugify("!!!") == ""


@pytest.mark.asyncio
async def test_unique_slug_appends_counter() -> None:
    taken = {"dragon", "dragon-2"}

    async def exists(slug: str) -> bool:
        return slug in taken

    assert await unique_slug("Dragon", exists) == "dragon-3"


@pytest.mark.asyncio
async def test_unique_slug_uses_fallback() -> None:
    async def exists(slug: str) -> bool:
        return False

    assert await unique_slug("???", exists, fallback="tattoo") == "tattoo"
