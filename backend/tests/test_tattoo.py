"""Tests for the Tattoo model, TattooService and tattoo scopes."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from app.db.models import (
    Artist,
    BodyPlacement,
    TagCategory,
    Tattoo,
    TattooStatus,
    TattooStyle,
)
from app.db.scopes import tattoo_scopes
from app.services.tag import TagService
from app.services.tattoo import TattooError, TattooService


async def create_test_tattoo(
    session: AsyncSession,
    artist: Artist,
    title: str = "Koi Half Sleeve",
    **kwargs,
) -> Tattoo:
    """Helper to create a draft tattoo through the service."""
    return await TattooService(session).create_tattoo(artist_id=artist.id, title=title, **kwargs)


async def create_published_tattoo(
    session: AsyncSession,
    artist: Artist,
    title: str,
    **kwargs,
) -> Tattoo:
    """Helper to create and publish a tattoo."""
    tattoo = await create_test_tattoo(session, artist, title, **kwargs)
    await TattooService(session).publish(tattoo)
    return tattoo


# =============================================================================
# Model properties
# =============================================================================


class TestTattooProperties:
    """Tests for computed tattoo properties."""

    def test_is_published_needs_status_and_date(self) -> None:
        tattoo = Tattoo(title="Rose", slug="rose", status=TattooStatus.PUBLISHED)
        assert tattoo.is_published is False

        tattoo.published_at = datetime.now(timezone.utc)
        assert tattoo.is_published is True

        tattoo.status = TattooStatus.DRAFT
        assert tattoo.is_published is False

    def test_is_high_engagement(self) -> None:
        tattoo = Tattoo(title="Rose", slug="rose", engagement_score=7.5)
        assert tattoo.is_high_engagement is True

        tattoo.engagement_score = 7.0
        assert tattoo.is_high_engagement is False

    def test_image_urls(self) -> None:
        tattoo = Tattoo(
            title="Rose",
            slug="rose",
            image_variants={
                "thumbnail": "/t/rose.jpg",
                "medium": "/m/rose.jpg",
                "large": "/l/rose.jpg",
            },
            dimensions={"width": 1600, "height": 1200, "aspect_ratio": 1.33},
        )
        assert tattoo.thumbnail_url == "/t/rose.jpg"
        assert tattoo.display_url == "/m/rose.jpg"
        assert tattoo.full_size_url == "/l/rose.jpg"
        assert tattoo.aspect_ratio == 1.33

    def test_missing_media_is_none(self) -> None:
        tattoo = Tattoo(title="Rose", slug="rose", image_variants={}, dimensions={})
        assert tattoo.thumbnail_url is None
        assert tattoo.display_url is None
        assert tattoo.full_size_url is None
        assert tattoo.aspect_ratio is None

    def test_estimated_price_range(self) -> None:
        tattoo = Tattoo(title="Rose", slug="rose", price_estimate=300, price_currency="EUR")
        price_range = tattoo.estimated_price_range

        assert price_range == "210 - 390 EUR"
        assert "210" in price_range
        assert "390" in price_range
        assert "EUR" in price_range

    def test_estimated_price_range_without_estimate(self) -> None:
        tattoo = Tattoo(title="Rose", slug="rose", price_estimate=None)
        assert tattoo.estimated_price_range is None

    def test_estimated_price_range_keeps_decimals(self) -> None:
        tattoo = Tattoo(title="Rose", slug="rose", price_estimate=150.5, price_currency="CHF")
        assert tattoo.estimated_price_range == "60.50 - 240.50 CHF"


# =============================================================================
# Creation and publication
# =============================================================================


class TestCreateTattoo:
    """Tests for TattooService.create_tattoo."""

    @pytest.mark.asyncio
    async def test_create_draft(self, db_session: AsyncSession, artist: Artist) -> None:
        tattoo = await create_test_tattoo(
            db_session,
            artist,
            dimensions={"width": 1200, "height": 800},
            price_estimate=250,
            price_currency="chf",
        )

        assert tattoo.id is not None
        assert tattoo.slug == "koi-half-sleeve"
        assert tattoo.status == TattooStatus.DRAFT
        assert tattoo.published_at is None
        assert tattoo.is_published is False
        assert tattoo.view_count == 0
        assert tattoo.engagement_score == 0.0
        assert tattoo.aspect_ratio == 1.5
        assert tattoo.price_currency == "CHF"

    @pytest.mark.asyncio
    async def test_default_currency(self, db_session: AsyncSession, artist: Artist) -> None:
        tattoo = await create_test_tattoo(db_session, artist, price_estimate=100)
        assert tattoo.price_currency == "EUR"

    @pytest.mark.asyncio
    async def test_duplicate_title_gets_unique_slug(
        self, db_session: AsyncSession, artist: Artist
    ) -> None:
        first = await create_test_tattoo(db_session, artist, "Rose")
        second = await create_test_tattoo(db_session, artist, "Rose")
        assert (first.slug, second.slug) == ("rose", "rose-2")

    @pytest.mark.asyncio
    async def test_unknown_artist_rejected(self, db_session: AsyncSession) -> None:
        with pytest.raises(TattooError, match="not found"):
            await TattooService(db_session).create_tattoo(artist_id="missing", title="Rose")


class TestPublication:
    """Tests for publish and unpublish."""

    @pytest.mark.asyncio
    async def test_publish_unpublish_round_trip(
        self, db_session: AsyncSession, artist: Artist
    ) -> None:
        service = TattooService(db_session)
        tattoo = await create_test_tattoo(db_session, artist)

        await service.publish(tattoo)
        assert tattoo.status == TattooStatus.PUBLISHED
        assert tattoo.published_at is not None
        assert tattoo.is_published is True

        await service.unpublish(tattoo)
        assert tattoo.status == TattooStatus.DRAFT
        assert tattoo.published_at is None
        assert tattoo.is_published is False

    @pytest.mark.asyncio
    async def test_publish_twice_keeps_timestamp(
        self, db_session: AsyncSession, artist: Artist
    ) -> None:
        service = TattooService(db_session)
        tattoo = await create_test_tattoo(db_session, artist)

        await service.publish(tattoo)
        first = tattoo.published_at
        await service.publish(tattoo)

        assert tattoo.published_at == first

    @pytest.mark.asyncio
    async def test_archived_cannot_be_published(
        self, db_session: AsyncSession, artist: Artist
    ) -> None:
        tattoo = await create_test_tattoo(db_session, artist)
        tattoo.status = TattooStatus.ARCHIVED

        with pytest.raises(TattooError, match="Archived"):
            await TattooService(db_session).publish(tattoo)


# =============================================================================
# Engagement
# =============================================================================


class TestEngagement:
    """Tests for interaction counters and the engagement score."""

    @pytest.mark.asyncio
    async def test_increment_view(self, db_session: AsyncSession, artist: Artist) -> None:
        tattoo = await create_test_tattoo(db_session, artist)
        tattoo.view_count = 10
        await db_session.flush()

        await TattooService(db_session).increment_view(tattoo)

        assert tattoo.view_count == 11
        assert tattoo.engagement_score > 0.0

    @pytest.mark.asyncio
    async def test_score_non_decreasing(self, db_session: AsyncSession, artist: Artist) -> None:
        service = TattooService(db_session)
        tattoo = await create_test_tattoo(db_session, artist)

        scores = [tattoo.engagement_score]
        for _ in range(3):
            await service.increment_view(tattoo)
            scores.append(tattoo.engagement_score)
        await service.increment_like(tattoo)
        scores.append(tattoo.engagement_score)
        await service.increment_share(tattoo)
        scores.append(tattoo.engagement_score)

        assert tattoo.view_count == 3
        assert tattoo.like_count == 1
        assert tattoo.share_count == 1
        assert scores == sorted(scores)
        assert all(0.0 <= s <= 10.0 for s in scores)

    @pytest.mark.asyncio
    async def test_seeded_score_is_kept(self, db_session: AsyncSession, artist: Artist) -> None:
        tattoo = await create_test_tattoo(db_session, artist)
        tattoo.engagement_score = 8.2
        await db_session.flush()

        await TattooService(db_session).increment_like(tattoo)

        assert tattoo.engagement_score == 8.2
        assert tattoo.is_high_engagement is True

    @pytest.mark.asyncio
    async def test_update_engagement(self, db_session: AsyncSession, artist: Artist) -> None:
        tattoo = await create_test_tattoo(db_session, artist)
        tattoo.view_count = 1000
        tattoo.like_count = 200
        tattoo.share_count = 50

        await TattooService(db_session).update_engagement(tattoo)

        assert tattoo.engagement_score > 7.0


# =============================================================================
# Tags and SEO
# =============================================================================


class TestTattooTags:
    """Tests for tagging through TattooService."""

    @pytest.mark.asyncio
    async def test_add_primary_tag(self, db_session: AsyncSession, artist: Artist) -> None:
        service = TattooService(db_session)
        tag_service = TagService(db_session)
        tattoo = await create_test_tattoo(db_session, artist)
        koi = await tag_service.create_tag(name="Koi", category=TagCategory.SUBJECT)
        japanese = await tag_service.create_tag(name="Japanese", category=TagCategory.STYLE)

        await service.add_tag(tattoo, japanese, relevance_score=0.6)
        assignment = await service.add_primary_tag(tattoo, koi)

        assert assignment.is_primary is True
        assert assignment.relevance_score == 1.0
        assert koi.usage_count == 1

        tags = await service.get_tags(tattoo)
        assert [tag.name for tag, _ in tags] == ["Koi", "Japanese"]
        assert tags[1][1].relevance_score == 0.6

    @pytest.mark.asyncio
    async def test_tags_relationship_after_attach(
        self, db_engine, db_session: AsyncSession, artist: Artist
    ) -> None:
        service = TattooService(db_session)
        tag_service = TagService(db_session)
        tattoo = await create_test_tattoo(db_session, artist, "Koi Pond")
        koi = await tag_service.create_tag(name="Koi", category=TagCategory.SUBJECT)
        water = await tag_service.create_tag(name="Water", category=TagCategory.SUBJECT)
        await service.add_primary_tag(tattoo, koi)
        await service.add_tag(tattoo, water, relevance_score=0.4)
        await db_session.commit()

        async_session = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
        async with async_session() as session:
            result = await session.execute(
                select(Tattoo).where(Tattoo.id == tattoo.id).options(selectinload(Tattoo.tags))
            )
            loaded = result.scalar_one()

            assert sorted(tag.name for tag in loaded.tags) == ["Koi", "Water"]

    @pytest.mark.asyncio
    async def test_set_alt_text_merges_locales(
        self, db_session: AsyncSession, artist: Artist
    ) -> None:
        service = TattooService(db_session)
        tattoo = await create_test_tattoo(db_session, artist, alt_text={"en": "Koi fish sleeve"})

        await service.set_alt_text(tattoo, "fr", "Manchette carpe koï")

        assert tattoo.alt_text == {"en": "Koi fish sleeve", "fr": "Manchette carpe koï"}


class TestGetBySlug:
    """Tests for loading a tattoo with its relations."""

    @pytest.mark.asyncio
    async def test_loads_artist_user_and_city(
        self, db_engine, db_session: AsyncSession, artist: Artist
    ) -> None:
        await create_test_tattoo(db_session, artist, "Swallow")
        await db_session.commit()

        async_session = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
        async with async_session() as session:
            tattoo = await TattooService(session).get_by_slug("swallow")

            assert tattoo is not None
            assert tattoo.artist.stage_name == "Camille Ink"
            assert tattoo.artist.user.full_name == "Camille Martin"
            assert tattoo.artist.city.name == "Lyon"

            assert await TattooService(session).get_by_slug("missing") is None


# =============================================================================
# Scopes
# =============================================================================


class TestTattooScopes:
    """Tests for composable tattoo scopes."""

    async def _titles(self, session: AsyncSession, query) -> list[str]:
        result = await session.execute(query)
        return [t.title for t in result.scalars().all()]

    @pytest.mark.asyncio
    async def test_published_excludes_drafts(self, db_session: AsyncSession, artist: Artist) -> None:
        await create_published_tattoo(db_session, artist, "Public")
        await create_test_tattoo(db_session, artist, "Draft")

        assert await self._titles(db_session, tattoo_scopes.published(select(Tattoo))) == ["Public"]

    @pytest.mark.asyncio
    async def test_style_placement_and_flags(
        self, db_session: AsyncSession, artist: Artist
    ) -> None:
        await create_test_tattoo(
            db_session,
            artist,
            "Irezumi Back",
            tattoo_style=TattooStyle.JAPANESE,
            body_placement=BodyPlacement.BACK,
            is_featured=True,
        )
        await create_test_tattoo(
            db_session,
            artist,
            "Fine Rose",
            tattoo_style=TattooStyle.MINIMALIST,
            body_placement=BodyPlacement.FOREARM,
            is_portfolio_highlight=True,
        )

        by_style = tattoo_scopes.by_style(select(Tattoo), TattooStyle.JAPANESE)
        assert await self._titles(db_session, by_style) == ["Irezumi Back"]

        by_placement = tattoo_scopes.by_body_placement(select(Tattoo), BodyPlacement.FOREARM)
        assert await self._titles(db_session, by_placement) == ["Fine Rose"]

        assert await self._titles(db_session, tattoo_scopes.featured(select(Tattoo))) == [
            "Irezumi Back"
        ]
        assert await self._titles(
            db_session, tattoo_scopes.portfolio_highlights(select(Tattoo))
        ) == ["Fine Rose"]

    @pytest.mark.asyncio
    async def test_high_engagement(self, db_session: AsyncSession, artist: Artist) -> None:
        hot = await create_test_tattoo(db_session, artist, "Hot")
        warm = await create_test_tattoo(db_session, artist, "Warm")
        hotter = await create_test_tattoo(db_session, artist, "Hotter")
        hot.engagement_score, warm.engagement_score, hotter.engagement_score = 7.5, 7.0, 9.1
        await db_session.flush()

        query = tattoo_scopes.high_engagement(select(Tattoo))
        assert await self._titles(db_session, query) == ["Hotter", "Hot"]

    @pytest.mark.asyncio
    async def test_price_range_is_inclusive(
        self, db_session: AsyncSession, artist: Artist
    ) -> None:
        await create_test_tattoo(db_session, artist, "Cheap", price_estimate=80)
        await create_test_tattoo(db_session, artist, "Mid", price_estimate=200)
        await create_test_tattoo(db_session, artist, "Dear", price_estimate=500)
        await create_test_tattoo(db_session, artist, "Unpriced")

        query = tattoo_scopes.price_range(select(Tattoo), 80, 200).order_by(Tattoo.price_estimate)
        assert await self._titles(db_session, query) == ["Cheap", "Mid"]

        open_ended = tattoo_scopes.price_range(select(Tattoo), min_price=300)
        assert await self._titles(db_session, open_ended) == ["Dear"]

    @pytest.mark.asyncio
    async def test_search_matches_keywords(
        self, db_session: AsyncSession, artist: Artist
    ) -> None:
        await create_test_tattoo(
            db_session,
            artist,
            "Back Piece",
            search_keywords=["dragon", "irezumi"],
        )
        await create_test_tattoo(db_session, artist, "Dragon Sleeve")
        await create_test_tattoo(db_session, artist, "Rose", description="A red rose")

        query = tattoo_scopes.search(select(Tattoo), "DRAGON").order_by(Tattoo.title)
        assert await self._titles(db_session, query) == ["Back Piece", "Dragon Sleeve"]

        by_description = tattoo_scopes.search(select(Tattoo), "red rose")
        assert await self._titles(db_session, by_description) == ["Rose"]

    @pytest.mark.asyncio
    async def test_search_matches_accented_keywords(
        self, db_session: AsyncSession, artist: Artist
    ) -> None:
        await create_test_tattoo(db_session, artist, "Memento", search_keywords=["crâne", "épaule"])
        await create_test_tattoo(db_session, artist, "Koi", search_keywords=["carpe"])

        for term in ("crâne", "épaule", "Crâne"):
            query = tattoo_scopes.search(select(Tattoo), term)
            assert await self._titles(db_session, query) == ["Memento"], term

    @pytest.mark.asyncio
    async def test_search_wildcards_match_literally(
        self, db_session: AsyncSession, artist: Artist
    ) -> None:
        await create_test_tattoo(db_session, artist, "Rose", search_keywords=["rose"])
        await create_test_tattoo(db_session, artist, "50% Off Flash", search_keywords=["flash_day"])

        assert await self._titles(db_session, tattoo_scopes.search(select(Tattoo), "%")) == [
            "50% Off Flash"
        ]
        assert await self._titles(db_session, tattoo_scopes.search(select(Tattoo), "flash_")) == [
            "50% Off Flash"
        ]
        assert await self._titles(db_session, tattoo_scopes.search(select(Tattoo), "r_se")) == []

    @pytest.mark.asyncio
    async def test_list_tattoos_filters(self, db_session: AsyncSession, artist: Artist) -> None:
        service = TattooService(db_session)
        await create_published_tattoo(
            db_session, artist, "Koi", tattoo_style=TattooStyle.JAPANESE, price_estimate=400
        )
        await create_published_tattoo(
            db_session, artist, "Lines", tattoo_style=TattooStyle.LINEWORK, price_estimate=120
        )
        await create_test_tattoo(db_session, artist, "Unreleased", tattoo_style=TattooStyle.JAPANESE)

        tattoos, total = await service.list_tattoos(style=TattooStyle.JAPANESE)
        assert total == 1
        assert tattoos[0].title == "Koi"

        tattoos, total = await service.list_tattoos(published_only=False, style=TattooStyle.JAPANESE)
        assert total == 2

        tattoos, total = await service.list_tattoos(max_price=200)
        assert [t.title for t in tattoos] == ["Lines"]
