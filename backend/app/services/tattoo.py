"""Tattoo service for portfolio pieces."""

from __future__ import annotations

from typing import Any

from sqlalchemy import exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import settings
from app.core.logging import get_logger
from app.db.base import utcnow
from app.db.models import (
    Artist,
    AssignmentType,
    BodyPlacement,
    ColorType,
    SizeCategory,
    Tag,
    TagAssignment,
    Tattoo,
    TattooStatus,
    TattooStyle,
)
from app.db.scopes import tattoo_scopes
from app.services.scoring import engagement_score, ratchet
from app.services.tag import TagService
from app.utils.slug import unique_slug

logger = get_logger(__name__)

# Counters that feed the engagement score
ENGAGEMENT_COUNTERS = ("view_count", "like_count", "share_count")


class TattooError(Exception):
    """Error during tattoo operations."""
    pass


class TattooService:
    """Service for tattoo publication, engagement metrics and tagging."""

    def __init__(self, db: AsyncSession):
        """Initialize the tattoo service.

        Args:
            db: The database session.
        """
        self.db = db

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    async def get_tattoo(self, tattoo_id: str) -> Tattoo | None:
        return await self.db.get(Tattoo, tattoo_id)

    async def get_by_slug(self, slug: str) -> Tattoo | None:
        """Get a tattoo by slug with its artist, the artist's user and city."""
        result = await self.db.execute(
            select(Tattoo)
            .where(Tattoo.slug == slug)
            .options(
                selectinload(Tattoo.artist).selectinload(Artist.user),
                selectinload(Tattoo.artist).selectinload(Artist.city),
            )
        )
        return result.scalar_one_or_none()

    async def list_tattoos(
        self,
        published_only: bool = True,
        artist_id: str | None = None,
        style: TattooStyle | None = None,
        placement: BodyPlacement | None = None,
        featured: bool = False,
        highlights: bool = False,
        high_engagement: bool = False,
        min_price: float | None = None,
        max_price: float | None = None,
        q: str | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[Tattoo], int]:
        """List tattoos through the query scopes.

        Returns:
            The page of tattoos and the total number of matches.
        """
        query = select(Tattoo)

        if artist_id:
            query = query.where(Tattoo.artist_id == artist_id)
        if style:
            query = tattoo_scopes.by_style(query, style)
        if placement:
            query = tattoo_scopes.by_body_placement(query, placement)
        if featured:
            query = tattoo_scopes.featured(query)
        if min_price is not None or max_price is not None:
            query = tattoo_scopes.price_range(query, min_price, max_price)
        if q:
            query = tattoo_scopes.search(query, q)
        if high_engagement:
            query = tattoo_scopes.high_engagement(query)
        if highlights:
            query = tattoo_scopes.portfolio_highlights(query)
        if published_only:
            query = tattoo_scopes.published(query)

        total_result = await self.db.execute(
            select(func.count()).select_from(query.order_by(None).subquery())
        )
        total = total_result.scalar() or 0

        query = query.order_by(Tattoo.created_at.desc())
        query = query.offset((page - 1) * page_size).limit(page_size)
        result = await self.db.execute(query)

        return list(result.scalars().all()), total

    async def get_tags(self, tattoo: Tattoo) -> list[tuple[Tag, TagAssignment]]:
        """Tags of a tattoo with their pivot rows, primary first."""
        result = await self.db.execute(
            select(Tag, TagAssignment)
            .join(TagAssignment, TagAssignment.tag_id == Tag.id)
            .where(TagAssignment.tattoo_id == tattoo.id)
            .order_by(
                TagAssignment.is_primary.desc(),
                TagAssignment.relevance_score.desc(),
                Tag.name,
            )
        )
        return [(tag, assignment) for tag, assignment in result.all()]

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    async def create_tattoo(
        self,
        artist_id: str,
        title: str,
        slug: str | None = None,
        description: str | None = None,
        image_variants: dict[str, Any] | None = None,
        dimensions: dict[str, Any] | None = None,
        original_filename: str | None = None,
        storage_path: str | None = None,
        file_size: int | None = None,
        content_type: str = "image/jpeg",
        tattoo_style: TattooStyle | None = None,
        body_placement: BodyPlacement | None = None,
        size_category: SizeCategory | None = None,
        color_type: ColorType | None = None,
        price_estimate: float | None = None,
        price_currency: str | None = None,
        search_keywords: list[str] | None = None,
        alt_text: dict[str, str] | None = None,
        is_featured: bool = False,
        is_portfolio_highlight: bool = False,
    ) -> Tattoo:
        """Create a draft tattoo for an artist.

        The slug is derived from the title when not given, with a numeric
        suffix on collision. When ``dimensions`` carries width and height but
        no aspect ratio, the ratio is filled in.

        Raises:
            TattooError: If the artist does not exist.
        """
        artist = await self.db.get(Artist, artist_id)
        if artist is None:
            raise TattooError(f"Artist {artist_id} not found")

        if slug is None:
            slug = await unique_slug(title, self._slug_exists, fallback="tattoo")

        tattoo = Tattoo(
            artist_id=artist_id,
            title=title.strip(),
            slug=slug,
            description=description,
            status=TattooStatus.DRAFT,
            published_at=None,
            image_variants=dict(image_variants or {}),
            dimensions=self._normalize_dimensions(dimensions),
            original_filename=original_filename,
            storage_path=storage_path,
            file_size=file_size,
            content_type=content_type,
            tattoo_style=tattoo_style,
            body_placement=body_placement,
            size_category=size_category,
            color_type=color_type,
            price_estimate=price_estimate,
            price_currency=(price_currency or settings.default_currency).upper(),
            search_keywords=list(search_keywords) if search_keywords else None,
            alt_text=dict(alt_text) if alt_text else None,
            is_featured=is_featured,
            is_portfolio_highlight=is_portfolio_highlight,
            view_count=0,
            like_count=0,
            share_count=0,
            engagement_score=0.0,
        )
        self.db.add(tattoo)
        await self.db.flush()

        logger.info(
            "tattoo_created",
            tattoo_id=tattoo.id,
            artist_id=artist_id,
            slug=tattoo.slug,
        )

        return tattoo

    # -------------------------------------------------------------------------
    # Publication
    # -------------------------------------------------------------------------

    async def publish(self, tattoo: Tattoo) -> Tattoo:
        """Move a tattoo to published and stamp its publication time.

        Publishing an already published tattoo keeps the original timestamp.

        Raises:
            TattooError: If the tattoo is archived.
        """
        if tattoo.status == TattooStatus.ARCHIVED:
            raise TattooError("Archived tattoos cannot be published")

        if not tattoo.is_published:
            tattoo.status = TattooStatus.PUBLISHED
            tattoo.published_at = utcnow()
            await self.db.flush()

            logger.info("tattoo_published", tattoo_id=tattoo.id)

        return tattoo

    async def unpublish(self, tattoo: Tattoo) -> Tattoo:
        """Move a tattoo back to draft and clear its publication time."""
        tattoo.status = TattooStatus.DRAFT
        tattoo.published_at = None
        await self.db.flush()

        logger.info("tattoo_unpublished", tattoo_id=tattoo.id)

        return tattoo

    # -------------------------------------------------------------------------
    # Engagement
    # -------------------------------------------------------------------------

    async def increment_view(self, tattoo: Tattoo) -> Tattoo:
        return await self._increment(tattoo, "view_count")

    async def increment_like(self, tattoo: Tattoo) -> Tattoo:
        return await self._increment(tattoo, "like_count")

    async def increment_share(self, tattoo: Tattoo) -> Tattoo:
        return await self._increment(tattoo, "share_count")

    async def update_engagement(self, tattoo: Tattoo) -> Tattoo:
        """Recompute the engagement score from the interaction counters."""
        self._apply_engagement(tattoo)
        await self.db.flush()
        return tattoo

    # -------------------------------------------------------------------------
    # Tags and SEO
    # -------------------------------------------------------------------------

    async def add_tag(
        self,
        tattoo: Tattoo,
        tag: Tag,
        relevance_score: float = 1.0,
        is_primary: bool = False,
        assignment_type: AssignmentType = AssignmentType.MANUAL,
    ) -> TagAssignment:
        """Attach ``tag`` to the tattoo. See ``TagService.attach_to_tattoo``."""
        return await TagService(self.db).attach_to_tattoo(
            tag,
            tattoo,
            relevance_score=relevance_score,
            is_primary=is_primary,
            assignment_type=assignment_type,
            is_approved=True,
        )

    async def add_primary_tag(self, tattoo: Tattoo, tag: Tag) -> TagAssignment:
        return await self.add_tag(tattoo, tag, relevance_score=1.0, is_primary=True)

    async def set_alt_text(self, tattoo: Tattoo, locale: str, text: str) -> Tattoo:
        """Set the alt text for one locale, keeping the other locales."""
        alt_text = dict(tattoo.alt_text or {})
        alt_text[locale] = text
        tattoo.alt_text = alt_text
        await self.db.flush()
        return tattoo

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _increment(self, tattoo: Tattoo, counter: str) -> Tattoo:
        # Counter and score are flushed together
        setattr(tattoo, counter, (getattr(tattoo, counter) or 0) + 1)
        self._apply_engagement(tattoo)
        await self.db.flush()

        logger.debug(
            "tattoo_engagement_updated",
            tattoo_id=tattoo.id,
            counter=counter,
            value=getattr(tattoo, counter),
            engagement_score=tattoo.engagement_score,
        )

        return tattoo

    def _apply_engagement(self, tattoo: Tattoo) -> None:
        counts = [getattr(tattoo, name) or 0 for name in ENGAGEMENT_COUNTERS]
        tattoo.engagement_score = ratchet(tattoo.engagement_score, engagement_score(*counts))

    async def _slug_exists(self, slug: str) -> bool:
        return bool(await self.db.scalar(select(exists().where(Tattoo.slug == slug))))

    @staticmethod
    def _normalize_dimensions(dimensions: dict[str, Any] | None) -> dict[str, Any]:
        normalized = dict(dimensions or {})
        width = normalized.get("width")
        height = normalized.get("height")
        if "aspect_ratio" not in normalized and width and height:
            normalized["aspect_ratio"] = round(width / height, 2)
        return normalized
