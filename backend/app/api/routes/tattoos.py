"""Tattoo API endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.logging import get_logger
from app.db import get_db
from app.db.models import BodyPlacement, Tag, TagAssignment, Tattoo, TattooStyle
from app.schemas.tag import TagSummary
from app.schemas.tattoo import (
    AddTattooTagRequest,
    AltTextUpdate,
    ArtistSummary,
    CitySummary,
    TattooCreate,
    TattooDetail,
    TattooList,
    TattooResponse,
    TattooTagResponse,
)
from app.services.tag import TagAssignmentExistsError, TagError, TagService
from app.services.tattoo import TattooError, TattooService

logger = get_logger(__name__)

router = APIRouter(prefix="/tattoos", tags=["tattoos"])


async def _get_tattoo_or_404(service: TattooService, slug: str) -> Tattoo:
    tattoo = await service.get_by_slug(slug)
    if tattoo is None:
        raise HTTPException(status_code=404, detail="Tattoo not found")
    return tattoo


def _tag_response(tag: Tag, assignment: TagAssignment) -> TattooTagResponse:
    return TattooTagResponse(
        tag=TagSummary.model_validate(tag),
        relevance_score=assignment.relevance_score,
        is_primary=assignment.is_primary,
        assignment_type=assignment.assignment_type,
        is_approved=assignment.is_approved,
    )


@router.get("", response_model=TattooList)
async def list_tattoos(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(settings.default_page_size, ge=1, le=100, description="Items per page"),
    artist_id: Optional[str] = Query(None, description="Filter by artist"),
    style: Optional[TattooStyle] = Query(None, description="Filter by tattoo style"),
    placement: Optional[BodyPlacement] = Query(None, description="Filter by body placement"),
    featured: bool = Query(False, description="Only featured tattoos"),
    highlights: bool = Query(False, description="Only portfolio highlights"),
    high_engagement: bool = Query(False, description="Only high-engagement tattoos"),
    min_price: Optional[float] = Query(None, ge=0, description="Minimum price estimate"),
    max_price: Optional[float] = Query(None, ge=0, description="Maximum price estimate"),
    q: Optional[str] = Query(None, min_length=1, description="Search title, description and keywords"),
    include_unpublished: bool = Query(False, description="Include drafts and archived tattoos"),
    db: AsyncSession = Depends(get_db),
) -> TattooList:
    """List tattoos with filtering and pagination. Published only by default."""
    if min_price is not None and max_price is not None and min_price > max_price:
        raise HTTPException(status_code=400, detail="min_price must not exceed max_price")

    service = TattooService(db)
    tattoos, total = await service.list_tattoos(
        published_only=not include_unpublished,
        artist_id=artist_id,
        style=style,
        placement=placement,
        featured=featured,
        highlights=highlights,
        high_engagement=high_engagement,
        min_price=min_price,
        max_price=max_price,
        q=q,
        page=page,
        page_size=page_size,
    )

    pages = (total + page_size - 1) // page_size if total > 0 else 1

    return TattooList(
        items=[TattooResponse.model_validate(t) for t in tattoos],
        total=total,
        page=page,
        page_size=page_size,
        pages=pages,
    )


@router.post("", response_model=TattooResponse, status_code=201)
async def create_tattoo(
    request: TattooCreate,
    db: AsyncSession = Depends(get_db),
) -> TattooResponse:
    """Create a draft tattoo."""
    service = TattooService(db)
    data = request.model_dump(exclude={"image_variants", "dimensions"})

    try:
        tattoo = await service.create_tattoo(
            **data,
            image_variants=request.image_variants.model_dump(exclude_none=True),
            dimensions=request.dimensions.model_dump(exclude_none=True) if request.dimensions else None,
        )
        await db.commit()
    except TattooError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail="Tattoo slug already exists")

    return TattooResponse.model_validate(tattoo)


@router.get("/{slug}", response_model=TattooDetail)
async def get_tattoo(
    slug: str,
    db: AsyncSession = Depends(get_db),
) -> TattooDetail:
    """Get a tattoo with its artist and tags."""
    service = TattooService(db)
    tattoo = await _get_tattoo_or_404(service, slug)

    artist = None
    if tattoo.artist:
        artist = ArtistSummary(
            id=tattoo.artist.id,
            stage_name=tattoo.artist.stage_name,
            slug=tattoo.artist.slug,
            user_full_name=tattoo.artist.user.full_name if tattoo.artist.user else None,
            city=CitySummary.model_validate(tattoo.artist.city) if tattoo.artist.city else None,
        )

    tags = [_tag_response(tag, assignment) for tag, assignment in await service.get_tags(tattoo)]

    return TattooDetail(
        **TattooResponse.model_validate(tattoo).model_dump(),
        artist=artist,
        tags=tags,
    )


@router.post("/{slug}/publish", response_model=TattooResponse)
async def publish_tattoo(
    slug: str,
    db: AsyncSession = Depends(get_db),
) -> TattooResponse:
    """Publish a tattoo."""
    service = TattooService(db)
    tattoo = await _get_tattoo_or_404(service, slug)

    try:
        await service.publish(tattoo)
    except TattooError as e:
        raise HTTPException(status_code=409, detail=str(e))
    await db.commit()

    return TattooResponse.model_validate(tattoo)


@router.post("/{slug}/unpublish", response_model=TattooResponse)
async def unpublish_tattoo(
    slug: str,
    db: AsyncSession = Depends(get_db),
) -> TattooResponse:
    """Move a tattoo back to draft."""
    service = TattooService(db)
    tattoo = await _get_tattoo_or_404(service, slug)

    await service.unpublish(tattoo)
    await db.commit()

    return TattooResponse.model_validate(tattoo)


@router.post("/{slug}/view", response_model=TattooResponse)
async def record_view(slug: str, db: AsyncSession = Depends(get_db)) -> TattooResponse:
    """Record a view."""
    service = TattooService(db)
    tattoo = await _get_tattoo_or_404(service, slug)
    await service.increment_view(tattoo)
    await db.commit()
    return TattooResponse.model_validate(tattoo)


@router.post("/{slug}/like", response_model=TattooResponse)
async def record_like(slug: str, db: AsyncSession = Depends(get_db)) -> TattooResponse:
    """Record a like."""
    service = TattooService(db)
    tattoo = await _get_tattoo_or_404(service, slug)
    await service.increment_like(tattoo)
    await db.commit()
    return TattooResponse.model_validate(tattoo)


@router.post("/{slug}/share", response_model=TattooResponse)
async def record_share(slug: str, db: AsyncSession = Depends(get_db)) -> TattooResponse:
    """Record a share."""
    service = TattooService(db)
    tattoo = await _get_tattoo_or_404(service, slug)
    await service.increment_share(tattoo)
    await db.commit()
    return TattooResponse.model_validate(tattoo)


@router.get("/{slug}/tags", response_model=list[TattooTagResponse])
async def get_tattoo_tags(
    slug: str,
    db: AsyncSession = Depends(get_db),
) -> list[TattooTagResponse]:
    """Get the tags of a tattoo, primary first."""
    service = TattooService(db)
    tattoo = await _get_tattoo_or_404(service, slug)
    return [_tag_response(tag, assignment) for tag, assignment in await service.get_tags(tattoo)]


@router.post("/{slug}/tags", response_model=TattooTagResponse, status_code=201)
async def add_tattoo_tag(
    slug: str,
    request: AddTattooTagRequest,
    db: AsyncSession = Depends(get_db),
) -> TattooTagResponse:
    """Attach a tag to a tattoo."""
    service = TattooService(db)
    tattoo = await _get_tattoo_or_404(service, slug)

    tag = await TagService(db).get_tag(request.tag_id)
    if tag is None:
        raise HTTPException(status_code=404, detail="Tag not found")

    try:
        assignment = await service.add_tag(
            tattoo,
            tag,
            relevance_score=request.relevance_score,
            is_primary=request.is_primary,
            assignment_type=request.assignment_type,
        )
    except TagAssignmentExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except TagError as e:
        raise HTTPException(status_code=400, detail=str(e))
    await db.commit()

    return _tag_response(tag, assignment)


@router.delete("/{slug}/tags/{tag_id}", status_code=204)
async def remove_tattoo_tag(
    slug: str,
    tag_id: int,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Detach a tag from a tattoo."""
    service = TattooService(db)
    tattoo = await _get_tattoo_or_404(service, slug)

    tag_service = TagService(db)
    tag = await tag_service.get_tag(tag_id)
    if tag is None or not await tag_service.detach_from_tattoo(tag, tattoo):
        raise HTTPException(status_code=404, detail="Tag not found on tattoo")

    await db.commit()


@router.put("/{slug}/alt-text/{locale}", response_model=TattooResponse)
async def set_alt_text(
    slug: str,
    locale: str,
    request: AltTextUpdate,
    db: AsyncSession = Depends(get_db),
) -> TattooResponse:
    """Set the alt text of a tattoo for one locale."""
    service = TattooService(db)
    tattoo = await _get_tattoo_or_404(service, slug)

    await service.set_alt_text(tattoo, locale.lower(), request.text)
    await db.commit()

    return TattooResponse.model_validate(tattoo)
