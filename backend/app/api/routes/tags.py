"""Tag API endpoints for the tattoo taxonomy."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.logging import get_logger
from app.db import get_db
from app.db.models import Tag, TagCategory
from app.schemas.tag import (
    SeedTagsResponse,
    TagApproveRequest,
    TagCreate,
    TagDetail,
    TagList,
    TagResponse,
    TagSummary,
    TranslationUpdate,
)
from app.services.tag import TagError, TagService

logger = get_logger(__name__)

router = APIRouter(prefix="/tags", tags=["tags"])


async def _get_tag_or_404(service: TagService, slug: str) -> Tag:
    tag = await service.get_by_slug(slug)
    if tag is None:
        raise HTTPException(status_code=404, detail="Tag not found")
    return tag


@router.get("", response_model=TagList)
async def list_tags(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(settings.default_page_size, ge=1, le=100, description="Items per page"),
    category: Optional[TagCategory] = Query(None, description="Filter by category"),
    featured: bool = Query(False, description="Only featured tags"),
    trending: bool = Query(False, description="Only trending tags"),
    popular: bool = Query(False, description="Only tags with an above-average score"),
    approved_only: bool = Query(True, description="Hide tags awaiting approval"),
    roots_only: bool = Query(False, description="Only top-level tags"),
    q: Optional[str] = Query(None, min_length=1, description="Search name and description"),
    db: AsyncSession = Depends(get_db),
) -> TagList:
    """List tags with filtering and pagination."""
    service = TagService(db)
    tags, total = await service.list_tags(
        category=category,
        featured=featured,
        trending=trending,
        popular=popular,
        approved_only=approved_only,
        roots_only=roots_only,
        q=q,
        page=page,
        page_size=page_size,
    )

    pages = (total + page_size - 1) // page_size if total > 0 else 1

    return TagList(
        items=[TagResponse.model_validate(tag) for tag in tags],
        total=total,
        page=page,
        page_size=page_size,
        pages=pages,
    )


@router.post("", response_model=TagResponse, status_code=201)
async def create_tag(
    request: TagCreate,
    db: AsyncSession = Depends(get_db),
) -> TagResponse:
    """Create a tag. Slug and level are derived when omitted."""
    service = TagService(db)

    try:
        tag = await service.create_tag(**request.model_dump())
        await db.commit()
    except TagError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail="Tag name or slug already exists")

    return TagResponse.model_validate(tag)


@router.post("/seed", response_model=SeedTagsResponse)
async def seed_tags(db: AsyncSession = Depends(get_db)) -> SeedTagsResponse:
    """Insert the predefined taxonomy. Existing tags are left alone."""
    service = TagService(db)
    created = await service.seed_default_tags()
    await db.commit()
    return SeedTagsResponse(created=created)


@router.get("/{slug}", response_model=TagDetail)
async def get_tag(
    slug: str,
    db: AsyncSession = Depends(get_db),
) -> TagDetail:
    """Get a tag with its ancestors and direct children."""
    service = TagService(db)
    tag = await _get_tag_or_404(service, slug)

    ancestors = await service.get_ancestors(tag)
    children = await service.get_children(tag)

    return TagDetail(
        **TagResponse.model_validate(tag).model_dump(),
        ancestors=[TagSummary.model_validate(t) for t in ancestors],
        children=[TagSummary.model_validate(t) for t in children],
    )


@router.get("/{slug}/children", response_model=list[TagResponse])
async def get_tag_children(
    slug: str,
    db: AsyncSession = Depends(get_db),
) -> list[TagResponse]:
    """Get the direct children of a tag."""
    service = TagService(db)
    tag = await _get_tag_or_404(service, slug)
    children = await service.get_children(tag)
    return [TagResponse.model_validate(t) for t in children]


@router.post("/{slug}/approve", response_model=TagResponse)
async def approve_tag(
    slug: str,
    request: TagApproveRequest,
    db: AsyncSession = Depends(get_db),
) -> TagResponse:
    """Approve a tag."""
    service = TagService(db)
    tag = await _get_tag_or_404(service, slug)

    await service.approve(tag, request.approved_by)
    await db.commit()

    return TagResponse.model_validate(tag)


@router.put("/{slug}/translations/{locale}", response_model=TagResponse)
async def set_tag_translation(
    slug: str,
    locale: str,
    request: TranslationUpdate,
    db: AsyncSession = Depends(get_db),
) -> TagResponse:
    """Merge a translation for one locale into the tag."""
    if request.name is None and request.description is None:
        raise HTTPException(status_code=400, detail="Nothing to translate")

    service = TagService(db)
    tag = await _get_tag_or_404(service, slug)

    await service.set_translation(
        tag,
        locale.lower(),
        name=request.name,
        description=request.description,
    )
    await db.commit()

    return TagResponse.model_validate(tag)
