"""Pydantic schemas for Tattoo API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.db.models.enums import (
    AssignmentType,
    BodyPlacement,
    ColorType,
    SizeCategory,
    TattooStatus,
    TattooStyle,
)
from app.schemas.tag import TagSummary


class ImageVariants(BaseModel):
    """Paths produced by the upload pipeline."""

    thumbnail: Optional[str] = None
    medium: Optional[str] = None
    large: Optional[str] = None
    original: Optional[str] = None
    webp: Optional[dict[str, str]] = None


class Dimensions(BaseModel):
    """Pixel size of the original image."""

    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    aspect_ratio: Optional[float] = Field(None, gt=0)


class CitySummary(BaseModel):
    """Summary of city info for artist response."""

    id: int
    name: str
    slug: str

    model_config = {"from_attributes": True}


class ArtistSummary(BaseModel):
    """Summary of the owning artist."""

    id: str
    stage_name: str
    slug: str
    user_full_name: Optional[str] = None
    city: Optional[CitySummary] = None


class TattooResponse(BaseModel):
    """Schema for a tattoo without relations."""

    id: str
    artist_id: str
    title: str
    slug: str
    description: Optional[str] = None
    status: TattooStatus
    published_at: Optional[datetime] = None
    tattoo_style: Optional[TattooStyle] = None
    body_placement: Optional[BodyPlacement] = None
    size_category: Optional[SizeCategory] = None
    color_type: Optional[ColorType] = None
    image_variants: dict = {}
    dimensions: dict = {}
    is_featured: bool
    is_portfolio_highlight: bool
    view_count: int
    like_count: int
    share_count: int
    engagement_score: float
    price_estimate: Optional[float] = None
    price_currency: str
    alt_text: Optional[dict[str, str]] = None
    search_keywords: Optional[list[str]] = None
    created_at: datetime
    updated_at: datetime

    # Computed values
    is_published: bool
    is_high_engagement: bool
    thumbnail_url: Optional[str] = None
    display_url: Optional[str] = None
    full_size_url: Optional[str] = None
    aspect_ratio: Optional[float] = None
    estimated_price_range: Optional[str] = None

    model_config = {"from_attributes": True}


class TattooTagResponse(BaseModel):
    """A tag attached to a tattoo, with its assignment metadata."""

    tag: TagSummary
    relevance_score: float
    is_primary: bool
    assignment_type: AssignmentType
    is_approved: bool


class TattooDetail(TattooResponse):
    """Schema for single tattoo detail response."""

    artist: Optional[ArtistSummary] = None
    tags: list[TattooTagResponse] = []


class TattooList(BaseModel):
    """Schema for paginated tattoo list response."""

    items: list[TattooResponse]
    total: int
    page: int
    page_size: int
    pages: int


class TattooCreate(BaseModel):
    """Request to create a draft tattoo."""

    artist_id: str
    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255, pattern=r"^[a-z0-9-]+$")
    description: Optional[str] = None
    image_variants: ImageVariants = ImageVariants()
    dimensions: Optional[Dimensions] = None
    original_filename: Optional[str] = None
    storage_path: Optional[str] = None
    file_size: Optional[int] = Field(None, ge=0)
    content_type: str = "image/jpeg"
    tattoo_style: Optional[TattooStyle] = None
    body_placement: Optional[BodyPlacement] = None
    size_category: Optional[SizeCategory] = None
    color_type: Optional[ColorType] = None
    price_estimate: Optional[float] = Field(None, ge=0)
    price_currency: Optional[str] = Field(None, min_length=3, max_length=3)
    search_keywords: Optional[list[str]] = None
    alt_text: Optional[dict[str, str]] = None
    is_featured: bool = False
    is_portfolio_highlight: bool = False


class AddTattooTagRequest(BaseModel):
    """Request to attach a tag to a tattoo."""

    tag_id: int
    relevance_score: float = Field(1.0, ge=0.0, le=1.0)
    is_primary: bool = False
    assignment_type: AssignmentType = AssignmentType.MANUAL


class AltTextUpdate(BaseModel):
    """Alt text for one locale."""

    text: str = Field(..., min_length=1, max_length=500)
