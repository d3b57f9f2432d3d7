"""Pydantic schemas for Tag API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.db.models.enums import TagCategory


class TagSummary(BaseModel):
    """Minimal tag info embedded in other responses."""

    id: int
    name: str
    slug: str
    category: TagCategory
    display_name: str

    model_config = {"from_attributes": True}


class TagResponse(BaseModel):
    """Schema for a tag."""

    id: int
    name: str
    slug: str
    description: Optional[str] = None
    category: TagCategory
    parent_tag_id: Optional[int] = None
    level: int
    color_code: Optional[str] = None
    icon_name: Optional[str] = None
    display_order: int
    usage_count: int
    is_featured: bool
    is_trending: bool
    popularity_score: float
    requires_approval: bool
    is_approved: bool
    created_by: Optional[str] = None
    approved_by: Optional[str] = None
    translations: Optional[dict[str, dict[str, str]]] = None
    created_at: datetime
    updated_at: datetime

    # Computed values
    display_name: str
    is_hierarchical: bool
    is_popular: bool

    model_config = {"from_attributes": True}


class TagDetail(TagResponse):
    """Schema for a tag with its position in the hierarchy."""

    ancestors: list[TagSummary] = []
    children: list[TagSummary] = []


class TagList(BaseModel):
    """Schema for paginated tag list response."""

    items: list[TagResponse]
    total: int
    page: int
    page_size: int
    pages: int


class TagCreate(BaseModel):
    """Request to create a tag."""

    name: str = Field(..., min_length=1, max_length=100)
    category: TagCategory
    slug: Optional[str] = Field(None, min_length=1, max_length=120, pattern=r"^[a-z0-9-]+$")
    description: Optional[str] = None
    parent_tag_id: Optional[int] = None
    level: Optional[int] = Field(None, ge=0)
    display_order: int = 0
    is_featured: bool = False
    is_trending: bool = False
    requires_approval: bool = False
    created_by: Optional[str] = None
    translations: Optional[dict[str, dict[str, str]]] = None
    color_code: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    icon_name: Optional[str] = Field(None, max_length=64)


class TagApproveRequest(BaseModel):
    """Request to approve a tag."""

    approved_by: str = Field(..., min_length=1, max_length=255)


class TranslationUpdate(BaseModel):
    """Partial translation for one locale; omitted fields are kept."""

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None


class SeedTagsResponse(BaseModel):
    """Response after seeding the default taxonomy."""

    created: int
