from datetime import datetime
from typing import Optional

from pydantic import Field

from feedbackhub.schemas.common import CamelModel


class CategoryCreate(CamelModel):
    website_id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=50, pattern=r"^[a-z0-9-]+$")
    description: Optional[str] = Field(None, max_length=500)
    color: Optional[str] = Field(None, pattern=r"^#[0-9a-fA-F]{6}$")
    sort_order: int = Field(0, ge=0)


class CategoryResponse(CamelModel):
    id: int
    website_id: int
    name: str
    slug: str
    description: Optional[str] = None
    color: Optional[str] = None
    is_active: bool
    sort_order: int
    created_at: datetime
