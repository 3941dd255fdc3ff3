from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import EmailStr, Field, HttpUrl

from feedbackhub.models.feedback.feedback_model import FeedbackType, FeedbackStatus, FeedbackPriority
from feedbackhub.schemas.common import CamelModel


class FeedbackSort(str, Enum):
    newest = "newest"
    oldest = "oldest"
    priority = "priority"
    upvotes = "upvotes"


class FeedbackCreate(CamelModel):
    website_id: int = Field(..., gt=0)
    category_id: Optional[int] = Field(None, gt=0)
    type: FeedbackType
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    url: Optional[HttpUrl] = None
    metadata: Optional[Dict[str, Any]] = None


class FeedbackUpdate(CamelModel):
    status: Optional[FeedbackStatus] = None
    priority: Optional[FeedbackPriority] = None
    is_public: Optional[bool] = None
    category_id: Optional[int] = Field(None, gt=0)


class FeedbackStatusUpdate(CamelModel):
    status: FeedbackStatus


class FeedbackFilters(CamelModel):
    """Query planner input. Every set field narrows the result (AND)."""

    website_id: Optional[int] = None
    status: Optional[FeedbackStatus] = None
    type: Optional[FeedbackType] = None
    category: Optional[str] = None
    public_only: bool = False
    sort: FeedbackSort = FeedbackSort.newest
    limit: int = Field(10, ge=1, le=100)
    offset: int = Field(0, ge=0)


class FeedbackSubmitted(CamelModel):
    id: int
    status: FeedbackStatus
    created_at: datetime


class FeedbackListItem(CamelModel):
    id: int
    website_id: int
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    category_color: Optional[str] = None
    type: FeedbackType
    status: FeedbackStatus
    priority: FeedbackPriority
    title: str
    description: str
    email: Optional[str] = None
    name: Optional[str] = None
    url: Optional[str] = None
    is_public: bool
    upvotes: int
    downvotes: int
    created_at: datetime
    updated_at: datetime


class FeedbackDetail(FeedbackListItem):
    user_agent: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = Field(None, validation_alias="extra_metadata")
