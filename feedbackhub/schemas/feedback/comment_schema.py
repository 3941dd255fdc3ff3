from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from feedbackhub.schemas.common import CamelModel


class CommentCreate(CamelModel):
    content: str = Field(..., min_length=1, max_length=2000)
    author_name: Optional[str] = Field(None, min_length=1, max_length=100)
    author_email: Optional[EmailStr] = None
    is_internal: bool = False
    is_from_admin: bool = False


class CommentResponse(CamelModel):
    id: int
    feedback_id: int
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    content: str
    is_internal: bool
    is_from_admin: bool
    created_at: datetime
