from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from feedbackhub.core.config import settings
from feedbackhub.models.admin.admin_user import AdminRole
from feedbackhub.schemas.common import CamelModel


class AdminLogin(CamelModel):
    email: EmailStr
    password: str


class AdminUserCreate(CamelModel):
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=settings.PASSWORD_MIN_LENGTH)
    role: AdminRole = AdminRole.viewer


class AdminUserStatusUpdate(CamelModel):
    is_active: bool


class AdminUserOut(CamelModel):
    id: int
    email: str
    name: str
    role: AdminRole
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: datetime
