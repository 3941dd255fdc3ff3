from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl
from pydantic.alias_generators import to_camel


class _SettingsModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class RateLimitSettings(_SettingsModel):
    max_submissions: int = Field(..., ge=1, le=1000)
    window_minutes: int = Field(..., ge=1, le=1440)


class WebsiteSettings(_SettingsModel):
    rate_limit: Optional[RateLimitSettings] = None
    allowed_origins: List[HttpUrl] = Field(default_factory=list)
    moderation_required: bool = False
    email_notifications: bool = True

