from datetime import datetime
from typing import Optional

from pydantic import Field

from feedbackhub.schemas.common import CamelModel
from feedbackhub.schemas.website.website_settings import WebsiteSettings


class WebsiteCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    domain: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=500)
    settings: Optional[WebsiteSettings] = None


class WebsiteUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=500)
    is_active: Optional[bool] = None
    settings: Optional[WebsiteSettings] = None


class WebsiteResponse(CamelModel):
    id: int
    name: str
    domain: str
    description: Optional[str] = None
    is_active: bool
    api_key_prefix: str
    settings: WebsiteSettings = Field(validation_alias="config")
    created_at: datetime
    updated_at: datetime


class WebsiteWithKeyResponse(WebsiteResponse):
    # plaintext key, only returned on creation and rotation
    api_key: str

    @classmethod
    def from_website(cls, website, api_key: str) -> "WebsiteWithKeyResponse":
        return cls(**WebsiteResponse.model_validate(website).model_dump(), api_key=api_key)
