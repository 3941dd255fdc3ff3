from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.core.database import get_db
from feedbackhub.dependencies.auth import require_admin_key
from feedbackhub.schemas.common import ApiResponse
from feedbackhub.schemas.website.website_schema import WebsiteCreate, WebsiteResponse, WebsiteWithKeyResponse
from feedbackhub.services.website import website_service

router = APIRouter(
    prefix="/websites",
    tags=["websites"]
)


@router.post("", response_model=ApiResponse[WebsiteWithKeyResponse], status_code=201)
async def register_website(
    data: WebsiteCreate,
    session: AsyncSession = Depends(get_db)
):
    """Register a website. The API key is only returned here."""
    website, api_key = await website_service.register_website(session, data)
    return ApiResponse(data=WebsiteWithKeyResponse.from_website(website, api_key))


@router.get("", response_model=ApiResponse[List[WebsiteResponse]], dependencies=[Depends(require_admin_key)])
async def list_websites(session: AsyncSession = Depends(get_db)):
    websites = await website_service.list_websites(session)
    return ApiResponse(data=[WebsiteResponse.model_validate(w) for w in websites])
