from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.core.database import get_db
from feedbackhub.dependencies.auth import require_role
from feedbackhub.models.admin.admin_user import AdminRole
from feedbackhub.schemas.common import ApiResponse, MessageResponse
from feedbackhub.schemas.website.website_schema import (
    WebsiteCreate,
    WebsiteUpdate,
    WebsiteResponse,
    WebsiteWithKeyResponse,
)
from feedbackhub.services.website import website_service

router = APIRouter(prefix="/admin/api/websites", tags=["Admin Websites"])


@router.get("", response_model=ApiResponse[List[WebsiteResponse]],
            dependencies=[Depends(require_role(AdminRole.viewer))])
async def list_websites(session: AsyncSession = Depends(get_db)):
    websites = await website_service.list_websites(session)
    return ApiResponse(data=[WebsiteResponse.model_validate(w) for w in websites])


@router.post("", response_model=ApiResponse[WebsiteWithKeyResponse], status_code=201,
             dependencies=[Depends(require_role(AdminRole.admin))])
async def create_website(data: WebsiteCreate, session: AsyncSession = Depends(get_db)):
    website, api_key = await website_service.register_website(session, data)
    return ApiResponse(data=WebsiteWithKeyResponse.from_website(website, api_key))


@router.patch("/{website_id}", response_model=ApiResponse[WebsiteResponse],
              dependencies=[Depends(require_role(AdminRole.admin))])
async def update_website(website_id: int, data: WebsiteUpdate, session: AsyncSession = Depends(get_db)):
    website = await website_service.update_website(session, website_id, data)
    return ApiResponse(data=WebsiteResponse.model_validate(website))


@router.post("/{website_id}/rotate-key", response_model=ApiResponse[WebsiteWithKeyResponse],
             dependencies=[Depends(require_role(AdminRole.admin))])
async def rotate_key(website_id: int, session: AsyncSession = Depends(get_db)):
    website, api_key = await website_service.rotate_api_key(session, website_id)
    return ApiResponse(data=WebsiteWithKeyResponse.from_website(website, api_key))


@router.delete("/{website_id}", response_model=MessageResponse,
               dependencies=[Depends(require_role(AdminRole.admin))])
async def delete_website(website_id: int, session: AsyncSession = Depends(get_db)):
    await website_service.delete_website(session, website_id)
    return MessageResponse(message="Website deleted successfully")
