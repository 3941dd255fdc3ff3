from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.core.database import get_db
from feedbackhub.dependencies.auth import require_api_key
from feedbackhub.schemas.category.category_schema import CategoryCreate, CategoryResponse
from feedbackhub.schemas.common import ApiResponse
from feedbackhub.services.category import category_service
from feedbackhub.services.website.website_service import verify_website

router = APIRouter(
    prefix="/categories",
    tags=["categories"]
)


@router.get("", response_model=ApiResponse[List[CategoryResponse]])
async def list_categories(
    website_id: int = Query(..., alias="websiteId", gt=0),
    api_key: str = Depends(require_api_key),
    session: AsyncSession = Depends(get_db)
):
    await verify_website(session, website_id, api_key)
    categories = await category_service.list_active_categories(session, website_id)
    return ApiResponse(data=[CategoryResponse.model_validate(c) for c in categories])


@router.post("", response_model=ApiResponse[CategoryResponse], status_code=201)
async def create_category(
    data: CategoryCreate,
    api_key: str = Depends(require_api_key),
    session: AsyncSession = Depends(get_db)
):
    await verify_website(session, data.website_id, api_key)
    category = await category_service.create_category(session, data)
    return ApiResponse(data=CategoryResponse.model_validate(category))
