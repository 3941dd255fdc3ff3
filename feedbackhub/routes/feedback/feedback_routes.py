from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.core.database import get_db
from feedbackhub.dependencies.auth import require_api_key
from feedbackhub.models.feedback.feedback_model import FeedbackItem, FeedbackStatus, FeedbackType
from feedbackhub.schemas.common import ApiResponse, MessageResponse
from feedbackhub.schemas.feedback.feedback_schema import (
    FeedbackCreate,
    FeedbackUpdate,
    FeedbackFilters,
    FeedbackSort,
    FeedbackSubmitted,
    FeedbackListItem,
    FeedbackDetail,
)
from feedbackhub.services.feedback import feedback_service
from feedbackhub.services.website.website_service import verify_website
from feedbackhub.utils.client_info import get_client_info

router = APIRouter(
    prefix="/feedback",
    tags=["feedback"]
)


async def get_authorized_feedback(
    feedback_id: int,
    api_key: str = Depends(require_api_key),
    session: AsyncSession = Depends(get_db),
) -> FeedbackItem:
    """Load a feedback item and check the caller's key belongs to its website."""
    feedback = await feedback_service.get_feedback(session, feedback_id)
    await verify_website(session, feedback.website_id, api_key)
    return feedback


@router.post("", response_model=ApiResponse[FeedbackSubmitted], status_code=201)
async def submit_feedback(
    data: FeedbackCreate,
    request: Request,
    api_key: str = Depends(require_api_key),
    session: AsyncSession = Depends(get_db)
):
    """Submit feedback for a website"""
    website = await verify_website(session, data.website_id, api_key)
    submitted = await feedback_service.submit_feedback(session, website, data, get_client_info(request))
    return ApiResponse(data=submitted)


@router.get("", response_model=ApiResponse[List[FeedbackListItem]])
async def list_feedback(
    website_id: int = Query(..., alias="websiteId", gt=0),
    status: Optional[FeedbackStatus] = Query(None),
    type: Optional[FeedbackType] = Query(None),
    category: Optional[str] = Query(None),
    public: bool = Query(False),
    sort: FeedbackSort = Query(FeedbackSort.newest),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    api_key: str = Depends(require_api_key),
    session: AsyncSession = Depends(get_db)
):
    """List a website's feedback with filters, sorting and pagination"""
    await verify_website(session, website_id, api_key)
    filters = FeedbackFilters(
        website_id=website_id,
        status=status,
        type=type,
        category=category,
        public_only=public,
        sort=sort,
        limit=limit,
        offset=offset,
    )
    items, pagination = await feedback_service.list_feedback(session, filters)
    return ApiResponse(data=items, pagination=pagination)


@router.get("/{feedback_id}", response_model=ApiResponse[FeedbackDetail])
async def get_single_feedback(
    feedback: FeedbackItem = Depends(get_authorized_feedback),
    session: AsyncSession = Depends(get_db)
):
    """Get a specific feedback item"""
    return ApiResponse(data=await feedback_service.get_feedback_detail(session, feedback.id))


@router.patch("/{feedback_id}", response_model=ApiResponse[FeedbackDetail])
async def update_existing_feedback(
    data: FeedbackUpdate,
    feedback: FeedbackItem = Depends(get_authorized_feedback),
    session: AsyncSession = Depends(get_db)
):
    """Update status, priority, visibility or category"""
    await feedback_service.update_feedback(session, feedback, data)
    return ApiResponse(data=await feedback_service.get_feedback_detail(session, feedback.id))


@router.delete("/{feedback_id}", response_model=MessageResponse)
async def delete_existing_feedback(
    feedback: FeedbackItem = Depends(get_authorized_feedback),
    session: AsyncSession = Depends(get_db)
):
    """Delete a feedback item with its votes and comments"""
    await feedback_service.delete_feedback(session, feedback)
    return MessageResponse(message="Feedback deleted successfully")
