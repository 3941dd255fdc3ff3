from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.core.database import get_db
from feedbackhub.dependencies.auth import require_role
from feedbackhub.models.admin.admin_user import AdminRole
from feedbackhub.models.feedback.feedback_model import FeedbackStatus, FeedbackType
from feedbackhub.schemas.common import ApiResponse, MessageResponse
from feedbackhub.schemas.feedback.feedback_schema import (
    FeedbackUpdate,
    FeedbackStatusUpdate,
    FeedbackFilters,
    FeedbackSort,
    FeedbackListItem,
    FeedbackDetail,
)
from feedbackhub.services.feedback import feedback_service

router = APIRouter(prefix="/admin/api/feedback", tags=["Admin Feedback"])


@router.get("", response_model=ApiResponse[List[FeedbackListItem]],
            dependencies=[Depends(require_role(AdminRole.viewer))])
async def list_all_feedback(
    website_id: Optional[int] = Query(None, alias="websiteId", gt=0),
    status: Optional[FeedbackStatus] = Query(None),
    type: Optional[FeedbackType] = Query(None),
    category: Optional[str] = Query(None),
    public: bool = Query(False),
    sort: FeedbackSort = Query(FeedbackSort.newest),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_db)
):
    """Feedback across all websites (category filter needs websiteId)"""
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


@router.get("/{feedback_id}", response_model=ApiResponse[FeedbackDetail],
            dependencies=[Depends(require_role(AdminRole.viewer))])
async def get_feedback(feedback_id: int, session: AsyncSession = Depends(get_db)):
    return ApiResponse(data=await feedback_service.get_feedback_detail(session, feedback_id))


@router.patch("/{feedback_id}/status", response_model=MessageResponse,
              dependencies=[Depends(require_role(AdminRole.moderator))])
async def update_status(
    feedback_id: int,
    data: FeedbackStatusUpdate,
    session: AsyncSession = Depends(get_db)
):
    feedback = await feedback_service.get_feedback(session, feedback_id)
    await feedback_service.update_feedback(session, feedback, FeedbackUpdate(status=data.status))
    return MessageResponse(message="Status updated successfully")


@router.patch("/{feedback_id}", response_model=ApiResponse[FeedbackDetail],
              dependencies=[Depends(require_role(AdminRole.moderator))])
async def update_feedback(
    feedback_id: int,
    data: FeedbackUpdate,
    session: AsyncSession = Depends(get_db)
):
    feedback = await feedback_service.get_feedback(session, feedback_id)
    await feedback_service.update_feedback(session, feedback, data)
    return ApiResponse(data=await feedback_service.get_feedback_detail(session, feedback_id))


@router.delete("/{feedback_id}", response_model=MessageResponse,
               dependencies=[Depends(require_role(AdminRole.moderator))])
async def delete_feedback(feedback_id: int, session: AsyncSession = Depends(get_db)):
    feedback = await feedback_service.get_feedback(session, feedback_id)
    await feedback_service.delete_feedback(session, feedback)
    return MessageResponse(message="Feedback deleted successfully")
