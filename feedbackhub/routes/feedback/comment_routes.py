from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.core.database import get_db
from feedbackhub.models.feedback.feedback_model import FeedbackItem
from feedbackhub.routes.feedback.feedback_routes import get_authorized_feedback
from feedbackhub.schemas.common import ApiResponse
from feedbackhub.schemas.feedback.comment_schema import CommentCreate, CommentResponse
from feedbackhub.services.feedback import comment_service

router = APIRouter(
    prefix="/feedback",
    tags=["comments"]
)


@router.get("/{feedback_id}/comments", response_model=ApiResponse[List[CommentResponse]])
async def list_comments(
    include_internal: bool = Query(False, alias="includeInternal"),
    feedback: FeedbackItem = Depends(get_authorized_feedback),
    session: AsyncSession = Depends(get_db)
):
    comments = await comment_service.list_comments(session, feedback, include_internal)
    return ApiResponse(data=[CommentResponse.model_validate(c) for c in comments])


@router.post("/{feedback_id}/comments", response_model=ApiResponse[CommentResponse], status_code=201)
async def add_comment(
    data: CommentCreate,
    feedback: FeedbackItem = Depends(get_authorized_feedback),
    session: AsyncSession = Depends(get_db)
):
    comment = await comment_service.add_comment(session, feedback, data)
    return ApiResponse(data=CommentResponse.model_validate(comment))
