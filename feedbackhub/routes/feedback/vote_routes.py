from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.core.database import get_db
from feedbackhub.core.errors import ValidationError
from feedbackhub.models.feedback.feedback_model import FeedbackItem
from feedbackhub.routes.feedback.feedback_routes import get_authorized_feedback
from feedbackhub.schemas.common import ApiResponse
from feedbackhub.schemas.feedback.vote_schema import VoteCreate, VoteCounts, resolve_voter, parse_voter_email
from feedbackhub.services.feedback import vote_service
from feedbackhub.utils.client_info import get_client_info

router = APIRouter(
    prefix="/feedback",
    tags=["votes"]
)


@router.post("/{feedback_id}/vote", response_model=ApiResponse[VoteCounts])
async def cast_vote(
    data: VoteCreate,
    request: Request,
    feedback: FeedbackItem = Depends(get_authorized_feedback),
    session: AsyncSession = Depends(get_db)
):
    """Cast or change a vote; repeating the same vote changes nothing"""
    client = get_client_info(request)
    voter = resolve_voter(data.voter_email, client.ip_address)
    counts = await vote_service.cast_vote(session, feedback, data.vote_type, voter, client)
    return ApiResponse(data=counts)


@router.delete("/{feedback_id}/vote", response_model=ApiResponse[VoteCounts])
async def remove_vote(
    request: Request,
    x_voter_email: Optional[str] = Header(None),
    feedback: FeedbackItem = Depends(get_authorized_feedback),
    session: AsyncSession = Depends(get_db)
):
    """Remove the caller's vote"""
    try:
        voter_email = parse_voter_email(x_voter_email)
    except PydanticValidationError as exc:
        raise ValidationError("Invalid voter email", details=exc.errors(include_url=False))

    voter = resolve_voter(voter_email, get_client_info(request).ip_address)
    counts = await vote_service.remove_vote(session, feedback, voter)
    return ApiResponse(data=counts)
