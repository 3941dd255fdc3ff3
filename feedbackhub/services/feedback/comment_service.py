from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.models.feedback.comment_model import Comment
from feedbackhub.models.feedback.feedback_model import FeedbackItem
from feedbackhub.schemas.feedback.comment_schema import CommentCreate


async def list_comments(session: AsyncSession, feedback: FeedbackItem, include_internal: bool = False) -> List[Comment]:
    query = select(Comment).where(Comment.feedback_id == feedback.id)
    if not include_internal:
        query = query.where(Comment.is_internal.is_(False))
    query = query.order_by(Comment.created_at.desc(), Comment.id.desc())

    result = await session.execute(query)
    return result.scalars().all()


async def add_comment(session: AsyncSession, feedback: FeedbackItem, data: CommentCreate) -> Comment:
    comment = Comment(feedback_id=feedback.id, **data.model_dump())
    session.add(comment)
    await session.commit()
    await session.refresh(comment)
    return comment
