import math
from datetime import timedelta
from typing import List, Optional, Tuple

from sqlalchemy import select, func, case
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.core.database import utcnow
from feedbackhub.core.errors import NotFound, RateLimited, ValidationError
from feedbackhub.core.logger import logger
from feedbackhub.models.category.category_model import Category
from feedbackhub.models.feedback.feedback_model import FeedbackItem, FeedbackStatus, FeedbackPriority
from feedbackhub.models.website.website_model import Website
from feedbackhub.schemas.common import Pagination
from feedbackhub.schemas.feedback.feedback_schema import (
    FeedbackCreate,
    FeedbackUpdate,
    FeedbackFilters,
    FeedbackSort,
    FeedbackSubmitted,
    FeedbackListItem,
    FeedbackDetail,
)
from feedbackhub.services.analytics import analytics_service
from feedbackhub.utils.client_info import ClientInfo

PRIORITY_RANK = case(
    {
        FeedbackPriority.low.value: 0,
        FeedbackPriority.medium.value: 1,
        FeedbackPriority.high.value: 2,
        FeedbackPriority.urgent.value: 3,
    },
    value=FeedbackItem.priority,
    else_=-1,
)

SORT_ORDERS = {
    FeedbackSort.newest: (FeedbackItem.created_at.desc(), FeedbackItem.id.desc()),
    FeedbackSort.oldest: (FeedbackItem.created_at.asc(), FeedbackItem.id.asc()),
    FeedbackSort.priority: (PRIORITY_RANK.desc(), FeedbackItem.id.desc()),
    FeedbackSort.upvotes: (FeedbackItem.upvotes.desc(), FeedbackItem.id.desc()),
}


# Submission

async def _ensure_category_belongs(session: AsyncSession, website_id: int, category_id: Optional[int]) -> None:
    if category_id is None:
        return
    category = await session.get(Category, category_id)
    if category is None or category.website_id != website_id:
        raise ValidationError("Invalid request data", details=[{
            "loc": ["body", "categoryId"],
            "msg": "Category does not belong to this website",
        }])


async def count_recent_submissions(session: AsyncSession, website_id: int, ip_address: str, window_minutes: int) -> int:
    window_start = utcnow() - timedelta(minutes=window_minutes)
    return await session.scalar(
        select(func.count())
        .select_from(FeedbackItem)
        .where(
            FeedbackItem.website_id == website_id,
            FeedbackItem.ip_address == ip_address,
            FeedbackItem.created_at > window_start,
        )
    )


async def enforce_rate_limit(session: AsyncSession, website: Website, ip_address: str) -> None:
    """Reject the submission when the website's per-IP window is full.

    Check-then-insert is not serialized: two concurrent submissions from the
    same IP may both pass.
    """
    rate_limit = website.config.rate_limit
    if rate_limit is None:
        return
    recent = await count_recent_submissions(session, website.id, ip_address, rate_limit.window_minutes)
    if recent >= rate_limit.max_submissions:
        logger.info("Rate limit hit for website %s from %s (%s in %s min)",
                    website.id, ip_address, recent, rate_limit.window_minutes)
        raise RateLimited()


async def submit_feedback(
    session: AsyncSession,
    website: Website,
    data: FeedbackCreate,
    client: ClientInfo,
) -> FeedbackSubmitted:
    await _ensure_category_belongs(session, website.id, data.category_id)
    await enforce_rate_limit(session, website, client.ip_address)

    feedback = FeedbackItem(
        website_id=website.id,
        category_id=data.category_id,
        type=data.type,
        status=FeedbackStatus.new,
        priority=FeedbackPriority.medium,
        title=data.title,
        description=data.description,
        email=data.email,
        name=data.name,
        url=str(data.url) if data.url is not None else None,
        user_agent=client.user_agent,
        ip_address=client.ip_address,
        extra_metadata=data.metadata,
        is_public=False,
        upvotes=0,
        downvotes=0,
    )
    session.add(feedback)
    await session.commit()
    await session.refresh(feedback)

    # snapshot before the analytics commit, which may roll back and expire the instance
    submitted = FeedbackSubmitted.model_validate(feedback)
    logger.info("Feedback %s submitted to website %s", submitted.id, website.id)

    await analytics_service.log_event(
        session,
        website.id,
        "feedback_submitted",
        {
            "feedbackId": submitted.id,
            "type": data.type.value,
            "hasEmail": bool(data.email),
            "hasCategory": bool(data.category_id),
        },
        client,
    )
    return submitted


# Query planner

async def resolve_category_slug(session: AsyncSession, website_id: int, slug: str) -> Optional[int]:
    return await session.scalar(
        select(Category.id).where(Category.website_id == website_id, Category.slug == slug)
    )


async def build_conditions(session: AsyncSession, filters: FeedbackFilters) -> list:
    conditions = []
    if filters.website_id is not None:
        conditions.append(FeedbackItem.website_id == filters.website_id)
    if filters.status:
        conditions.append(FeedbackItem.status == filters.status)
    if filters.type:
        conditions.append(FeedbackItem.type == filters.type)
    if filters.public_only:
        conditions.append(FeedbackItem.is_public.is_(True))
    if filters.category and filters.website_id is not None:
        category_id = await resolve_category_slug(session, filters.website_id, filters.category)
        # unknown slug: the filter is dropped, not an error
        if category_id is not None:
            conditions.append(FeedbackItem.category_id == category_id)
    return conditions


def _to_list_item(item: FeedbackItem, category_name: Optional[str], category_color: Optional[str], schema=FeedbackListItem):
    return schema.model_validate(item).model_copy(
        update={"category_name": category_name, "category_color": category_color}
    )


async def list_feedback(session: AsyncSession, filters: FeedbackFilters) -> Tuple[List[FeedbackListItem], Pagination]:
    conditions = await build_conditions(session, filters)
    total = await session.scalar(select(func.count()).select_from(FeedbackItem).where(*conditions))

    query = (
        select(FeedbackItem, Category.name, Category.color)
        .outerjoin(Category, FeedbackItem.category_id == Category.id)
        .where(*conditions)
        .order_by(*SORT_ORDERS[filters.sort])
        .offset(filters.offset)
        .limit(filters.limit)
    )
    result = await session.execute(query)
    items = [_to_list_item(item, name, color) for item, name, color in result.all()]

    pagination = Pagination(
        total=total,
        page=filters.offset // filters.limit + 1,
        limit=filters.limit,
        total_pages=math.ceil(total / filters.limit),
    )
    return items, pagination


# Single item

async def get_feedback(session: AsyncSession, feedback_id: int) -> FeedbackItem:
    feedback = await session.get(FeedbackItem, feedback_id)
    if not feedback:
        raise NotFound("Feedback not found")
    return feedback


async def get_feedback_detail(session: AsyncSession, feedback_id: int) -> FeedbackDetail:
    result = await session.execute(
        select(FeedbackItem, Category.name, Category.color)
        .outerjoin(Category, FeedbackItem.category_id == Category.id)
        .where(FeedbackItem.id == feedback_id)
    )
    row = result.first()
    if row is None:
        raise NotFound("Feedback not found")
    item, name, color = row
    return _to_list_item(item, name, color, schema=FeedbackDetail)


async def update_feedback(session: AsyncSession, feedback: FeedbackItem, data: FeedbackUpdate) -> FeedbackItem:
    # explicit nulls only make sense for the optional category
    update_data = {
        field: value for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field == "category_id"
    }
    if "category_id" in update_data:
        await _ensure_category_belongs(session, feedback.website_id, update_data["category_id"])

    for field, value in update_data.items():
        setattr(feedback, field, value)

    await session.commit()
    await session.refresh(feedback)
    return feedback


async def delete_feedback(session: AsyncSession, feedback: FeedbackItem) -> None:
    feedback_id = feedback.id
    await session.delete(feedback)
    await session.commit()
    logger.info("Deleted feedback %s", feedback_id)
