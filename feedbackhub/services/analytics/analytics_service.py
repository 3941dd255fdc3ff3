from datetime import timedelta
from typing import Any, Dict, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.core.database import utcnow
from feedbackhub.core.logger import logger
from feedbackhub.models.analytics.analytics_event import AnalyticsEvent
from feedbackhub.models.feedback.feedback_model import FeedbackItem
from feedbackhub.schemas.analytics.analytics_schema import AnalyticsSummary, DailyCount, TopFeedback, EventCount
from feedbackhub.utils.client_info import ClientInfo

TIMEFRAMES = {"7d": 7, "30d": 30, "90d": 90, "1y": 365}
DEFAULT_TIMEFRAME = "30d"


async def log_event(
    session: AsyncSession,
    website_id: int,
    event_type: str,
    event_data: Optional[Dict[str, Any]],
    client: ClientInfo,
) -> bool:
    """Append an analytics event in its own commit.

    Best effort: a failure is logged and rolled back, never raised, so the
    operation that triggered the event keeps its result.
    """
    try:
        session.add(AnalyticsEvent(
            website_id=website_id,
            event_type=event_type,
            event_data=event_data,
            user_agent=client.user_agent,
            ip_address=client.ip_address,
        ))
        await session.commit()
    except Exception:
        await session.rollback()
        logger.exception("Failed to log analytics event %s for website %s", event_type, website_id)
        return False
    return True


async def get_summary(session: AsyncSession, website_id: int, timeframe: str = DEFAULT_TIMEFRAME) -> AnalyticsSummary:
    if timeframe not in TIMEFRAMES:
        timeframe = DEFAULT_TIMEFRAME
    start = utcnow() - timedelta(days=TIMEFRAMES[timeframe])
    in_window = (FeedbackItem.website_id == website_id, FeedbackItem.created_at >= start)

    # Status / type breakdown
    breakdown = await session.execute(
        select(FeedbackItem.status, FeedbackItem.type, func.count())
        .where(*in_window)
        .group_by(FeedbackItem.status, FeedbackItem.type)
    )
    status_counts: Dict[str, int] = {}
    type_counts: Dict[str, int] = {}
    total = 0
    for status, feedback_type, count in breakdown:
        total += count
        status_counts[status.value] = status_counts.get(status.value, 0) + count
        type_counts[feedback_type.value] = type_counts.get(feedback_type.value, 0) + count

    # Daily counts
    day = func.date(FeedbackItem.created_at)
    daily = await session.execute(
        select(day.label("date"), func.count())
        .where(*in_window)
        .group_by(day)
        .order_by(day)
    )
    feedback_over_time = [DailyCount(date=d, count=c) for d, c in daily]

    # Top feedback by votes
    top = await session.execute(
        select(FeedbackItem)
        .where(*in_window)
        .order_by(FeedbackItem.upvotes.desc(), FeedbackItem.id.asc())
        .limit(10)
    )
    top_feedback = [
        TopFeedback(
            id=item.id,
            title=item.title,
            type=item.type.value,
            upvotes=item.upvotes,
            downvotes=item.downvotes,
            created_at=item.created_at,
        )
        for item in top.scalars()
    ]

    events = await session.execute(
        select(AnalyticsEvent.event_type, func.count())
        .where(AnalyticsEvent.website_id == website_id, AnalyticsEvent.created_at >= start)
        .group_by(AnalyticsEvent.event_type)
    )

    return AnalyticsSummary(
        timeframe=timeframe,
        total_feedback=total,
        status_breakdown=status_counts,
        type_breakdown=type_counts,
        feedback_over_time=feedback_over_time,
        top_feedback=top_feedback,
        events=[EventCount(type=t, count=c) for t, c in events],
    )
