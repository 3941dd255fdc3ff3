from datetime import date, datetime
from typing import Dict, List

from feedbackhub.schemas.common import CamelModel


class DailyCount(CamelModel):
    date: date
    count: int


class TopFeedback(CamelModel):
    id: int
    title: str
    type: str
    upvotes: int
    downvotes: int
    created_at: datetime


class EventCount(CamelModel):
    type: str
    count: int


class AnalyticsSummary(CamelModel):
    timeframe: str
    total_feedback: int
    status_breakdown: Dict[str, int]
    type_breakdown: Dict[str, int]
    feedback_over_time: List[DailyCount]
    top_feedback: List[TopFeedback]
    events: List[EventCount]
