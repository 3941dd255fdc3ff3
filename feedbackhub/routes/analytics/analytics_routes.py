from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.core.database import get_db
from feedbackhub.dependencies.auth import require_api_key
from feedbackhub.schemas.analytics.analytics_schema import AnalyticsSummary
from feedbackhub.schemas.common import ApiResponse
from feedbackhub.services.analytics import analytics_service
from feedbackhub.services.website.website_service import verify_website

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("", response_model=ApiResponse[AnalyticsSummary])
async def get_analytics(
    website_id: int = Query(..., alias="websiteId", gt=0),
    timeframe: str = Query(analytics_service.DEFAULT_TIMEFRAME),
    api_key: str = Depends(require_api_key),
    session: AsyncSession = Depends(get_db)
):
    """Feedback totals, breakdowns and top items for 7d, 30d, 90d or 1y"""
    await verify_website(session, website_id, api_key)
    summary = await analytics_service.get_summary(session, website_id, timeframe)
    return ApiResponse(data=summary)
