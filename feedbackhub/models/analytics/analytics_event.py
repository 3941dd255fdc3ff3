from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, Index
from feedbackhub.core.database import Base, utcnow


class AnalyticsEvent(Base):
    __tablename__ = "analytics_events"

    id = Column(Integer, primary_key=True)
    website_id = Column(Integer, ForeignKey("websites.id", ondelete="CASCADE"), nullable=False)
    event_type = Column(String(64), nullable=False)  # feedback_submitted, vote_cast, ...
    event_data = Column(JSON)
    user_agent = Column(Text)
    ip_address = Column(String(64))
    created_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_events_website_type", "website_id", "event_type"),
        Index("ix_events_website_created", "website_id", "created_at"),
        Index("ix_events_type", "event_type"),
    )
