from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from feedbackhub.core.database import Base, utcnow


class Comment(Base):
    __tablename__ = "feedback_comments"

    id = Column(Integer, primary_key=True)
    feedback_id = Column(Integer, ForeignKey("feedback.id", ondelete="CASCADE"), nullable=False)
    author_name = Column(String(100))
    author_email = Column(String(320))
    content = Column(Text, nullable=False)
    is_internal = Column(Boolean, nullable=False, default=False)  # hidden from public listings
    is_from_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    feedback = relationship("FeedbackItem", back_populates="comments")

    __table_args__ = (
        Index("ix_comments_feedback_internal", "feedback_id", "is_internal"),
        Index("ix_comments_feedback_created", "feedback_id", "created_at"),
    )
