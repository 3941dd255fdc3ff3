import enum

from sqlalchemy import (
    Column, Integer, String, Text, Boolean, DateTime, ForeignKey, JSON, Enum, Index, CheckConstraint,
)
from sqlalchemy.orm import relationship
from feedbackhub.core.database import Base, utcnow


class FeedbackType(str, enum.Enum):
    bug = "bug"
    feature = "feature"
    improvement = "improvement"
    question = "question"
    compliment = "compliment"
    complaint = "complaint"
    other = "other"


class FeedbackStatus(str, enum.Enum):
    new = "new"
    in_review = "in_review"
    in_progress = "in_progress"
    resolved = "resolved"
    closed = "closed"
    spam = "spam"


class FeedbackPriority(str, enum.Enum):
    # declared in severity order, lowest first
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


def _enum_column(enum_cls, name):
    return Enum(enum_cls, name=name, native_enum=False, validate_strings=True, length=20)


class FeedbackItem(Base):
    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True)
    website_id = Column(Integer, ForeignKey("websites.id", ondelete="CASCADE"), nullable=False)
    category_id = Column(Integer, ForeignKey("feedback_categories.id", ondelete="SET NULL"))
    type = Column(_enum_column(FeedbackType, "feedback_type"), nullable=False)
    status = Column(_enum_column(FeedbackStatus, "feedback_status"), nullable=False, default=FeedbackStatus.new)
    priority = Column(_enum_column(FeedbackPriority, "feedback_priority"), nullable=False, default=FeedbackPriority.medium)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    email = Column(String(320))
    name = Column(String(100))
    url = Column(Text)  # page the feedback was submitted from
    user_agent = Column(Text)
    ip_address = Column(String(64))
    # "metadata" is reserved on declarative classes
    extra_metadata = Column("metadata", JSON)
    is_public = Column(Boolean, nullable=False, default=False)
    upvotes = Column(Integer, nullable=False, default=0)
    downvotes = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    website = relationship("Website", back_populates="feedback_items")
    category = relationship("Category")
    votes = relationship("Vote", back_populates="feedback", cascade="all, delete-orphan", passive_deletes=True)
    comments = relationship("Comment", back_populates="feedback", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("upvotes >= 0", name="ck_feedback_upvotes_non_negative"),
        CheckConstraint("downvotes >= 0", name="ck_feedback_downvotes_non_negative"),
        Index("ix_feedback_website_status", "website_id", "status"),
        Index("ix_feedback_website_type", "website_id", "type"),
        Index("ix_feedback_website_priority", "website_id", "priority"),
        Index("ix_feedback_website_created", "website_id", "created_at"),
        Index("ix_feedback_website_ip_created", "website_id", "ip_address", "created_at"),
        Index("ix_feedback_category_id", "category_id"),
        Index("ix_feedback_email", "email"),
        Index("ix_feedback_is_public", "is_public"),
    )
