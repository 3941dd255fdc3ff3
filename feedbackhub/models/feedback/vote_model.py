import enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum, UniqueConstraint, CheckConstraint, Index
from sqlalchemy.orm import relationship
from feedbackhub.core.database import Base, utcnow


class VoteType(str, enum.Enum):
    up = "up"
    down = "down"


class Vote(Base):
    __tablename__ = "feedback_votes"

    id = Column(Integer, primary_key=True)
    feedback_id = Column(Integer, ForeignKey("feedback.id", ondelete="CASCADE"), nullable=False)
    # exactly one of these identifies the voter
    voter_email = Column(String(320))
    voter_ip = Column(String(64))
    vote_type = Column(Enum(VoteType, name="vote_type", native_enum=False, validate_strings=True, length=4), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    feedback = relationship("FeedbackItem", back_populates="votes")

    __table_args__ = (
        UniqueConstraint("feedback_id", "voter_email", name="uq_vote_feedback_email"),
        UniqueConstraint("feedback_id", "voter_ip", name="uq_vote_feedback_ip"),
        CheckConstraint(
            "(voter_email IS NULL) <> (voter_ip IS NULL)",
            name="ck_vote_single_voter_identity",
        ),
        Index("ix_votes_feedback_id", "feedback_id"),
    )
