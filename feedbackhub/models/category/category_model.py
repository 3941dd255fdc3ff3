from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from feedbackhub.core.database import Base, utcnow


class Category(Base):
    __tablename__ = "feedback_categories"

    id = Column(Integer, primary_key=True)
    website_id = Column(Integer, ForeignKey("websites.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(100), nullable=False)
    slug = Column(String(50), nullable=False)
    description = Column(Text)
    color = Column(String(7))  # hex, e.g. "#3b82f6"
    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    website = relationship("Website", back_populates="categories")

    __table_args__ = (
        UniqueConstraint("website_id", "slug", name="uq_category_website_slug"),
        Index("ix_categories_website_active", "website_id", "is_active"),
        Index("ix_categories_website_sort", "website_id", "sort_order"),
    )
