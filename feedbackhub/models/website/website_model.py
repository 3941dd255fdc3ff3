from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON, Index
from sqlalchemy.orm import relationship
from feedbackhub.core.database import Base, utcnow
from feedbackhub.schemas.website.website_settings import WebsiteSettings


class Website(Base):
    __tablename__ = "websites"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    domain = Column(String(255), unique=True, nullable=False)
    api_key_hash = Column(String(64), unique=True, nullable=False)
    api_key_prefix = Column(String(16), nullable=False)  # shown in listings, never enough to authenticate
    description = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)
    settings = Column(JSON)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    categories = relationship("Category", back_populates="website", cascade="all, delete-orphan", passive_deletes=True)
    feedback_items = relationship("FeedbackItem", back_populates="website", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        Index("ix_websites_is_active", "is_active"),
    )

    @property
    def config(self) -> WebsiteSettings:
        """Typed view of the stored settings blob."""
        return WebsiteSettings.model_validate(self.settings or {})

    @config.setter
    def config(self, value: WebsiteSettings) -> None:
        self.settings = value.model_dump(mode="json", by_alias=True) if value is not None else None
