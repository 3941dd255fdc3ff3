import enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum, Index
from feedbackhub.core.database import Base, utcnow


class AdminRole(str, enum.Enum):
    viewer = "viewer"
    moderator = "moderator"
    admin = "admin"


# higher rank includes the permissions of the lower ones
ROLE_RANK = {AdminRole.viewer: 0, AdminRole.moderator: 1, AdminRole.admin: 2}


class AdminUser(Base):
    __tablename__ = "admin_users"

    id = Column(Integer, primary_key=True)
    email = Column(String(320), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(Enum(AdminRole, name="admin_role", native_enum=False, validate_strings=True, length=20),
                  nullable=False, default=AdminRole.viewer)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_admin_users_role", "role"),
        Index("ix_admin_users_is_active", "is_active"),
    )

    def has_role(self, role: AdminRole) -> bool:
        return ROLE_RANK[self.role] >= ROLE_RANK[role]
