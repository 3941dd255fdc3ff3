from typing import Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.core.database import utcnow
from feedbackhub.core.errors import Unauthorized
from feedbackhub.core.logger import logger
from feedbackhub.core.security import (
    verify_password,
    create_session_token,
    store_admin_session,
    revoke_admin_session,
)
from feedbackhub.models.admin.admin_user import AdminUser


async def login_admin(email: str, password: str, db: AsyncSession, redis_client) -> Tuple[AdminUser, str, int]:
    """Check credentials and open a session. Returns (admin, token, ttl_seconds)."""
    result = await db.execute(select(AdminUser).where(AdminUser.email == email))
    admin = result.scalar_one_or_none()

    # same message for unknown email and wrong password
    if admin is None or not verify_password(password, admin.hashed_password):
        raise Unauthorized("Invalid credentials")
    if not admin.is_active:
        raise Unauthorized("Account is deactivated")

    token, jti, ttl = create_session_token(admin.id)
    await store_admin_session(redis_client, admin.id, jti, ttl)

    admin.last_login = utcnow()
    await db.commit()
    await db.refresh(admin)

    logger.info("Admin %s logged in", admin.id)
    return admin, token, ttl


async def logout_admin(session_payload: dict, redis_client) -> None:
    await revoke_admin_session(redis_client, session_payload["sub"], session_payload["jti"])
