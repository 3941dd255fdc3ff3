from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.core.config import settings
from feedbackhub.core.database import get_db
from feedbackhub.core.errors import Unauthorized, Forbidden
from feedbackhub.core.redis_lifecycle import get_redis_client
from feedbackhub.core.security import decode_session_token, is_admin_session_valid, secret_matches
from feedbackhub.models.admin.admin_user import AdminUser, AdminRole


async def require_api_key(x_api_key: Optional[str] = Header(None)) -> str:
    if not x_api_key:
        raise Unauthorized("API key required")
    return x_api_key


async def require_admin_key(x_admin_key: Optional[str] = Header(None)) -> None:
    if not secret_matches(x_admin_key, settings.ADMIN_KEY):
        raise Unauthorized("Admin access required")


async def get_current_admin(
    request: Request,
    db: AsyncSession = Depends(get_db),
    redis_client = Depends(get_redis_client),
) -> AdminUser:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        raise Unauthorized("Unauthorized")

    payload = decode_session_token(token)
    if payload is None:
        raise Unauthorized("Invalid session")

    if not await is_admin_session_valid(redis_client, payload["sub"], payload["jti"]):
        raise Unauthorized("Invalid session")

    try:
        admin_id = int(payload["sub"])
    except ValueError:
        raise Unauthorized("Invalid session")

    admin = await db.get(AdminUser, admin_id)
    if admin is None or not admin.is_active:
        raise Unauthorized("Unauthorized")

    request.state.session = payload
    return admin


def require_role(role: AdminRole):
    async def role_checker(admin: AdminUser = Depends(get_current_admin)):
        if not admin.has_role(role):
            raise Forbidden(f"Only admins with {role.value} role can access this route")
        return admin
    return role_checker
