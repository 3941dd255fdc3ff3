from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.core.config import settings
from feedbackhub.core.database import get_db
from feedbackhub.core.redis_lifecycle import get_redis_client
from feedbackhub.dependencies.auth import get_current_admin
from feedbackhub.models.admin.admin_user import AdminUser
from feedbackhub.schemas.admin.admin_schema import AdminLogin, AdminUserOut
from feedbackhub.schemas.common import ApiResponse, MessageResponse
from feedbackhub.services.admin import admin_auth

router = APIRouter(prefix="/admin/api", tags=["Admin Auth"])


@router.post("/login", response_model=ApiResponse[AdminUserOut])
async def login(
    data: AdminLogin,
    response: Response,
    db: AsyncSession = Depends(get_db),
    redis_client = Depends(get_redis_client)
):
    admin, token, ttl = await admin_auth.login_admin(data.email, data.password, db, redis_client)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=ttl,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    return ApiResponse(data=AdminUserOut.model_validate(admin))


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    current_admin: AdminUser = Depends(get_current_admin),
    redis_client = Depends(get_redis_client)
):
    await admin_auth.logout_admin(request.state.session, redis_client)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=ApiResponse[AdminUserOut])
async def me(current_admin: AdminUser = Depends(get_current_admin)):
    return ApiResponse(data=AdminUserOut.model_validate(current_admin))
