from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.core.database import get_db
from feedbackhub.dependencies.auth import require_role
from feedbackhub.models.admin.admin_user import AdminUser, AdminRole
from feedbackhub.schemas.admin.admin_schema import AdminUserCreate, AdminUserStatusUpdate, AdminUserOut
from feedbackhub.schemas.common import ApiResponse, MessageResponse
from feedbackhub.services.admin.admin_user_service import AdminUserService

router = APIRouter(prefix="/admin/api/users", tags=["Admin Users"])


@router.get("", response_model=ApiResponse[List[AdminUserOut]])
async def list_admins(
    db: AsyncSession = Depends(get_db),
    current_admin: AdminUser = Depends(require_role(AdminRole.admin))
):
    admins = await AdminUserService.list_admins(db)
    return ApiResponse(data=[AdminUserOut.model_validate(a) for a in admins])


@router.post("", response_model=ApiResponse[AdminUserOut], status_code=201)
async def create_admin(
    data: AdminUserCreate,
    db: AsyncSession = Depends(get_db),
    current_admin: AdminUser = Depends(require_role(AdminRole.admin))
):
    admin = await AdminUserService.create_admin(db, data)
    return ApiResponse(data=AdminUserOut.model_validate(admin))


@router.patch("/{admin_id}/status", response_model=MessageResponse)
async def update_admin_status(
    admin_id: int,
    data: AdminUserStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_admin: AdminUser = Depends(require_role(AdminRole.admin))
):
    await AdminUserService.set_active(db, current_admin, admin_id, data.is_active)
    return MessageResponse(message="User status updated successfully")


@router.delete("/{admin_id}", response_model=MessageResponse)
async def delete_admin(
    admin_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: AdminUser = Depends(require_role(AdminRole.admin))
):
    await AdminUserService.delete_admin(db, current_admin, admin_id)
    return MessageResponse(message="User deleted successfully")
