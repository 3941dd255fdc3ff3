from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.core.errors import Conflict, NotFound, ValidationError
from feedbackhub.core.logger import logger
from feedbackhub.core.security import hash_password
from feedbackhub.models.admin.admin_user import AdminUser
from feedbackhub.schemas.admin.admin_schema import AdminUserCreate


class AdminUserService:
    @staticmethod
    async def list_admins(db: AsyncSession) -> List[AdminUser]:
        result = await db.execute(select(AdminUser).order_by(AdminUser.created_at.asc(), AdminUser.id.asc()))
        return result.scalars().all()

    @staticmethod
    async def get_admin(db: AsyncSession, admin_id: int) -> AdminUser:
        admin = await db.get(AdminUser, admin_id)
        if not admin:
            raise NotFound("User not found")
        return admin

    @staticmethod
    async def create_admin(db: AsyncSession, data: AdminUserCreate) -> AdminUser:
        existing = await db.execute(select(AdminUser.id).where(AdminUser.email == data.email))
        if existing.scalar_one_or_none() is not None:
            raise Conflict("An admin with this email already exists")

        admin = AdminUser(
            email=data.email,
            name=data.name,
            role=data.role,
            hashed_password=hash_password(data.password),
            is_active=True,
        )
        db.add(admin)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise Conflict("An admin with this email already exists")
        await db.refresh(admin)
        logger.info("Created admin %s with role %s", admin.id, admin.role.value)
        return admin

    @staticmethod
    async def set_active(db: AsyncSession, current: AdminUser, admin_id: int, is_active: bool) -> AdminUser:
        if admin_id == current.id:
            raise ValidationError("Cannot modify your own status")
        admin = await AdminUserService.get_admin(db, admin_id)
        admin.is_active = is_active
        await db.commit()
        await db.refresh(admin)
        return admin

    @staticmethod
    async def delete_admin(db: AsyncSession, current: AdminUser, admin_id: int) -> None:
        if admin_id == current.id:
            raise ValidationError("Cannot delete your own account")
        admin = await AdminUserService.get_admin(db, admin_id)
        await db.delete(admin)
        await db.commit()
