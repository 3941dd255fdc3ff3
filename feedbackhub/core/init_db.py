import asyncio

from sqlalchemy import select

from feedbackhub.core.config import settings
from feedbackhub.core.database import engine, Base, SessionLocal
from feedbackhub.core.logger import logger
from feedbackhub.core.security import hash_password
from feedbackhub import models  # noqa: F401  registers every table on Base.metadata
from feedbackhub.models.admin.admin_user import AdminUser, AdminRole


async def init_db(bind=None):
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def create_initial_admin() -> None:
    """Create the first admin from INITIAL_ADMIN_* settings if it does not exist."""
    if not settings.INITIAL_ADMIN_EMAIL or not settings.INITIAL_ADMIN_PASSWORD:
        logger.warning("INITIAL_ADMIN_EMAIL / INITIAL_ADMIN_PASSWORD not set; skipping admin bootstrap")
        return

    async with SessionLocal() as db:
        result = await db.execute(select(AdminUser).where(AdminUser.email == settings.INITIAL_ADMIN_EMAIL))
        if result.scalar_one_or_none() is not None:
            logger.info("Admin %s already exists", settings.INITIAL_ADMIN_EMAIL)
            return
        db.add(AdminUser(
            email=settings.INITIAL_ADMIN_EMAIL,
            name=settings.INITIAL_ADMIN_NAME,
            hashed_password=hash_password(settings.INITIAL_ADMIN_PASSWORD),
            role=AdminRole.admin,
            is_active=True,
        ))
        await db.commit()
        logger.info("Created initial admin %s", settings.INITIAL_ADMIN_EMAIL)


async def _bootstrap():
    await init_db()
    await create_initial_admin()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(_bootstrap())
