from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.core.errors import Conflict
from feedbackhub.models.category.category_model import Category
from feedbackhub.schemas.category.category_schema import CategoryCreate


async def list_active_categories(session: AsyncSession, website_id: int) -> List[Category]:
    result = await session.execute(
        select(Category)
        .where(Category.website_id == website_id, Category.is_active.is_(True))
        .order_by(Category.sort_order.asc(), Category.name.asc())
    )
    return result.scalars().all()


async def create_category(session: AsyncSession, data: CategoryCreate) -> Category:
    existing = await session.execute(
        select(Category.id).where(Category.website_id == data.website_id, Category.slug == data.slug)
    )
    if existing.scalar_one_or_none() is not None:
        raise Conflict("A category with this slug already exists for this website")

    category = Category(is_active=True, **data.model_dump())
    session.add(category)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise Conflict("A category with this slug already exists for this website")
    await session.refresh(category)
    return category
