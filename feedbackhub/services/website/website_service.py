from typing import List, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.core.errors import Conflict, Forbidden, NotFound
from feedbackhub.core.logger import logger
from feedbackhub.core.security import api_key_matches, generate_api_key, hash_api_key, API_KEY_PREFIX_LENGTH
from feedbackhub.models.website.website_model import Website
from feedbackhub.schemas.website.website_schema import WebsiteCreate, WebsiteUpdate
from feedbackhub.schemas.website.website_settings import WebsiteSettings


async def verify_website(session: AsyncSession, website_id: int, api_key: str) -> Website:
    """Resolve the calling website and confirm it may act.

    Unknown id, wrong key and inactive website all fail the same way so the
    response does not reveal which websites exist.
    """
    website = await session.get(Website, website_id)
    if website is None or not api_key_matches(api_key, website.api_key_hash) or not website.is_active:
        raise Forbidden("Invalid API key or inactive website")
    return website


async def get_website(session: AsyncSession, website_id: int) -> Website:
    website = await session.get(Website, website_id)
    if not website:
        raise NotFound("Website not found")
    return website


async def list_websites(session: AsyncSession) -> List[Website]:
    result = await session.execute(select(Website).order_by(Website.created_at.desc(), Website.id.desc()))
    return result.scalars().all()


def _issue_key(website: Website) -> str:
    api_key = generate_api_key()
    website.api_key_hash = hash_api_key(api_key)
    website.api_key_prefix = api_key[:API_KEY_PREFIX_LENGTH]
    return api_key


async def register_website(session: AsyncSession, data: WebsiteCreate) -> Tuple[Website, str]:
    """Create a website and return it with its plaintext API key."""
    existing = await session.execute(select(Website.id).where(Website.domain == data.domain))
    if existing.scalar_one_or_none() is not None:
        raise Conflict("A website with this domain already exists")

    website = Website(
        name=data.name,
        domain=data.domain,
        description=data.description,
        is_active=True,
    )
    website.config = data.settings or WebsiteSettings()
    api_key = _issue_key(website)

    session.add(website)
    try:
        await session.commit()
    except IntegrityError:
        # lost a race with another registration for the same domain
        await session.rollback()
        raise Conflict("A website with this domain already exists")
    await session.refresh(website)

    logger.info("Registered website %s (%s)", website.id, website.domain)
    return website, api_key


async def update_website(session: AsyncSession, website_id: int, data: WebsiteUpdate) -> Website:
    website = await get_website(session, website_id)

    update_data = data.model_dump(exclude_unset=True, exclude={"settings"})
    for field, value in update_data.items():
        if value is not None or field == "description":
            setattr(website, field, value)
    if "settings" in data.model_fields_set:
        website.config = data.settings or WebsiteSettings()

    await session.commit()
    await session.refresh(website)
    return website


async def rotate_api_key(session: AsyncSession, website_id: int) -> Tuple[Website, str]:
    website = await get_website(session, website_id)
    api_key = _issue_key(website)
    await session.commit()
    await session.refresh(website)

    logger.info("Rotated API key for website %s", website.id)
    return website, api_key


async def delete_website(session: AsyncSession, website_id: int) -> None:
    website = await get_website(session, website_id)
    await session.delete(website)
    await session.commit()
    logger.info("Deleted website %s", website_id)
