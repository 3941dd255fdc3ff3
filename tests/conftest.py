"""
Pytest configuration for FeedbackHub tests.

Each test gets its own SQLite database file and an in-memory stand-in for
Redis; the FastAPI app is driven through httpx without a running server.
"""

import os
import tempfile

# Settings are read at import time - must be set before any feedbackhub import
_test_data_dir = tempfile.mkdtemp(prefix="feedbackhub_test_")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_test_data_dir}/default.db")
os.environ.setdefault("SESSION_SECRET_KEY", "test-session-secret")
os.environ.setdefault("ADMIN_KEY", "test-admin-key")
os.environ["COOKIE_SECURE"] = "false"
# httpx ASGITransport connects as 127.0.0.1; tests set client IPs through X-Forwarded-For
os.environ["TRUSTED_PROXIES"] = '["127.0.0.1"]'

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker

from feedbackhub.core.database import create_engine, get_db
from feedbackhub.core.init_db import init_db
from feedbackhub.core.redis_lifecycle import get_redis_client
from feedbackhub.core.security import hash_password
from feedbackhub.main import app
from feedbackhub.models.admin.admin_user import AdminUser, AdminRole
from feedbackhub.models.feedback.feedback_model import FeedbackItem, FeedbackType
from feedbackhub.schemas.website.website_schema import WebsiteCreate
from feedbackhub.schemas.website.website_settings import WebsiteSettings
from feedbackhub.services.website import website_service

ADMIN_PASSWORD = "correct-horse-battery"


class FakeRedis:
    """The handful of Redis commands the admin session store uses."""

    def __init__(self):
        self.hashes = {}

    async def ping(self):
        return True

    async def hset(self, key, mapping):
        self.hashes.setdefault(key, {}).update(mapping)

    async def expire(self, key, seconds):
        return key in self.hashes

    async def exists(self, key):
        return int(key in self.hashes)

    async def delete(self, *keys):
        return sum(1 for key in keys if self.hashes.pop(key, None) is not None)


@pytest.fixture
async def engine(tmp_path):
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
async def client(session_factory, fake_redis):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    async def override_get_redis_client():
        yield fake_redis

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis_client] = override_get_redis_client
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_website(session_factory):
    """Register a website directly; returns (website, api_key)."""
    counter = {"n": 0}

    async def _make(settings: dict = None, is_active: bool = True, domain: str = None):
        counter["n"] += 1
        data = WebsiteCreate(
            name=f"Site {counter['n']}",
            domain=domain or f"site{counter['n']}.example.com",
            settings=WebsiteSettings.model_validate(settings) if settings else None,
        )
        async with session_factory() as session:
            website, api_key = await website_service.register_website(session, data)
            if not is_active:
                website.is_active = False
                await session.commit()
        return website, api_key

    return _make


@pytest.fixture
async def website(make_website):
    return await make_website()


@pytest.fixture
def make_admin(session_factory):
    async def _make(email: str = "admin@example.com", role: AdminRole = AdminRole.admin, is_active: bool = True):
        async with session_factory() as session:
            admin = AdminUser(
                email=email,
                name=email.split("@")[0],
                hashed_password=hash_password(ADMIN_PASSWORD),
                role=role,
                is_active=is_active,
            )
            session.add(admin)
            await session.commit()
            await session.refresh(admin)
        return admin

    return _make


@pytest.fixture
def login(client):
    async def _login(email: str = "admin@example.com", password: str = ADMIN_PASSWORD):
        return await client.post("/admin/api/login", json={"email": email, "password": password})

    return _login


def feedback_payload(website_id: int, **overrides) -> dict:
    payload = {
        "websiteId": website_id,
        "type": "bug",
        "title": "Button does nothing",
        "description": "Clicking save on the profile page has no effect.",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def submit(client):
    """POST /feedback with the given key; extra kwargs override the payload."""

    async def _submit(website_id: int, api_key: str, ip: str = "203.0.113.10", **overrides):
        return await client.post(
            "/feedback",
            json=feedback_payload(website_id, **overrides),
            headers={"x-api-key": api_key, "x-forwarded-for": ip, "user-agent": "pytest-agent"},
        )

    return _submit


@pytest.fixture
def make_feedback(session_factory):
    """Insert a feedback row directly, bypassing the submission rules."""

    async def _make(website_id: int, **fields):
        fields.setdefault("type", FeedbackType.bug)
        fields.setdefault("title", "Stored feedback")
        fields.setdefault("description", "Inserted by a test")
        fields.setdefault("ip_address", "198.51.100.1")
        async with session_factory() as session:
            feedback = FeedbackItem(website_id=website_id, **fields)
            session.add(feedback)
            await session.commit()
            await session.refresh(feedback)
        return feedback

    return _make
