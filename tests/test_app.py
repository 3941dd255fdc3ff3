"""
Tests for app-wide behaviour: health endpoints and the error envelope.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from feedbackhub.core.database import get_db
from feedbackhub.core.redis_lifecycle import get_redis_client
from feedbackhub.main import app
from feedbackhub.services.feedback import feedback_service


async def test_root(client):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to FeedbackHub API"}


async def test_health(client):
    response = await client.get("/health")
    assert response.json() == {"status": "healthy"}


async def test_unknown_route_uses_error_envelope(client):
    response = await client.get("/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not Found"}


async def test_validation_errors_are_400(client):
    response = await client.post("/websites", json={"name": ""})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Invalid request data"
    assert {tuple(detail["loc"]) for detail in body["details"]} >= {("body", "domain"), ("body", "name")}


@pytest.fixture
async def lenient_client(session_factory, fake_redis):
    """A client that returns 500 responses instead of re-raising app errors."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    async def override_get_redis_client():
        yield fake_redis

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis_client] = override_get_redis_client
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def test_unexpected_error_is_500_without_internals(lenient_client, website, monkeypatch):
    site, api_key = website

    async def explode(session, filters):
        raise RuntimeError("connection string with password=hunter2")

    monkeypatch.setattr(feedback_service, "list_feedback", explode)

    response = await lenient_client.get(
        "/feedback", params={"websiteId": site.id}, headers={"x-api-key": api_key}
    )
    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}
