"""
Tests for API-key authentication of website-scoped requests.
"""

import pytest
from sqlalchemy import select

from feedbackhub.core.security import hash_api_key
from feedbackhub.models.website.website_model import Website


class TestApiKeyRequired:
    async def test_missing_key_is_401(self, client, website):
        site, _ = website
        response = await client.post("/feedback", json={"websiteId": site.id})
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "API key required"}

    async def test_missing_key_checked_before_body(self, client):
        response = await client.post("/feedback", json={})
        assert response.status_code == 401

    async def test_missing_key_on_listing(self, client, website):
        site, _ = website
        response = await client.get("/feedback", params={"websiteId": site.id})
        assert response.status_code == 401


class TestApiKeyVerification:
    async def test_wrong_key_is_403(self, submit, website):
        site, _ = website
        response = await submit(site.id, "not-the-key")
        assert response.status_code == 403
        assert response.json()["error"] == "Invalid API key or inactive website"

    async def test_unknown_website_is_403(self, submit, website):
        _, api_key = website
        response = await submit(9999, api_key)
        assert response.status_code == 403

    async def test_inactive_website_is_403(self, submit, make_website):
        site, api_key = await make_website(is_active=False)
        response = await submit(site.id, api_key)
        assert response.status_code == 403

    async def test_key_of_another_website_is_403(self, submit, make_website):
        site_a, _ = await make_website()
        _, key_b = await make_website()
        response = await submit(site_a.id, key_b)
        assert response.status_code == 403

    async def test_valid_key_is_accepted(self, submit, website):
        site, api_key = website
        response = await submit(site.id, api_key)
        assert response.status_code == 201


class TestInactiveWebsite:
    @pytest.mark.parametrize("method, path, body", [
        ("GET", "/feedback?websiteId={site}", None),
        ("GET", "/feedback/{item}", None),
        ("PATCH", "/feedback/{item}", {"status": "closed"}),
        ("DELETE", "/feedback/{item}", None),
        ("POST", "/feedback/{item}/vote", {"voteType": "up"}),
        ("DELETE", "/feedback/{item}/vote", None),
        ("GET", "/feedback/{item}/comments", None),
        ("POST", "/feedback/{item}/comments", {"content": "hello"}),
        ("GET", "/categories?websiteId={site}", None),
        ("POST", "/categories", {"websiteId": "{site}", "name": "Bugs", "slug": "bugs"}),
        ("GET", "/analytics?websiteId={site}", None),
    ])
    async def test_every_keyed_route_rejects_inactive_website(
        self, client, make_website, make_feedback, method, path, body
    ):
        site, api_key = await make_website(is_active=False)
        item = await make_feedback(site.id)
        url = path.format(site=site.id, item=item.id)
        if body is not None:
            body = {key: site.id if value == "{site}" else value for key, value in body.items()}

        response = await client.request(method, url, json=body, headers={"x-api-key": api_key})

        assert response.status_code == 403
        assert response.json() == {"success": False, "error": "Invalid API key or inactive website"}


class TestKeyStorage:
    async def test_only_the_digest_is_stored(self, db, website):
        site, api_key = website
        stored = await db.scalar(select(Website).where(Website.id == site.id))
        assert stored.api_key_hash != api_key
        assert stored.api_key_hash == hash_api_key(api_key)
        assert stored.api_key_prefix == api_key[:8]
