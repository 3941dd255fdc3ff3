"""
Tests for listing feedback: filters, sort orders and pagination metadata.
"""

from datetime import timedelta

import pytest

from feedbackhub.core.database import utcnow
from feedbackhub.models.category.category_model import Category
from feedbackhub.models.feedback.feedback_model import FeedbackPriority, FeedbackStatus, FeedbackType


@pytest.fixture
def list_feedback(client):
    async def _list(website_id, api_key, **params):
        params["websiteId"] = website_id
        return await client.get("/feedback", params=params, headers={"x-api-key": api_key})
    return _list


@pytest.fixture
async def category(session_factory, website):
    site, _ = website
    async with session_factory() as session:
        category = Category(website_id=site.id, name="Checkout", slug="checkout", color="#ff8800")
        session.add(category)
        await session.commit()
        await session.refresh(category)
    return category


class TestPagination:
    async def test_last_page_of_25(self, list_feedback, website, make_feedback):
        site, api_key = website
        for i in range(25):
            await make_feedback(site.id, title=f"Item {i}")

        response = await list_feedback(site.id, api_key, limit=10, offset=20)

        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 5
        assert body["pagination"] == {"total": 25, "page": 3, "limit": 10, "totalPages": 3}

    async def test_defaults(self, list_feedback, website, make_feedback):
        site, api_key = website
        for _ in range(12):
            await make_feedback(site.id)

        body = (await list_feedback(site.id, api_key)).json()
        assert len(body["data"]) == 10
        assert body["pagination"] == {"total": 12, "page": 1, "limit": 10, "totalPages": 2}

    async def test_empty_result(self, list_feedback, website):
        site, api_key = website
        body = (await list_feedback(site.id, api_key)).json()
        assert body["data"] == []
        assert body["pagination"] == {"total": 0, "page": 1, "limit": 10, "totalPages": 0}

    @pytest.mark.parametrize("params", [{"limit": 0}, {"limit": 101}, {"offset": -1}])
    async def test_out_of_range_paging_is_400(self, list_feedback, website, params):
        site, api_key = website
        response = await list_feedback(site.id, api_key, **params)
        assert response.status_code == 400

    async def test_missing_website_id_is_400(self, client, website):
        _, api_key = website
        response = await client.get("/feedback", headers={"x-api-key": api_key})
        assert response.status_code == 400


class TestFilters:
    async def test_only_own_website(self, list_feedback, make_website, make_feedback):
        site_a, key_a = await make_website()
        site_b, _ = await make_website()
        await make_feedback(site_a.id)
        await make_feedback(site_b.id)

        body = (await list_feedback(site_a.id, key_a)).json()
        assert [item["websiteId"] for item in body["data"]] == [site_a.id]

    async def test_cannot_list_another_website(self, list_feedback, make_website):
        site_a, _ = await make_website()
        _, key_b = await make_website()
        response = await list_feedback(site_a.id, key_b)
        assert response.status_code == 403

    async def test_status_and_type_combine(self, list_feedback, website, make_feedback):
        site, api_key = website
        await make_feedback(site.id, status=FeedbackStatus.resolved, type=FeedbackType.bug)
        await make_feedback(site.id, status=FeedbackStatus.resolved, type=FeedbackType.feature)
        await make_feedback(site.id, status=FeedbackStatus.new, type=FeedbackType.bug)

        body = (await list_feedback(site.id, api_key, status="resolved", type="bug")).json()
        assert body["pagination"]["total"] == 1
        assert body["data"][0]["status"] == "resolved"
        assert body["data"][0]["type"] == "bug"

    async def test_public_only(self, list_feedback, website, make_feedback):
        site, api_key = website
        await make_feedback(site.id, is_public=True, title="Public")
        await make_feedback(site.id, is_public=False, title="Private")

        body = (await list_feedback(site.id, api_key, public="true")).json()
        assert [item["title"] for item in body["data"]] == ["Public"]

    async def test_category_slug(self, list_feedback, website, make_feedback, category):
        site, api_key = website
        await make_feedback(site.id, category_id=category.id, title="Categorized")
        await make_feedback(site.id, title="Loose")

        body = (await list_feedback(site.id, api_key, category="checkout")).json()
        assert [item["title"] for item in body["data"]] == ["Categorized"]
        assert body["data"][0]["categoryName"] == "Checkout"
        assert body["data"][0]["categoryColor"] == "#ff8800"

    async def test_unknown_category_slug_is_ignored(self, list_feedback, website, make_feedback, category):
        site, api_key = website
        await make_feedback(site.id, category_id=category.id)
        await make_feedback(site.id)

        body = (await list_feedback(site.id, api_key, category="no-such-slug")).json()
        assert body["pagination"]["total"] == 2

    async def test_invalid_status_is_400(self, list_feedback, website):
        site, api_key = website
        response = await list_feedback(site.id, api_key, status="archived")
        assert response.status_code == 400


class TestSorting:
    async def test_newest_and_oldest(self, list_feedback, website, make_feedback):
        site, api_key = website
        now = utcnow()
        await make_feedback(site.id, title="middle", created_at=now - timedelta(hours=2))
        await make_feedback(site.id, title="latest", created_at=now - timedelta(hours=1))
        await make_feedback(site.id, title="earliest", created_at=now - timedelta(hours=3))

        newest = (await list_feedback(site.id, api_key)).json()["data"]
        oldest = (await list_feedback(site.id, api_key, sort="oldest")).json()["data"]
        assert [item["title"] for item in newest] == ["latest", "middle", "earliest"]
        assert [item["title"] for item in oldest] == ["earliest", "middle", "latest"]

    async def test_priority_by_severity(self, list_feedback, website, make_feedback):
        site, api_key = website
        for priority in (FeedbackPriority.low, FeedbackPriority.urgent, FeedbackPriority.medium, FeedbackPriority.high):
            await make_feedback(site.id, priority=priority)

        data = (await list_feedback(site.id, api_key, sort="priority")).json()["data"]
        assert [item["priority"] for item in data] == ["urgent", "high", "medium", "low"]

    async def test_upvotes(self, list_feedback, website, make_feedback):
        site, api_key = website
        await make_feedback(site.id, title="some", upvotes=3)
        await make_feedback(site.id, title="most", upvotes=10)
        await make_feedback(site.id, title="none", upvotes=0)

        data = (await list_feedback(site.id, api_key, sort="upvotes")).json()["data"]
        assert [item["title"] for item in data] == ["most", "some", "none"]

    async def test_ties_are_stable_across_pages(self, list_feedback, website, make_feedback):
        site, api_key = website
        same_time = utcnow()
        for i in range(6):
            await make_feedback(site.id, title=f"tie {i}", created_at=same_time)

        first = (await list_feedback(site.id, api_key, limit=3)).json()["data"]
        second = (await list_feedback(site.id, api_key, limit=3, offset=3)).json()["data"]
        ids = [item["id"] for item in first + second]
        assert len(set(ids)) == 6
        assert ids == sorted(ids, reverse=True)

    async def test_unknown_sort_is_400(self, list_feedback, website):
        site, api_key = website
        response = await list_feedback(site.id, api_key, sort="random")
        assert response.status_code == 400
