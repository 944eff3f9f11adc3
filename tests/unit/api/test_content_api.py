"""
API tests for checklist, resource library and version endpoints.
"""

import uuid

import pytest


@pytest.mark.asyncio
class TestTemplateEndpoints:
    async def test_create_and_list(self, async_client, test_user, make_version, auth_headers):
        await make_version(test_user)

        created = await async_client.post(
            "/api/templates",
            json={"period": "firstWeek", "title": "Pair with a teammate", "priority": "high"},
            headers=auth_headers,
        )
        assert created.status_code == 201
        item = created.json()["data"]
        assert item["priority"] == "high"

        listed = await async_client.get("/api/templates", headers=auth_headers)
        assert [t["id"] for t in listed.json()["data"]] == [item["id"]]

    async def test_invalid_period(self, async_client, auth_headers):
        response = await async_client.post(
            "/api/templates", json={"period": "someday", "title": "Later"}, headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["error"].startswith("period:")

    async def test_update_and_delete(self, async_client, test_user, make_template, auth_headers):
        item = await make_template(test_user, "Read handbook")

        updated = await async_client.put(
            f"/api/templates/{item.id}", json={"completed": True}, headers=auth_headers
        )
        assert updated.json()["data"]["completed"] is True

        deleted = await async_client.delete(f"/api/templates/{item.id}", headers=auth_headers)
        assert deleted.status_code == 200
        missing = await async_client.delete(f"/api/templates/{item.id}", headers=auth_headers)
        assert missing.status_code == 404

    async def test_foreign_version_filter(self, async_client, make_user, make_version, auth_headers):
        stranger = await make_user()
        foreign = await make_version(stranger)

        response = await async_client.get(
            "/api/templates", params={"version_id": str(foreign.id)}, headers=auth_headers
        )
        assert response.status_code == 404


@pytest.mark.asyncio
class TestResourceEndpoints:
    async def test_category_lifecycle(self, async_client, auth_headers):
        created = await async_client.post(
            "/api/resources",
            json={
                "category": "Communication",
                "job": "reach my team",
                "situation": "I have a question",
                "outcome": "I get unblocked",
                "resources": [{"name": "Slack", "type": "tool", "url": "https://slack.com"}],
            },
            headers=auth_headers,
        )
        assert created.status_code == 201
        category = created.json()["data"]
        assert [r["name"] for r in category["resources"]] == ["Slack"]

        added = await async_client.post(
            f"/api/resources/{category['id']}/items",
            json={"name": "Zoom", "type": "tool", "url": "https://zoom.us"},
            headers=auth_headers,
        )
        assert added.status_code == 201

        listed = await async_client.get("/api/resources", headers=auth_headers)
        assert [r["name"] for r in listed.json()["data"][0]["resources"]] == ["Slack", "Zoom"]

        removed = await async_client.delete(f"/api/resources/{category['id']}", headers=auth_headers)
        assert removed.status_code == 200
        assert (await async_client.get("/api/resources", headers=auth_headers)).json()["data"] == []

    async def test_delete_missing_resource(self, async_client, auth_headers):
        response = await async_client.delete(f"/api/resources/items/{uuid.uuid4()}", headers=auth_headers)
        assert response.status_code == 404


@pytest.mark.asyncio
class TestVersionEndpoints:
    async def test_version_lifecycle(self, async_client, auth_headers):
        first = await async_client.post("/api/versions", json={"name": "Engineering"}, headers=auth_headers)
        assert first.status_code == 201
        first_data = first.json()["data"]
        assert first_data["is_default"] is True

        second = await async_client.post(
            "/api/versions",
            json={"name": "Design", "copy_from_version_id": first_data["id"]},
            headers=auth_headers,
        )
        second_data = second.json()["data"]
        assert second_data["is_default"] is False
        assert second_data["template_count"] == first_data["template_count"]

        promoted = await async_client.post(f"/api/versions/{second_data['id']}/default", headers=auth_headers)
        assert promoted.json()["data"]["is_default"] is True

        listed = await async_client.get("/api/versions", headers=auth_headers)
        assert [(v["name"], v["is_default"]) for v in listed.json()["data"]] == [
            ("Design", True),
            ("Engineering", False),
        ]

        blocked = await async_client.delete(f"/api/versions/{second_data['id']}", headers=auth_headers)
        assert blocked.status_code == 400
        assert blocked.json()["error"] == "Cannot delete the default version"

        removed = await async_client.delete(f"/api/versions/{first_data['id']}", headers=auth_headers)
        assert removed.status_code == 200

    async def test_rename(self, async_client, test_user, make_version, auth_headers):
        version = await make_version(test_user, "Old")
        response = await async_client.put(
            f"/api/versions/{version.id}", json={"name": "New"}, headers=auth_headers
        )
        assert response.json()["data"]["name"] == "New"
