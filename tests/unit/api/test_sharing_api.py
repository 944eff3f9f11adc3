"""
API tests for the invite-link flow: issue, preview, clone, list and revoke.
"""

import uuid

import pytest

from src.onboardhub.core.repositories.share_repository import ShareRepository


@pytest.fixture
async def owner(make_user, make_version, make_template, make_category):
    user = await make_user(name="Olivia Owner", email="olivia@company.com")
    version = await make_version(user)
    await make_template(user, "Get your badge", period="firstDay", version=version)
    await make_category(user, "Tools", [("Slack", "https://slack.com")], version=version)
    return user


async def _issue(async_client, headers, **payload):
    body = {"title": "Team onboarding", **payload}
    response = await async_client.post("/api/sharing/share", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.mark.asyncio
class TestIssueAndPreview:
    async def test_issue_share(self, async_client, owner, auth_for):
        data = await _issue(async_client, auth_for(owner), max_clones=5, expires_in_days=3)

        assert data["invite_url"] == f"http://test/invite/{data['invite_token']}"
        assert data["max_clones"] == 5
        assert data["expires_at"] is not None

    async def test_issue_requires_auth(self, async_client):
        response = await async_client.post("/api/sharing/share", json={"title": "X"})
        assert response.status_code == 401

    async def test_issue_blank_title(self, async_client, owner, auth_for):
        response = await async_client.post(
            "/api/sharing/share", json={"title": "  "}, headers=auth_for(owner)
        )
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Title is required"}

    async def test_issue_without_content(self, async_client, auth_headers):
        response = await async_client.post(
            "/api/sharing/share", json={"title": "Nothing"}, headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["error"] == "No templates or resources to share"

    async def test_public_preview(self, async_client, owner, auth_for):
        data = await _issue(async_client, auth_for(owner), description="Welcome aboard")

        response = await async_client.get(f"/api/sharing/shared/{data['invite_token']}")

        assert response.status_code == 200
        content = response.json()["data"]
        assert content["share_info"]["title"] == "Team onboarding"
        assert content["share_info"]["owner"]["name"] == "Olivia Owner"
        assert [t["title"] for t in content["templates"]] == ["Get your badge"]
        assert content["resource_categories"][0]["resources"][0]["name"] == "Slack"

    async def test_preview_unknown_token(self, async_client):
        response = await async_client.get("/api/sharing/shared/missing")
        assert response.status_code == 404
        assert response.json()["success"] is False


@pytest.mark.asyncio
class TestCloneFlow:
    async def test_clone_into_fresh_account(self, async_client, owner, auth_for, make_user):
        data = await _issue(async_client, auth_for(owner))
        recipient = await make_user(name="New Hire")

        response = await async_client.post(
            f"/api/sharing/clone/{data['invite_token']}", headers=auth_for(recipient)
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["templates_added"] == 1
        assert body["data"]["resources_added"] == 1
        assert body["message"] == body["data"]["message"]

        templates = await async_client.get(
            "/api/templates", params={"unversioned": "true"}, headers=auth_for(recipient)
        )
        assert [t["title"] for t in templates.json()["data"]] == ["Get your badge"]

    async def test_registered_user_must_confirm(self, async_client, owner, auth_for):
        """Registration seeds content, so the first clone asks for confirmation."""
        data = await _issue(async_client, auth_for(owner))
        await async_client.post(
            "/api/auth/register",
            json={"email": "nina@company.com", "password": "securepassword123", "name": "Nina"},
        )
        login = await async_client.post(
            "/api/auth/login", json={"email": "nina@company.com", "password": "securepassword123"}
        )
        headers = {"Authorization": f"Bearer {login.json()['data']['access_token']}"}
        url = f"/api/sharing/clone/{data['invite_token']}"

        pending = await async_client.post(url, json={}, headers=headers)
        assert pending.status_code == 200
        body = pending.json()
        assert body["success"] is False
        assert body["requires_confirmation"] is True
        assert body["existing_data"]["templates"] is True

        confirmed = await async_client.post(url, json={"confirmed": True}, headers=headers)
        assert confirmed.json()["success"] is True
        assert confirmed.json()["data"]["clone_count"] == 1

    async def test_self_clone(self, async_client, owner, auth_for):
        data = await _issue(async_client, auth_for(owner))
        response = await async_client.post(
            f"/api/sharing/clone/{data['invite_token']}", json={"confirmed": True}, headers=auth_for(owner)
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Cannot clone your own shared content"

    async def test_clone_into_other_account_forbidden(self, async_client, owner, auth_for, make_user):
        data = await _issue(async_client, auth_for(owner))
        recipient = await make_user()
        victim = await make_user()

        response = await async_client.post(
            f"/api/sharing/clone/{data['invite_token']}",
            json={"user_id": str(victim.id)},
            headers=auth_for(recipient),
        )
        assert response.status_code == 403

    async def test_clone_limit(self, async_client, owner, auth_for, make_user):
        data = await _issue(async_client, auth_for(owner), max_clones=1)
        first = await make_user()
        second = await make_user()
        url = f"/api/sharing/clone/{data['invite_token']}"

        assert (await async_client.post(url, headers=auth_for(first))).status_code == 200
        response = await async_client.post(url, headers=auth_for(second))
        assert response.status_code == 410
        assert response.json()["error"] == "Maximum number of clones reached"

    async def test_camel_case_limits_are_honoured(self, async_client, owner, auth_for, make_user):
        data = await _issue(async_client, auth_for(owner), maxClones=1, expiresInDays=3)
        assert data["max_clones"] == 1
        assert data["expires_at"] is not None
        first = await make_user()
        second = await make_user()
        url = f"/api/sharing/clone/{data['invite_token']}"

        accepted = await async_client.post(url, json={"userId": str(first.id)}, headers=auth_for(first))
        assert accepted.status_code == 200
        response = await async_client.post(url, headers=auth_for(second))
        assert response.status_code == 410

    async def test_camel_case_target_is_checked(self, async_client, owner, auth_for, make_user):
        data = await _issue(async_client, auth_for(owner))
        recipient = await make_user()
        victim = await make_user()

        response = await async_client.post(
            f"/api/sharing/clone/{data['invite_token']}",
            json={"userId": str(victim.id)},
            headers=auth_for(recipient),
        )
        assert response.status_code == 403


@pytest.mark.asyncio
class TestShareManagement:
    async def test_list_my_shares(self, async_client, owner, auth_for):
        data = await _issue(async_client, auth_for(owner))

        response = await async_client.get(f"/api/sharing/my-shares/{owner.id}", headers=auth_for(owner))

        assert response.status_code == 200
        shares = response.json()["data"]
        assert [s["share_id"] for s in shares] == [data["share_id"]]
        assert shares[0]["is_active"] is True

    async def test_list_foreign_shares_forbidden(self, async_client, owner, auth_headers):
        response = await async_client.get(f"/api/sharing/my-shares/{owner.id}", headers=auth_headers)
        assert response.status_code == 403

    async def test_revoke(self, async_client, owner, auth_for, test_session):
        data = await _issue(async_client, auth_for(owner))

        response = await async_client.delete(f"/api/sharing/share/{data['share_id']}", headers=auth_for(owner))
        assert response.status_code == 200

        share = await ShareRepository(test_session).get_by_id(uuid.UUID(data["share_id"]))
        assert share.is_active is False
        preview = await async_client.get(f"/api/sharing/shared/{data['invite_token']}")
        assert preview.status_code == 404
