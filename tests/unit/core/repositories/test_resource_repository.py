"""
Unit tests for ResourceRepository.
"""

from src.onboardhub.core.repositories.resource_repository import ResourceRepository


class TestResourceRepository:
    """Test categories, their resources and version scoping."""

    async def test_create_category_with_resources(self, test_session, make_user):
        user = await make_user()
        repo = ResourceRepository(test_session)

        category = await repo.create_category(
            {
                "user_id": user.id,
                "version_id": None,
                "category": "Communication",
                "job": "talk to my team",
                "situation": "I start",
                "outcome": "I stay in sync",
            },
            [
                {"name": "Slack", "type": "tool", "url": "https://slack.com"},
                {"name": "Handbook", "type": "guide", "url": "#"},
            ],
        )

        assert category.category == "Communication"
        assert [r.name for r in category.resources] == ["Slack", "Handbook"]
        assert await repo.count_resources(category.id) == 2

    async def test_list_by_scope_loads_resources(self, test_session, make_user, make_version, make_category):
        user = await make_user()
        version = await make_version(user)
        await make_category(user, "Tools", [("Jira", "https://jira.com")], version=version)
        await make_category(user, "Legacy tools", [("Wiki", "#")])
        repo = ResourceRepository(test_session)

        versioned = await repo.list_by_scope(user.id, version.id)
        assert [c.category for c in versioned] == ["Tools"]
        assert [r.name for r in versioned[0].resources] == ["Jira"]

        legacy = await repo.list_by_scope(user.id, None)
        assert [c.category for c in legacy] == ["Legacy tools"]
        assert await repo.count_for_user(user.id) == 2

    async def test_find_by_label(self, test_session, make_user, make_category):
        user = await make_user()
        await make_category(user, "Tools", [("Jira", "#")])
        repo = ResourceRepository(test_session)

        found = await repo.find_by_label(user.id, None, "Tools")
        assert found is not None
        assert found.resources[0].name == "Jira"
        assert await repo.find_by_label(user.id, None, "Missing") is None

    async def test_delete_category_removes_resources(self, test_session, make_user, make_category):
        user = await make_user()
        other = await make_user()
        category = await make_category(user, "Tools", [("Jira", "#"), ("Slack", "#")])
        repo = ResourceRepository(test_session)

        assert await repo.delete_category(category.id, other.id) is False
        assert await repo.delete_category(category.id, user.id) is True
        assert await repo.get_category(category.id, user.id) is None
        assert await repo.count_resources(category.id) == 0

    async def test_resource_ownership_through_category(self, test_session, make_user, make_category):
        user = await make_user()
        other = await make_user()
        category = await make_category(user, "Tools", [("Jira", "#")])
        repo = ResourceRepository(test_session)
        resource = (await repo.get_category(category.id, user.id)).resources[0]

        assert await repo.get_resource(resource.id, other.id) is None
        assert await repo.delete_resource(resource.id, other.id) is False
        assert await repo.delete_resource(resource.id, user.id) is True
        assert await repo.count_resources(category.id) == 0

    async def test_delete_by_version(self, test_session, make_user, make_version, make_category):
        user = await make_user()
        version = await make_version(user)
        await make_category(user, "A", [("x", "#")], version=version)
        await make_category(user, "Legacy", [("y", "#")])
        repo = ResourceRepository(test_session)

        assert await repo.delete_by_version(user.id, version.id) == 1
        await test_session.commit()
        assert await repo.count_by_scope(user.id, version.id) == 0
        assert await repo.count_by_scope(user.id, None) == 1
