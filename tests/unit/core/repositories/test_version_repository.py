"""
Unit tests for VersionRepository.
"""

from src.onboardhub.core.repositories.version_repository import VersionRepository


class TestVersionRepository:
    """Test version persistence and default bookkeeping."""

    async def test_get_default_and_list_order(self, test_session, make_user, make_version):
        user = await make_user()
        await make_version(user, "Extra", is_default=False)
        default = await make_version(user, "Main", is_default=True)
        repo = VersionRepository(test_session)

        assert (await repo.get_default(user.id)).id == default.id
        versions = await repo.list_for_user(user.id)
        assert [v.name for v in versions] == ["Main", "Extra"]
        assert await repo.count_for_user(user.id) == 2

    async def test_unset_then_mark_default(self, test_session, make_user, make_version):
        user = await make_user()
        first = await make_version(user, "First", is_default=True)
        second = await make_version(user, "Second", is_default=False)
        repo = VersionRepository(test_session)

        await repo.unset_defaults(user.id)
        assert await repo.mark_default(second.id, user.id) == 1
        await test_session.commit()

        assert (await repo.get_default(user.id)).id == second.id
        refreshed_first = await repo.get_by_id_and_user(first.id, user.id)
        assert refreshed_first.is_default is False

    async def test_get_by_id_and_user_checks_owner(self, test_session, make_user, make_version):
        owner = await make_user()
        other = await make_user()
        version = await make_version(owner)
        repo = VersionRepository(test_session)

        assert await repo.get_by_id_and_user(version.id, other.id) is None
        assert await repo.get_by_id_and_user(version.id, owner.id) is not None

    async def test_content_counts(self, test_session, make_user, make_version, make_template, make_category):
        user = await make_user()
        version = await make_version(user)
        empty = await make_version(user, "Empty", is_default=False)
        await make_template(user, "A", version=version)
        await make_template(user, "B", version=version)
        await make_template(user, "Legacy")
        await make_category(user, "Tools", version=version)
        repo = VersionRepository(test_session)

        counts = await repo.content_counts(user.id)
        assert counts[version.id] == {"template_count": 2, "category_count": 1}
        assert empty.id not in counts
