"""
Unit tests for Version model.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from src.onboardhub.core.models import Version


class TestVersionModel:
    """Test Version model functionality."""

    async def test_create_version(self, test_session, make_user):
        user = await make_user()
        version = Version(user_id=user.id, name="Engineering")
        test_session.add(version)
        await test_session.commit()
        await test_session.refresh(version)

        assert version.id is not None
        assert version.is_default is False
        assert version.description is None
        assert version.is_owned_by(user.id)

    async def test_single_default_per_user(self, test_session, make_user):
        """The partial unique index allows one default per user."""
        user = await make_user()
        test_session.add(Version(user_id=user.id, name="A", is_default=True))
        await test_session.commit()

        test_session.add(Version(user_id=user.id, name="B", is_default=True))
        with pytest.raises(IntegrityError):
            await test_session.commit()
        await test_session.rollback()

    async def test_many_non_default_versions(self, test_session, make_user):
        user = await make_user()
        test_session.add_all([Version(user_id=user.id, name=f"V{i}") for i in range(3)])
        await test_session.commit()

    async def test_defaults_of_different_users(self, test_session, make_user):
        """Each user has an independent default."""
        alice = await make_user(name="Alice")
        bob = await make_user(name="Bob")
        test_session.add_all(
            [
                Version(user_id=alice.id, name="Default", is_default=True),
                Version(user_id=bob.id, name="Default", is_default=True),
            ]
        )
        await test_session.commit()
