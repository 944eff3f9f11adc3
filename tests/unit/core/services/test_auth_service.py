"""
Unit tests for AuthService.
"""

import uuid

import pytest
from sqlalchemy import func, select

from src.onboardhub.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from src.onboardhub.core.models import TemplateItem, Version
from src.onboardhub.core.repositories.refresh_token_repository import RefreshTokenRepository
from src.onboardhub.core.repositories.version_repository import VersionRepository
from src.onboardhub.core.schemas.auth import (
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    UserUpdateRequest,
)
from src.onboardhub.core.services.auth_service import AuthService
from src.onboardhub.core.services.provisioning import DEFAULT_TEMPLATES
from src.onboardhub.security import decode_access_token


def _register_request(**overrides):
    data = {"email": "New.Hire@Company.com", "password": "securepassword123", "name": "New Hire"}
    data.update(overrides)
    return RegisterRequest(**data)


class TestRegistration:
    """Account creation and provisioning."""

    async def test_register_creates_seeded_default_version(self, test_session):
        service = AuthService(test_session)

        user = await service.register_user(_register_request())

        assert user.email == "new.hire@company.com"
        assert user.name == "New Hire"
        default = await VersionRepository(test_session).get_default(user.id)
        assert default is not None
        assert default.name == "Default"
        count = await test_session.scalar(
            select(func.count(TemplateItem.id)).where(TemplateItem.version_id == default.id)
        )
        assert count == len(DEFAULT_TEMPLATES)

    async def test_register_without_seeding(self, test_session):
        service = AuthService(test_session)
        service.settings = service.settings.model_copy(update={"seed_default_content": False})

        user = await service.register_user(_register_request())

        assert await test_session.scalar(select(func.count(Version.id))) == 1
        count = await test_session.scalar(
            select(func.count(TemplateItem.id)).where(TemplateItem.user_id == user.id)
        )
        assert count == 0

    async def test_duplicate_email_rejected(self, test_session):
        service = AuthService(test_session)
        await service.register_user(_register_request())

        with pytest.raises(ConflictError):
            await service.register_user(_register_request(email="new.hire@company.com"))


class TestLoginAndTokens:
    """Login, refresh and logout."""

    async def test_login_returns_identity_token(self, test_session):
        service = AuthService(test_session)
        await service.register_user(_register_request())

        tokens = await service.authenticate_user(
            LoginRequest(email="new.hire@company.com", password="securepassword123")
        )

        payload = await decode_access_token(tokens.access_token)
        assert payload["sub"] == str(tokens.user.id)
        assert payload["email"] == "new.hire@company.com"
        assert payload["name"] == "New Hire"
        assert tokens.token_type == "bearer"
        stored = await RefreshTokenRepository(test_session).get_by_token(tokens.refresh_token)
        assert stored is not None and stored.is_valid

    async def test_login_wrong_password(self, test_session):
        service = AuthService(test_session)
        await service.register_user(_register_request())

        with pytest.raises(AuthenticationError) as exc_info:
            await service.authenticate_user(LoginRequest(email="new.hire@company.com", password="nope"))
        assert exc_info.value.message == "Invalid credentials"

    async def test_external_account_cannot_login(self, test_session, make_user):
        user = await make_user(with_password=False)
        with pytest.raises(AuthenticationError):
            await AuthService(test_session).authenticate_user(LoginRequest(email=user.email, password="x"))

    async def test_refresh_rotates_token(self, test_session):
        service = AuthService(test_session)
        await service.register_user(_register_request())
        first = await service.authenticate_user(
            LoginRequest(email="new.hire@company.com", password="securepassword123")
        )

        second = await service.refresh_token(RefreshTokenRequest(refresh_token=first.refresh_token))

        assert second.refresh_token != first.refresh_token
        repo = RefreshTokenRepository(test_session)
        assert await repo.get_by_token(first.refresh_token) is None
        with pytest.raises(AuthenticationError):
            await service.refresh_token(RefreshTokenRequest(refresh_token=first.refresh_token))

    async def test_logout_drops_refresh_tokens(self, test_session):
        service = AuthService(test_session)
        await service.register_user(_register_request())
        tokens = await service.authenticate_user(
            LoginRequest(email="new.hire@company.com", password="securepassword123")
        )

        assert await service.logout_user(tokens.user.id, tokens.access_token) is True
        assert await RefreshTokenRepository(test_session).get_by_token(tokens.refresh_token) is None


class TestProfile:
    """Profile and account management."""

    async def test_update_profile(self, test_session, make_user):
        user = await make_user(name="Old Name")
        service = AuthService(test_session)

        updated = await service.update_user_profile(
            user.id, UserUpdateRequest(name="  New Name ", avatar_url="https://img/a.png")
        )
        assert updated.name == "New Name"
        assert updated.avatar_url == "https://img/a.png"

    async def test_get_missing_user(self, test_session):
        with pytest.raises(NotFoundError):
            await AuthService(test_session).get_current_user(uuid.uuid4())

    async def test_delete_account(self, test_session):
        service = AuthService(test_session)
        user = await service.register_user(_register_request())

        assert await service.delete_account(user.id) is True
        assert await test_session.scalar(select(func.count(TemplateItem.id))) == 0
        assert await test_session.scalar(select(func.count(Version.id))) == 0
        with pytest.raises(NotFoundError):
            await service.delete_account(user.id)
