"""
Unit tests for the bearer-token dependency.
"""

import uuid
from datetime import timedelta

import pytest
from fastapi import Depends, FastAPI
from httpx import ASGITransport, AsyncClient

from src.onboardhub.core.schemas.auth import Identity
from src.onboardhub.middleware.auth import get_current_identity, get_current_token
from src.onboardhub.security.jwt import create_access_token, create_identity_token


@pytest.fixture
async def client():
    app = FastAPI()

    @app.get("/whoami")
    async def whoami(identity: Identity = Depends(get_current_identity)):
        return identity.model_dump(mode="json")

    @app.get("/token")
    async def token(raw: str = Depends(get_current_token)):
        return {"token": raw}

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def test_valid_token_yields_identity(client):
    user_id = uuid.uuid4()
    token = create_identity_token(user_id, "jane@company.com", "Jane")

    response = await client.get("/whoami", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json() == {"id": str(user_id), "email": "jane@company.com", "name": "Jane"}


async def test_raw_token_is_exposed(client):
    token = create_identity_token(uuid.uuid4(), "jane@company.com", "Jane")
    response = await client.get("/token", headers={"Authorization": f"Bearer {token}"})
    assert response.json() == {"token": token}


async def test_missing_header(client):
    response = await client.get("/whoami")
    assert response.status_code == 401
    assert response.json()["detail"] == "Not authenticated"
    assert response.headers["www-authenticate"] == "Bearer"


async def test_wrong_scheme(client):
    response = await client.get("/whoami", headers={"Authorization": "Basic dXNlcjpwYXNz"})
    assert response.status_code == 401


async def test_expired_token(client):
    token = create_access_token({"sub": str(uuid.uuid4())}, expires_delta=timedelta(seconds=-1))
    response = await client.get("/whoami", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token or expired token"


async def test_token_without_uuid_subject(client):
    token = create_access_token({"sub": "someone"})
    response = await client.get("/whoami", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token subject"
