"""Authentication middleware."""

from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.schemas.auth import Identity
from ..security import decode_access_token


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


class JWTBearer(HTTPBearer):
    """Resolves a bearer credential to the verified identity it carries."""

    def __init__(self, auto_error: bool = False):
        super().__init__(auto_error=auto_error)

    async def __call__(self, request: Request) -> Identity:
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
        if not credentials:
            raise _unauthorized("Not authenticated")
        if credentials.scheme.lower() != "bearer":
            raise _unauthorized("Invalid authentication scheme")

        payload = await decode_access_token(credentials.credentials)
        if not payload:
            raise _unauthorized("Invalid token or expired token")

        try:
            user_id = UUID(payload.get("sub", ""))
        except ValueError:
            raise _unauthorized("Invalid token subject")

        # stash the raw token for logout
        request.state.access_token = credentials.credentials
        return Identity(id=user_id, email=payload.get("email", ""), name=payload.get("name", ""))


jwt_bearer = JWTBearer()


async def get_current_identity(identity: Identity = Depends(jwt_bearer)) -> Identity:
    """Get the verified identity of the caller."""
    return identity


async def get_current_user_id(identity: Identity = Depends(jwt_bearer)) -> UUID:
    """Get current authenticated user ID."""
    return identity.id


async def get_current_token(request: Request, identity: Identity = Depends(jwt_bearer)) -> str:
    """Raw bearer token of the authenticated request."""
    return request.state.access_token
