"""
Authentication and account schemas.

These schemas define the API contracts for registration, login,
JWT token management and profile updates.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator


class LoginRequest(BaseModel):
    """User login request schema."""

    email: EmailStr = Field(description="Account email")
    password: str = Field(min_length=1, max_length=128, description="User password")

    model_config = ConfigDict(
        json_schema_extra={"example": {"email": "jane@company.com", "password": "securepassword123"}}
    )


class RegisterRequest(BaseModel):
    """User registration request schema."""

    email: EmailStr = Field(description="Unique account email")
    password: str = Field(min_length=8, max_length=128, description="User password")
    confirm_password: Optional[str] = Field(
        default=None, max_length=128, description="Password confirmation"
    )
    name: str = Field(min_length=1, max_length=100, description="Display name")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be empty")
        return v

    @model_validator(mode="after")
    def passwords_match(self):
        """Validate that passwords match when a confirmation is sent."""
        if self.confirm_password is not None and self.confirm_password != self.password:
            raise ValueError("Passwords do not match")
        return self

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "new.hire@company.com",
                "password": "securepassword123",
                "confirm_password": "securepassword123",
                "name": "New Hire",
            }
        }
    )


class UserResponse(BaseModel):
    """User information response schema."""

    id: uuid.UUID = Field(description="User unique identifier")
    email: str = Field(description="Account email")
    name: str = Field(description="Display name")
    avatar_url: Optional[str] = Field(default=None, description="Profile image URL")
    is_active: bool = Field(description="Whether user account is active")
    created_at: datetime = Field(description="Account creation timestamp")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    """JWT token response schema."""

    access_token: str = Field(description="JWT access token")
    refresh_token: str = Field(description="Opaque refresh token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(description="Token expiration time in seconds")
    user: UserResponse = Field(description="User information")


class RefreshTokenRequest(BaseModel):
    """Refresh token request schema."""

    refresh_token: str = Field(min_length=1, description="Refresh token")


class UserUpdateRequest(BaseModel):
    """User profile update request schema."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    avatar_url: Optional[str] = Field(default=None, max_length=500)


class Identity(BaseModel):
    """Verified identity handed to the core by the auth layer."""

    id: uuid.UUID
    email: str
    name: str
