"""Security utilities."""

from .jwt import (
    blacklist_token,
    create_access_token,
    create_identity_token,
    decode_access_token,
)
from .password import hash_password, verify_password

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "create_identity_token",
    "decode_access_token",
    "blacklist_token",
]
