"""Account password hashing."""

from typing import Optional

from passlib.context import CryptContext

# bcrypt_sha256 pre-hashes with SHA-256, so passwords over 72 bytes are not truncated
pwd_context = CryptContext(schemes=["bcrypt_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """False for externally provisioned accounts, which store no hash."""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)
