"""Custom SQLAlchemy types for OnboardHub models with cross-DB support."""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, TypeDecorator


class GUID(TypeDecorator):
    """
    Platform-independent GUID/UUID type.

    - Uses PostgreSQL UUID type when available
    - Falls back to CHAR(36) storing hex string form on other DBs (e.g., SQLite)
    """

    impl = String(36)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            from sqlalchemy.dialects.postgresql import UUID as PG_UUID

            return dialect.type_descriptor(PG_UUID(as_uuid=True))
        return dialect.type_descriptor(String(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        # PostgreSQL expects uuid.UUID when as_uuid=True, others expect string
        if dialect.name == "postgresql":
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if dialect.name == "postgresql":
            # Already a uuid.UUID from PG when as_uuid=True
            return value
        # Coerce string back to uuid.UUID for SQLite/others
        return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize naive datetimes (SQLite drops tzinfo) to aware UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
