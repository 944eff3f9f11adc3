"""Redis client for session caching, token blacklisting and rate limiting.

Every call degrades to a no-op (or "allowed") while the client is not
connected, so the API keeps working without Redis.
"""

import json
from typing import Any, Dict, Optional
from uuid import UUID

import redis.asyncio as redis

from ..config import get_settings
from .logging import get_logger

logger = get_logger("redis")


class RedisClient:
    """Redis client for caching and session management."""

    def __init__(self):
        self.settings = get_settings()
        self.redis: Optional[redis.Redis] = None

    @property
    def is_connected(self) -> bool:
        return self.redis is not None

    async def connect(self) -> None:
        """Connect to Redis."""
        if self.redis is not None:
            return
        client = redis.from_url(
            self.settings.redis_url,
            max_connections=self.settings.redis_max_connections,
            decode_responses=True,
        )
        try:
            await client.ping()
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            await client.aclose()
            raise
        self.redis = client
        logger.info("Connected to Redis successfully")

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            logger.info("Disconnected from Redis")

    async def get(self, key: str) -> Optional[str]:
        if not self.redis:
            return None
        try:
            return await self.redis.get(key)
        except Exception as e:
            logger.error(f"Redis GET error for key {key}: {e}")
            return None

    async def set(self, key: str, value: str, expire: Optional[int] = None) -> bool:
        """Set value with optional expiration in seconds."""
        if not self.redis:
            return False
        try:
            if expire:
                return bool(await self.redis.setex(key, expire, value))
            return bool(await self.redis.set(key, value))
        except Exception as e:
            logger.error(f"Redis SET error for key {key}: {e}")
            return False

    async def delete(self, key: str) -> bool:
        if not self.redis:
            return False
        try:
            return await self.redis.delete(key) > 0
        except Exception as e:
            logger.error(f"Redis DELETE error for key {key}: {e}")
            return False

    async def exists(self, key: str) -> bool:
        if not self.redis:
            return False
        try:
            return await self.redis.exists(key) > 0
        except Exception as e:
            logger.error(f"Redis EXISTS error for key {key}: {e}")
            return False

    # Refresh-token sessions
    async def cache_user_session(self, session_id: str, user_data: Dict[str, Any], expire: int = 3600) -> bool:
        """Cache session data keyed by refresh token, indexed per user."""
        if not await self.set(f"session:{session_id}", json.dumps(user_data, default=str), expire):
            return False
        user_id = user_data.get("user_id")
        if user_id and self.redis:
            try:
                await self.redis.sadd(f"user_sessions:{user_id}", session_id)
                await self.redis.expire(f"user_sessions:{user_id}", expire)
            except Exception as e:
                logger.error(f"Failed to index session for user {user_id}: {e}")
        return True

    async def get_user_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        session_data = await self.get(f"session:{session_id}")
        if not session_data:
            return None
        try:
            return json.loads(session_data)
        except ValueError as e:
            logger.error(f"Corrupt session payload for {session_id[:8]}...: {e}")
            return None

    async def invalidate_user_sessions(self, user_id: UUID) -> bool:
        """Drop every cached session of a user (logout, account deletion)."""
        if not self.redis:
            return False
        index_key = f"user_sessions:{user_id}"
        try:
            session_ids = await self.redis.smembers(index_key)
            keys = [f"session:{sid}" for sid in session_ids] + [index_key]
            await self.redis.delete(*keys)
            return True
        except Exception as e:
            logger.error(f"Failed to invalidate user sessions: {e}")
            return False

    # Access-token blacklist
    async def add_to_blacklist(self, token_jti: str, expire: int = 900) -> bool:
        return await self.set(f"blacklist:{token_jti}", "blacklisted", expire)

    async def is_token_blacklisted(self, token_jti: str) -> bool:
        return await self.exists(f"blacklist:{token_jti}")

    # Rate limiting
    async def increment_rate_limit(self, key: str, expire: int = 60) -> int:
        """Increment a fixed-window counter; 0 when Redis is unavailable."""
        if not self.redis:
            return 0
        try:
            async with self.redis.pipeline(transaction=True) as pipe:
                pipe.incr(key)
                pipe.expire(key, expire)
                results = await pipe.execute()
            return int(results[0]) if results else 0
        except Exception as e:
            logger.error(f"Rate limit error for key {key}: {e}")
            return 0


# Singleton instance
_redis_client: Optional[RedisClient] = None


def get_redis_client() -> RedisClient:
    """Get Redis client singleton."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient()
    return _redis_client
