"""
Unit tests for HealthService.
"""

import src.onboardhub.core.services.health_service as health_module
from src.onboardhub.core.services.health_service import HealthService


class _FakeRedis:
    def __init__(self, fail=False):
        self.fail = fail

    async def ping(self):
        if self.fail:
            raise ConnectionError("connection refused")
        return True


class _FakeRedisClient:
    def __init__(self, connected=True, fail=False):
        self.is_connected = connected
        self.redis = _FakeRedis(fail) if connected else None


class _BrokenSession:
    async def execute(self, *args, **kwargs):
        raise RuntimeError("database is gone")


async def test_healthy_with_redis(test_session, monkeypatch):
    monkeypatch.setattr(health_module, "get_redis_client", lambda: _FakeRedisClient())

    status = await HealthService(test_session).get_health_status()

    assert status.status == "healthy"
    assert status.checks["database"]["connected"] is True
    assert status.checks["redis"]["status"] == "healthy"


async def test_degraded_without_redis(test_session, monkeypatch):
    monkeypatch.setattr(health_module, "get_redis_client", lambda: _FakeRedisClient(connected=False))

    status = await HealthService(test_session).get_health_status()

    assert status.status == "degraded"
    assert status.checks["redis"] == {"connected": False, "status": "unavailable", "response_time_ms": None}


async def test_redis_ping_failure(test_session, monkeypatch):
    monkeypatch.setattr(health_module, "get_redis_client", lambda: _FakeRedisClient(fail=True))

    redis_health = await HealthService(test_session).check_redis_health()

    assert redis_health["connected"] is False
    assert "connection refused" in redis_health["error"]


async def test_unhealthy_without_database(monkeypatch):
    monkeypatch.setattr(health_module, "get_redis_client", lambda: _FakeRedisClient())

    status = await HealthService(_BrokenSession()).get_health_status()

    assert status.status == "unhealthy"
    assert status.checks["database"]["error"] == "database is gone"
