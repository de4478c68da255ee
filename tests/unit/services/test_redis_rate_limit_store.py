from unittest.mock import AsyncMock, MagicMock

import pytest

from credcore.adapter.services.redis_rate_limit_store import RedisRateLimitStore
from credcore.app.services.rate_limiter import RateLimiter

WINDOW_MS = 15 * 60 * 1000
NOW_MS = 1_700_000_000_000


@pytest.fixture
def redis_client():
    client = MagicMock()
    client.script = AsyncMock()
    client.register_script = MagicMock(return_value=client.script)
    client.delete = AsyncMock()
    client.aclose = AsyncMock()
    return client


@pytest.mark.asyncio
async def test_hit_runs_fixed_window_script(redis_client):
    redis_client.script.return_value = [1, WINDOW_MS]
    store = RedisRateLimitStore(client=redis_client)

    record = await store.hit("login:a@b.c:1.2.3.4", WINDOW_MS, NOW_MS)

    redis_client.script.assert_awaited_once_with(
        keys=["ratelimit:login:a@b.c:1.2.3.4"], args=[WINDOW_MS]
    )
    assert record.count == 1
    assert record.window_start == NOW_MS
    assert record.reset_at(WINDOW_MS) == NOW_MS + WINDOW_MS


@pytest.mark.asyncio
async def test_reset_at_follows_remaining_ttl(redis_client):
    redis_client.script.return_value = [4, 60_000]
    store = RedisRateLimitStore(client=redis_client)

    record = await store.hit("id", WINDOW_MS, NOW_MS)

    assert record.count == 4
    assert record.reset_at(WINDOW_MS) == NOW_MS + 60_000


@pytest.mark.asyncio
async def test_limiter_blocks_on_shared_count(redis_client):
    redis_client.script.return_value = [6, 1000]
    limiter = RateLimiter(RedisRateLimitStore(client=redis_client), clock=lambda: NOW_MS)

    decision = await limiter.check("id", 5, WINDOW_MS)

    assert decision.blocked is True


@pytest.mark.asyncio
async def test_reset_deletes_key(redis_client):
    store = RedisRateLimitStore(client=redis_client)

    await store.reset("id")

    redis_client.delete.assert_awaited_once_with("ratelimit:id")


@pytest.mark.asyncio
async def test_redis_errors_propagate(redis_client):
    redis_client.script.side_effect = ConnectionError("redis down")
    limiter = RateLimiter(RedisRateLimitStore(client=redis_client), clock=lambda: NOW_MS)

    with pytest.raises(ConnectionError):
        await limiter.check("id", 5, WINDOW_MS)


@pytest.mark.asyncio
async def test_close_releases_client(redis_client):
    store = RedisRateLimitStore(client=redis_client)

    await store.close()

    redis_client.aclose.assert_awaited_once()
