from typing import Optional

import redis.asyncio as aioredis

from credcore.app.repositories.rate_limit_store import IRateLimitStore, RateLimitRecord


class RedisRateLimitStore(IRateLimitStore):
    """Rate limit counters shared by every instance through Redis."""

    KEY_PREFIX = "ratelimit:"

    # Atomic fixed window: the first hit creates the key with a TTL equal to
    # the window, later hits only increment it.
    _FIXED_WINDOW_SCRIPT = """
local key = KEYS[1]
local window_ms = tonumber(ARGV[1])

local count = redis.call('INCR', key)
if count == 1 then
  redis.call('PEXPIRE', key, window_ms)
end

local ttl = redis.call('PTTL', key)
if ttl < 0 then
  redis.call('PEXPIRE', key, window_ms)
  ttl = window_ms
end
return {count, ttl}
"""

    def __init__(
        self,
        redis_url: Optional[str] = None,
        *,
        client: Optional[aioredis.Redis] = None,
        socket_timeout: float = 5.0,
    ):
        self.client = client or aioredis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        self._fixed_window = self.client.register_script(self._FIXED_WINDOW_SCRIPT)

    def _key(self, identifier: str) -> str:
        return f"{self.KEY_PREFIX}{identifier}"

    async def hit(self, identifier: str, window_ms: int, now_ms: int) -> RateLimitRecord:
        count, ttl = await self._fixed_window(keys=[self._key(identifier)], args=[window_ms])
        count = int(count)
        reset_at = now_ms + int(ttl)
        return RateLimitRecord(
            identifier=identifier, window_start=reset_at - window_ms, count=count
        )

    async def reset(self, identifier: str) -> None:
        await self.client.delete(self._key(identifier))

    async def prune(self, now_ms: int) -> int:
        # Keys expire on their own.
        return 0

    async def close(self) -> None:
        await self.client.aclose()
