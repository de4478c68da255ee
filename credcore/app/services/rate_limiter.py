"""
Rate Limiter

Fixed-window attempt counting in front of authentication-sensitive endpoints.
"""

import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Callable, Optional

from credcore.app.errors import RateLimitExceeded
from credcore.app.repositories.rate_limit_store import IRateLimitStore

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class RateLimitDecision:
    blocked: bool
    remaining: int
    reset_at: datetime


@dataclass(frozen=True)
class RateLimitPolicy:
    max_attempts: int
    window_ms: int


class RateLimiter:
    """
    Fixed-window rate limiter over an injected counter store.

    Business Rules:
    - Calls 1..max_attempts in a window pass, the next one is blocked
    - A call after the window elapsed starts a new window at count 1
    - clear() resets an identifier after a successful authentication
    - Store errors propagate, they never mean "not limited"
    """

    def __init__(self, store: IRateLimitStore, clock: Optional[Callable[[], int]] = None):
        self.store = store
        self._clock = clock or _now_ms

    async def check(
        self, identifier: str, max_attempts: int, window_ms: int
    ) -> RateLimitDecision:
        record = await self.store.hit(identifier, window_ms, self._clock())
        reset_at = datetime.fromtimestamp(record.reset_at(window_ms) / 1000, UTC)

        if record.count > max_attempts:
            return RateLimitDecision(blocked=True, remaining=0, reset_at=reset_at)

        return RateLimitDecision(
            blocked=False, remaining=max_attempts - record.count, reset_at=reset_at
        )

    async def enforce(self, identifier: str, policy: RateLimitPolicy) -> RateLimitDecision:
        decision = await self.check(identifier, policy.max_attempts, policy.window_ms)
        if decision.blocked:
            logger.warning(f"Rate limit exceeded for {identifier}")
            raise RateLimitExceeded(identifier, decision.reset_at)
        return decision

    async def clear(self, identifier: str) -> None:
        await self.store.reset(identifier)

    async def prune(self) -> int:
        return await self.store.prune(self._clock())
