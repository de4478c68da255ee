from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from credcore.adapter.services.memory_rate_limit_store import InMemoryRateLimitStore
from credcore.app.errors import RateLimitExceeded
from credcore.app.services.rate_limiter import RateLimiter, RateLimitPolicy

WINDOW_MS = 60 * 60 * 1000
START_MS = 1_700_000_000_000


class FakeClock:
    def __init__(self, now_ms: int = START_MS):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return RateLimiter(InMemoryRateLimitStore(), clock=clock)


@pytest.mark.asyncio
async def test_blocks_after_max_attempts(limiter):
    decisions = [await limiter.check("register:a@b.c:1.2.3.4", 5, WINDOW_MS) for _ in range(6)]

    assert [d.blocked for d in decisions] == [False] * 5 + [True]
    assert [d.remaining for d in decisions] == [4, 3, 2, 1, 0, 0]


@pytest.mark.asyncio
async def test_reset_at_is_end_of_window(limiter):
    decision = await limiter.check("id", 5, WINDOW_MS)

    assert decision.reset_at == datetime.fromtimestamp((START_MS + WINDOW_MS) / 1000, UTC)


@pytest.mark.asyncio
async def test_window_elapse_starts_new_window(limiter, clock):
    for _ in range(6):
        await limiter.check("id", 5, WINDOW_MS)

    clock.advance(WINDOW_MS)
    decision = await limiter.check("id", 5, WINDOW_MS)

    assert decision.blocked is False
    assert decision.remaining == 4


@pytest.mark.asyncio
async def test_still_blocked_just_before_window_ends(limiter, clock):
    for _ in range(5):
        await limiter.check("id", 5, WINDOW_MS)

    clock.advance(WINDOW_MS - 1)
    decision = await limiter.check("id", 5, WINDOW_MS)

    assert decision.blocked is True


@pytest.mark.asyncio
async def test_clear_resets_identifier(limiter):
    for _ in range(6):
        await limiter.check("login:a@b.c:1.2.3.4", 5, WINDOW_MS)

    await limiter.clear("login:a@b.c:1.2.3.4")
    decision = await limiter.check("login:a@b.c:1.2.3.4", 5, WINDOW_MS)

    assert decision.blocked is False
    assert decision.remaining == 4


@pytest.mark.asyncio
async def test_identifiers_are_independent(limiter):
    for _ in range(6):
        await limiter.check("forgot:a@b.c", 3, WINDOW_MS)

    decision = await limiter.check("forgot:x@y.z", 3, WINDOW_MS)

    assert decision.blocked is False


@pytest.mark.asyncio
async def test_enforce_raises_when_blocked(limiter):
    policy = RateLimitPolicy(max_attempts=3, window_ms=WINDOW_MS)
    for _ in range(3):
        await limiter.enforce("forgot:a@b.c", policy)

    with pytest.raises(RateLimitExceeded) as exc_info:
        await limiter.enforce("forgot:a@b.c", policy)

    assert exc_info.value.identifier == "forgot:a@b.c"
    assert exc_info.value.reset_at == datetime.fromtimestamp(
        (START_MS + WINDOW_MS) / 1000, UTC
    )


@pytest.mark.asyncio
async def test_store_failure_propagates(clock):
    store = AsyncMock()
    store.hit.side_effect = ConnectionError("store unavailable")
    limiter = RateLimiter(store, clock=clock)

    with pytest.raises(ConnectionError):
        await limiter.check("id", 5, WINDOW_MS)


@pytest.mark.asyncio
async def test_prune_drops_elapsed_windows(limiter, clock):
    await limiter.check("old", 5, WINDOW_MS)
    clock.advance(WINDOW_MS)
    await limiter.check("fresh", 5, WINDOW_MS)

    assert await limiter.prune() == 1
    assert await limiter.prune() == 0
