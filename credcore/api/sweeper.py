"""
Background maintenance loop started from the application lifespan.
"""

import asyncio
import logging

from credcore.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from credcore.app.services.rate_limiter import RateLimiter
from credcore.app.use_cases.sessions import SweepExpiredSessionsUseCase

logger = logging.getLogger(__name__)


async def sweep_once(session_factory, rate_limiter: RateLimiter) -> None:
    async with session_factory() as session:
        await SweepExpiredSessionsUseCase(SqlAlchemyUnitOfWork(session)).execute()
    pruned = await rate_limiter.prune()
    if pruned:
        logger.debug(f"Pruned {pruned} expired rate limit record(s)")


async def run_sweeper(session_factory, rate_limiter: RateLimiter, interval_seconds: int) -> None:
    """Sweep expired sessions forever; a failed pass is logged and retried next interval."""
    while True:
        try:
            await sweep_once(session_factory, rate_limiter)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Expired session sweep failed")
        await asyncio.sleep(interval_seconds)
