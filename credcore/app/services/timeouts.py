import asyncio
from typing import Awaitable, TypeVar

from credcore.app.errors import StoreTimeout

T = TypeVar("T")

DEFAULT_STORE_TIMEOUT = 5.0


async def with_store_timeout(awaitable: Awaitable[T], seconds: float) -> T:
    """
    Await a store call under a deadline.

    A timeout raises StoreTimeout, which is an AuthenticationError, so a slow
    store can never let a request through.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError as exc:
        raise StoreTimeout(f"Store call exceeded {seconds}s") from exc
