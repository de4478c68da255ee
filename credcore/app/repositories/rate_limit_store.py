from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class RateLimitRecord:
    """Attempt counter for one identifier within one fixed window (epoch ms)."""

    identifier: str
    window_start: int
    count: int

    def reset_at(self, window_ms: int) -> int:
        return self.window_start + window_ms


class IRateLimitStore(ABC):
    """Rate limit counter storage interface - application layer"""

    @abstractmethod
    async def hit(self, identifier: str, window_ms: int, now_ms: int) -> RateLimitRecord:
        """
        Record one attempt and return the window's record after the increment.

        Starts a new window with count 1 when none exists or the previous
        window has elapsed.
        """
        pass

    @abstractmethod
    async def reset(self, identifier: str) -> None:
        """Drop the counter for an identifier"""
        pass

    @abstractmethod
    async def prune(self, now_ms: int) -> int:
        """Remove records whose window has elapsed. Returns count removed."""
        pass
