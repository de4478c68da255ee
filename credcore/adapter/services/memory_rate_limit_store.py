from threading import Lock
from typing import Dict

from credcore.app.repositories.rate_limit_store import IRateLimitStore, RateLimitRecord


class InMemoryRateLimitStore(IRateLimitStore):
    """
    Process-local rate limit counters.

    Correct for a single instance only; run several instances against
    RedisRateLimitStore instead.
    """

    def __init__(self):
        self._records: Dict[str, RateLimitRecord] = {}
        self._windows: Dict[str, int] = {}
        self._lock = Lock()

    async def hit(self, identifier: str, window_ms: int, now_ms: int) -> RateLimitRecord:
        with self._lock:
            record = self._records.get(identifier)

            if record is None or now_ms >= record.reset_at(self._windows[identifier]):
                record = RateLimitRecord(identifier=identifier, window_start=now_ms, count=1)
                self._records[identifier] = record
                self._windows[identifier] = window_ms
            else:
                record.count += 1

            return RateLimitRecord(record.identifier, record.window_start, record.count)

    async def reset(self, identifier: str) -> None:
        with self._lock:
            self._records.pop(identifier, None)
            self._windows.pop(identifier, None)

    async def prune(self, now_ms: int) -> int:
        with self._lock:
            stale = [
                key
                for key, record in self._records.items()
                if now_ms >= record.reset_at(self._windows[key])
            ]
            for key in stale:
                del self._records[key]
                del self._windows[key]
            return len(stale)
