"""
In-memory, per-address limiter for admin login attempts.

Fixed windows: the first attempt from an address opens a window of
`window_seconds`; every attempt inside it (successful or not) counts.
The store is bounded: expired windows are swept periodically and the
least recently used address is dropped once `max_entries` is reached.
"""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass
class RateLimitRecord:
    count: int
    reset_at: float


class LoginRateLimiter:
    def __init__(
        self,
        max_attempts: int = 12,
        window_seconds: int = 15 * 60,
        max_entries: int = 10_000,
        sweep_interval_seconds: int = 60,
        clock: Callable[[], float] = time.time,
    ):
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.max_entries = max_entries
        self.sweep_interval_seconds = sweep_interval_seconds
        self._clock = clock
        self._records: "OrderedDict[str, RateLimitRecord]" = OrderedDict()
        self._lock = threading.Lock()
        self._next_sweep = clock() + sweep_interval_seconds

    def hit(self, key: str) -> bool:
        """Record one attempt from `key`; return True if it is within the limit."""
        now = self._clock()
        with self._lock:
            self._maybe_sweep(now)
            rec = self._records.get(key)
            if rec is None or rec.reset_at < now:
                rec = RateLimitRecord(count=1, reset_at=now + self.window_seconds)
                self._records[key] = rec
            else:
                rec.count += 1
            self._records.move_to_end(key)
            while len(self._records) > self.max_entries:
                self._records.popitem(last=False)
            return rec.count <= self.max_attempts

    def get(self, key: str) -> Optional[RateLimitRecord]:
        with self._lock:
            return self._records.get(key)

    def sweep(self) -> int:
        """Drop every record whose window has passed. Returns the number removed."""
        with self._lock:
            return self._sweep(self._clock())

    def __len__(self) -> int:
        return len(self._records)

    def _maybe_sweep(self, now: float) -> None:
        if now >= self._next_sweep:
            self._sweep(now)

    def _sweep(self, now: float) -> int:
        expired = [k for k, rec in self._records.items() if rec.reset_at < now]
        for k in expired:
            del self._records[k]
        self._next_sweep = now + self.sweep_interval_seconds
        return len(expired)
