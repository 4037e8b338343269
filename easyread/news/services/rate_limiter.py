"""
Fixed-window rate limiting for the public read API.

State lives in a RateLimitStore owned by the application. The in-memory store
is process-local and starts empty after a restart.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, ContextManager, Dict, Optional, Protocol


@dataclass(frozen=True)
class WindowState:
    count: int
    reset_at: float


class RateLimitStore(Protocol):
    def get(self, key: str) -> Optional[WindowState]:
        ...

    def set(self, key: str, state: WindowState) -> None:
        ...

    def lock(self) -> ContextManager:
        ...


class InMemoryRateLimitStore:
    """Dict-backed store; entries are overwritten on expiry, never evicted."""

    def __init__(self):
        self._entries: Dict[str, WindowState] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[WindowState]:
        return self._entries.get(key)

    def set(self, key: str, state: WindowState) -> None:
        self._entries[key] = state

    def lock(self) -> ContextManager:
        return self._lock

    def __len__(self) -> int:
        return len(self._entries)


class FixedWindowRateLimiter:
    def __init__(
        self,
        limit: int,
        window_seconds: float,
        store: Optional[RateLimitStore] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.limit = limit
        self.window_seconds = window_seconds
        self.store = store if store is not None else InMemoryRateLimitStore()
        self.clock = clock

    def hit(self, key: str) -> bool:
        """Record a request for key and return whether it is allowed."""
        now = self.clock()
        with self.store.lock():
            state = self.store.get(key)

            if state is None or now > state.reset_at:
                self.store.set(key, WindowState(count=1, reset_at=now + self.window_seconds))
                return True

            if state.count >= self.limit:
                return False

            self.store.set(key, WindowState(count=state.count + 1, reset_at=state.reset_at))
            return True


def describe_window(seconds: float) -> str:
    """Human readable window length, e.g. 3600 -> '1 hour'."""
    seconds = int(seconds)
    for unit_seconds, unit in ((3600, "hour"), (60, "minute")):
        if seconds >= unit_seconds and seconds % unit_seconds == 0:
            amount = seconds // unit_seconds
            return f"{amount} {unit}" if amount == 1 else f"{amount} {unit}s"
    return f"{seconds} second" if seconds == 1 else f"{seconds} seconds"
