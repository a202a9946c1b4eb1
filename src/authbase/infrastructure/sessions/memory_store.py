"""Process-local session store for development and tests.

Entries live in a dict and expire lazily on read. State is lost on restart
and is not shared between worker processes.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from authbase.application.ports import SessionStore


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MemorySessionStore(SessionStore):
    """In-memory SessionStore with per-key TTL."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self.clock = clock
        self._entries: dict[str, tuple[str, datetime]] = {}

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._entries[key] = (value, self.clock() + timedelta(seconds=ttl_seconds))

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self.clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return value

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        now = self.clock()
        return sum(1 for _, expires_at in self._entries.values() if expires_at > now)
