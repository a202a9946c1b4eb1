"""Session store backends.

The backend is chosen by ``Settings.session_store``. Redis is the default;
the in-memory backend suits single-process development and tests.
"""

from authbase.application.ports import SessionStore
from authbase.core.config import Settings
from authbase.infrastructure.sessions.memory_store import MemorySessionStore
from authbase.infrastructure.sessions.redis_store import RedisSessionStore


def create_session_store(settings: Settings) -> SessionStore:
    """Build the configured session store.

    Args:
        settings: Application settings.

    Returns:
        SessionStore: A new, unshared store instance.
    """
    if settings.session_store == "memory":
        return MemorySessionStore()
    return RedisSessionStore.from_url(
        settings.redis_url,
        socket_timeout=settings.redis_socket_timeout,
    )


__all__ = [
    "MemorySessionStore",
    "RedisSessionStore",
    "SessionStore",
    "create_session_store",
]
