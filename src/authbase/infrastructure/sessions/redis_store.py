"""Redis-backed session store."""

import redis.asyncio as aioredis

from authbase.application.ports import SessionStore
from authbase.core.logging import get_logger

logger = get_logger(__name__)


class RedisSessionStore(SessionStore):
    """Thin Redis wrapper for refresh-token fingerprints.

    Uses plain SET with EX so concurrent writers race with last-write-wins
    semantics. Client errors (connection, timeout) propagate to the caller.
    """

    def __init__(self, client: aioredis.Redis) -> None:
        self.client = client

    @classmethod
    def from_url(cls, redis_url: str, *, socket_timeout: float = 5.0) -> "RedisSessionStore":
        client = aioredis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        return cls(client)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        await self.client.set(key, value, ex=ttl_seconds)

    async def get(self, key: str) -> str | None:
        return await self.client.get(key)

    async def delete(self, key: str) -> None:
        await self.client.delete(key)

    async def ping(self) -> bool:
        """Check if the Redis server answers.

        Returns:
            bool: True if the server replied, False otherwise.
        """
        try:
            return bool(await self.client.ping())
        except Exception as e:
            logger.error("Redis connection check failed", error=str(e))
            return False

    async def close(self) -> None:
        await self.client.aclose()
        logger.info("Redis client closed")
