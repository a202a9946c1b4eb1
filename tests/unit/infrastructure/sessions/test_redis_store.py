"""Unit tests for the Redis session store with a mocked client."""

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from authbase.infrastructure.sessions import RedisSessionStore


@pytest.fixture
def redis_client():
    return AsyncMock()


@pytest.fixture
def store(redis_client):
    return RedisSessionStore(redis_client)


class TestRedisSessionStore:

    @pytest.mark.asyncio
    async def test_set_uses_expiry(self, store, redis_client):
        await store.set("refresh_token:1:a", "digest", 604800)
        redis_client.set.assert_awaited_once_with("refresh_token:1:a", "digest", ex=604800)

    @pytest.mark.asyncio
    async def test_get(self, store, redis_client):
        redis_client.get.return_value = "digest"

        assert await store.get("refresh_token:1:a") == "digest"
        redis_client.get.assert_awaited_once_with("refresh_token:1:a")

    @pytest.mark.asyncio
    async def test_get_missing(self, store, redis_client):
        redis_client.get.return_value = None
        assert await store.get("refresh_token:1:a") is None

    @pytest.mark.asyncio
    async def test_delete(self, store, redis_client):
        await store.delete("refresh_token:1:a")
        redis_client.delete.assert_awaited_once_with("refresh_token:1:a")

    @pytest.mark.asyncio
    async def test_errors_propagate(self, store, redis_client):
        """Test that connection errors are not hidden from the caller."""
        redis_client.get.side_effect = RedisConnectionError("connection refused")

        with pytest.raises(RedisConnectionError):
            await store.get("refresh_token:1:a")

    @pytest.mark.asyncio
    async def test_ping(self, store, redis_client):
        redis_client.ping.return_value = True
        assert await store.ping() is True

    @pytest.mark.asyncio
    async def test_ping_failure(self, store, redis_client):
        redis_client.ping.side_effect = RedisConnectionError("connection refused")
        assert await store.ping() is False

    @pytest.mark.asyncio
    async def test_close(self, store, redis_client):
        await store.close()
        redis_client.aclose.assert_awaited_once()


def test_from_url_decodes_responses():
    store = RedisSessionStore.from_url("redis://localhost:6379/3", socket_timeout=1.5)

    kwargs = store.client.connection_pool.connection_kwargs
    assert kwargs["decode_responses"] is True
    assert kwargs["socket_timeout"] == 1.5
    assert kwargs["db"] == 3
