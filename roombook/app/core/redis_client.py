import redis.asyncio as redis

from roombook.app.core.config import settings


# Backs the reservation list cache; stays None when Redis is not configured for this process
redis_client: redis.Redis | None = None


async def init_redis() -> None:
    """Initialise the shared Redis connection used by the list cache."""
    global redis_client
    redis_client = redis.from_url(
        settings.REDIS_URL,
        decode_responses=True,
        socket_timeout=settings.REDIS_SOCKET_TIMEOUT_SECONDS,
    )


async def close_redis() -> None:
    """Close the Redis connection, leaving the cache disabled."""
    global redis_client
    if redis_client is not None:
        await redis_client.aclose()
        redis_client = None
