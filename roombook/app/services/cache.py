import json
from typing import Any

import redis.asyncio as redis
from loguru import logger
from redis.exceptions import RedisError

from roombook.app.core.config import settings


GENERATION_KEY = "reservations:list:generation"
LIST_KEY_PREFIX = "reservations:list:date:desc"


def list_key(generation: int) -> str:
    return f"{LIST_KEY_PREFIX}:{generation}"


class ReservationListCache:
    """Caches the ordered reservation list in Redis under a generation number.

    Every write bumps the generation, so a list read that raced a write can
    only fill a key nobody reads any more; stale keys expire with the TTL.
    Redis errors are logged and treated as a miss so reads fall through to the store.
    """

    def __init__(self, client: redis.Redis, ttl_seconds: int | None = None) -> None:
        self._client = client
        self._ttl = ttl_seconds if ttl_seconds is not None else settings.LIST_CACHE_TTL_SECONDS

    async def generation(self) -> int | None:
        """Current generation, or None when Redis cannot be read."""
        try:
            value = await self._client.get(GENERATION_KEY)
        except RedisError as exc:
            logger.warning("Reservation list cache generation read failed: {}", exc)
            return None
        return int(value) if value is not None else 0

    async def get(self, generation: int) -> list[dict[str, Any]] | None:
        try:
            cached = await self._client.get(list_key(generation))
        except RedisError as exc:
            logger.warning("Reservation list cache read failed: {}", exc)
            return None
        return json.loads(cached) if cached is not None else None

    async def set(self, generation: int, docs: list[dict[str, Any]]) -> None:
        try:
            await self._client.set(list_key(generation), json.dumps(docs), ex=self._ttl)
        except RedisError as exc:
            logger.warning("Reservation list cache write failed: {}", exc)

    async def invalidate(self) -> None:
        try:
            await self._client.incr(GENERATION_KEY)
        except RedisError as exc:
            logger.warning("Reservation list cache invalidation failed: {}", exc)
