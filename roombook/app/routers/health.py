from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from roombook.app.core import redis_client as redis_module
from roombook.app.core.config import settings
from roombook.app.db.session import get_session


router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, bool]:
    """Basic liveness probe."""
    return {"ok": True}


@router.get("/readiness")
async def readiness(session: AsyncSession = Depends(get_session)) -> dict[str, bool]:
    """Ensure the document store and Redis are reachable."""
    if redis_module.redis_client is None:
        raise HTTPException(status_code=503, detail="Redis unavailable")

    if settings.STORE_BACKEND == "postgres":
        try:
            await session.execute(text("SELECT 1"))
        except (DBAPIError, OSError) as exc:
            logger.warning("Readiness: Postgres unreachable: {}", exc)
            raise HTTPException(status_code=503, detail="Database unavailable") from exc

    try:
        await redis_module.redis_client.ping()
    except (RedisError, OSError) as exc:
        logger.warning("Readiness: Redis unreachable: {}", exc)
        raise HTTPException(status_code=503, detail="Redis unavailable") from exc

    return {"ready": True}
