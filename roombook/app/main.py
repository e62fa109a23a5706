from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from roombook.app.core.config import settings
from roombook.app.core.exception_handlers import register_exception_handlers
from roombook.app.core.logging_config import configure_logging
from roombook.app.core.redis_client import close_redis, init_redis
from roombook.app.db.session import dispose_engine
import roombook.app.routers.health as health
import roombook.app.routers.reservations as reservations
import roombook.app.routers.time_slots as time_slots


configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting room booking API (store={})", settings.STORE_BACKEND)
    await init_redis()
    try:
        yield
    finally:
        await close_redis()
        await dispose_engine()


app = FastAPI(
    title="Room Booking API",
    lifespan=lifespan,
)

register_exception_handlers(app)

app.include_router(health.router, prefix=settings.API_PREFIX)
app.include_router(reservations.router, prefix=settings.API_PREFIX)
app.include_router(time_slots.router, prefix=settings.API_PREFIX)
