from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roombook.app.core import redis_client as redis_module
from roombook.app.core.config import settings
from roombook.app.db.postgres_store import PostgresDocumentStore
from roombook.app.db.session import get_session
from roombook.app.db.store import DocumentStore, InMemoryDocumentStore
from roombook.app.services.cache import ReservationListCache
from roombook.app.services.reservations import ReservationService


# Backing store for STORE_BACKEND=memory; lives as long as the process
_memory_store = InMemoryDocumentStore()


def get_store(session: AsyncSession = Depends(get_session)) -> DocumentStore:
    if settings.STORE_BACKEND == "memory":
        return _memory_store
    return PostgresDocumentStore(session)


def get_reservation_service(store: DocumentStore = Depends(get_store)) -> ReservationService:
    cache = None
    if redis_module.redis_client is not None:
        cache = ReservationListCache(redis_module.redis_client)
    return ReservationService(store, admin_pin=settings.ADMIN_PIN, cache=cache)
