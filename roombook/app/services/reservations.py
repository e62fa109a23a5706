from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from loguru import logger

from roombook.app.core.errors import InvalidPinError, NotFoundError
from roombook.app.db.store import DocumentStore
from roombook.app.models.reservation import Reservation, validate_create, validate_update
from roombook.app.services.cache import ReservationListCache
from roombook.app.services.slots import group_by_day


COLLECTION = "reservations"


class ReservationService:
    """Validates reservation input and applies it to the document store.

    A reservation may be changed by whoever supplies its PIN, or the admin
    override PIN (compared case-insensitively). Nothing here prevents two
    reservations from overlapping; concurrent writes to one record race and
    the last one wins.
    """

    def __init__(
        self,
        store: DocumentStore,
        *,
        admin_pin: str = "",
        cache: ReservationListCache | None = None,
    ) -> None:
        self._store = store
        self._admin_pin = admin_pin
        self._cache = cache

    def is_authorized(self, reservation: Reservation, supplied_pin: str | None) -> bool:
        if not supplied_pin:
            return False
        if self._admin_pin and supplied_pin.upper() == self._admin_pin.upper():
            return True
        return supplied_pin == reservation.pin

    def _authorize(self, reservation: Reservation, supplied_pin: str | None) -> None:
        if not self.is_authorized(reservation, supplied_pin):
            logger.warning("Rejected PIN for reservation {}", reservation.id)
            raise InvalidPinError()

    async def _require(self, reservation_id: str) -> Reservation:
        reservation = await self.get(reservation_id)
        if reservation is None:
            raise NotFoundError()
        return reservation

    async def _invalidate(self) -> None:
        if self._cache is not None:
            await self._cache.invalidate()

    async def get(self, reservation_id: str) -> Reservation | None:
        doc = await self._store.get(COLLECTION, reservation_id)
        return Reservation.model_validate(doc) if doc is not None else None

    async def list(self) -> list[Reservation]:
        """All reservations, newest date first."""
        # read before the store so a write landing mid-query retires this entry
        generation = await self._cache.generation() if self._cache is not None else None
        docs = await self._cache.get(generation) if generation is not None else None
        if docs is None:
            docs = await self._store.query_all(COLLECTION, "date", "desc")
            if generation is not None:
                await self._cache.set(generation, docs)
        return [Reservation.model_validate(doc) for doc in docs]

    async def calendar(self, month: str | None = None) -> dict[str, list[Reservation]]:
        return group_by_day(await self.list(), month)

    async def create(self, raw: Mapping[str, Any]) -> Reservation:
        data = validate_create(raw).model_dump()
        reservation_id = await self._store.create(COLLECTION, data)
        await self._invalidate()
        logger.info("Created reservation {} on {} {}-{}", reservation_id, data["date"], data["startTime"], data["endTime"])
        return Reservation(id=reservation_id, **data)

    async def update(
        self,
        reservation_id: str,
        raw: Mapping[str, Any],
        supplied_pin: str | None = None,
    ) -> Reservation:
        """Replace the mutable fields; ``id`` and ``pin`` are kept.

        When ``supplied_pin`` is given it must authorize the change.
        """
        changes = validate_update(raw).model_dump()
        existing = await self._require(reservation_id)
        if supplied_pin is not None:
            self._authorize(existing, supplied_pin)
        await self._store.update(COLLECTION, reservation_id, changes)
        await self._invalidate()
        logger.info("Updated reservation {}", reservation_id)
        return existing.model_copy(update=changes)

    async def delete(self, reservation_id: str, supplied_pin: str) -> None:
        existing = await self._require(reservation_id)
        self._authorize(existing, supplied_pin)
        await self._store.delete(COLLECTION, reservation_id)
        await self._invalidate()
        logger.info("Deleted reservation {}", reservation_id)

    async def verify_pin(self, reservation_id: str, supplied_pin: str) -> Reservation:
        """Check a PIN before the caller opens the edit form."""
        existing = await self._require(reservation_id)
        self._authorize(existing, supplied_pin)
        return existing
