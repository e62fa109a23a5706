from typing import Any

from fastapi import APIRouter, Body, Depends, Header, Query, status

from roombook.app.core.errors import NotFoundError
from roombook.app.models.reservation import Reservation, ReservationPublic
from roombook.app.routers.dependencies import get_reservation_service
from roombook.app.routers.schemas import CalendarOut, MessageOut, PinCheckIn, PinCheckOut
from roombook.app.services.reservations import ReservationService


router = APIRouter()

PIN_HEADER = "X-Reservation-Pin"


def _public(reservation: Reservation) -> ReservationPublic:
    return ReservationPublic.model_validate(reservation.model_dump(exclude={"pin"}))


@router.get("/reservations", response_model=list[ReservationPublic])
async def list_reservations(
    service: ReservationService = Depends(get_reservation_service),
) -> list[ReservationPublic]:
    return [_public(reservation) for reservation in await service.list()]


@router.post("/reservations", response_model=Reservation, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    payload: dict[str, Any] = Body(...),
    service: ReservationService = Depends(get_reservation_service),
) -> Reservation:
    # The creator gets their PIN echoed back once; reads never include it.
    return await service.create(payload)


@router.get("/reservations/calendar", response_model=CalendarOut)
async def reservations_calendar(
    month: str | None = Query(default=None, pattern=r"^\d{4}-\d{2}$"),
    service: ReservationService = Depends(get_reservation_service),
) -> CalendarOut:
    days = await service.calendar(month)
    return CalendarOut(days={day: [_public(r) for r in reservations] for day, reservations in days.items()})


@router.get("/reservations/{reservation_id}", response_model=ReservationPublic)
async def get_reservation(
    reservation_id: str,
    service: ReservationService = Depends(get_reservation_service),
) -> ReservationPublic:
    reservation = await service.get(reservation_id)
    if reservation is None:
        raise NotFoundError()
    return _public(reservation)


@router.put("/reservations/{reservation_id}", response_model=ReservationPublic)
async def update_reservation(
    reservation_id: str,
    payload: dict[str, Any] = Body(...),
    pin: str = Header(alias=PIN_HEADER),
    service: ReservationService = Depends(get_reservation_service),
) -> ReservationPublic:
    return _public(await service.update(reservation_id, payload, supplied_pin=pin))


@router.delete("/reservations/{reservation_id}", response_model=MessageOut)
async def delete_reservation(
    reservation_id: str,
    pin: str = Header(alias=PIN_HEADER),
    service: ReservationService = Depends(get_reservation_service),
) -> MessageOut:
    await service.delete(reservation_id, pin)
    return MessageOut(message="Reservation deleted successfully.")


@router.post("/reservations/{reservation_id}/verify-pin", response_model=PinCheckOut)
async def verify_pin(
    reservation_id: str,
    payload: PinCheckIn,
    service: ReservationService = Depends(get_reservation_service),
) -> PinCheckOut:
    await service.verify_pin(reservation_id, payload.pin)
    return PinCheckOut(ok=True)
