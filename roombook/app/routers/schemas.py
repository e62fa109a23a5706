from pydantic import BaseModel

from roombook.app.models.reservation import ReservationPublic


class MessageOut(BaseModel):
    message: str


class PinCheckIn(BaseModel):
    pin: str


class PinCheckOut(BaseModel):
    ok: bool


class CalendarOut(BaseModel):
    # "YYYY-MM-DD" -> reservations on that day
    days: dict[str, list[ReservationPublic]]


class TimeSlotsOut(BaseModel):
    startTimes: list[str]
    endTimes: list[str]
