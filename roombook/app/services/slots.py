from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from roombook.app.core.config import settings

if TYPE_CHECKING:
    from roombook.app.models.reservation import ReservationFields


def _to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def _format_minutes(total: int) -> str:
    return f"{total // 60:02d}:{total % 60:02d}"


def time_slots(
    day_start: str | None = None,
    day_end: str | None = None,
    step_minutes: int | None = None,
) -> list[str]:
    """Return the "HH:MM" grid from day_start to day_end inclusive."""
    start = _to_minutes(day_start or settings.SERVICE_DAY_START)
    end = _to_minutes(day_end or settings.SERVICE_DAY_END)
    step = step_minutes or settings.SLOT_MINUTES
    return [_format_minutes(minute) for minute in range(start, end + 1, step)]


def start_time_options() -> list[str]:
    # the closing slot can only end a booking
    return time_slots()[:-1]


def available_end_times(start_time: str | None) -> list[str]:
    slots = time_slots()
    if not start_time:
        return slots
    return [slot for slot in slots if slot > start_time]


def group_by_day(
    reservations: Iterable[ReservationFields],
    month: str | None = None,
) -> dict[str, list[ReservationFields]]:
    """Key reservations by the YYYY-MM-DD part of their date, keeping input order.

    ``month`` ("YYYY-MM") restricts the result to days of that month.
    """
    days: dict[str, list[ReservationFields]] = {}
    for reservation in reservations:
        day = reservation.date.split("T")[0]
        if month and not day.startswith(f"{month}-"):
            continue
        days.setdefault(day, []).append(reservation)
    return days
