from fastapi import APIRouter, Query

from roombook.app.routers.schemas import TimeSlotsOut
from roombook.app.services.slots import available_end_times, start_time_options


router = APIRouter()


@router.get("/time-slots", response_model=TimeSlotsOut)
async def list_time_slots(
    start_time: str | None = Query(default=None, pattern=r"^\d{2}:\d{2}$"),
) -> TimeSlotsOut:
    """Picker options; end times are narrowed to those after ``start_time``."""
    return TimeSlotsOut(
        startTimes=start_time_options(),
        endTimes=available_end_times(start_time),
    )
