"""Reservation models and input validation.

Stored and returned records use the plain models (``Reservation``,
``ReservationPublic``). Raw form input goes through ``validate_create`` or
``validate_update``, which apply the field rules and turn pydantic's errors
into a field -> messages map carried by ``ReservationValidationError``.
"""

import re
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from roombook.app.core.errors import ReservationValidationError
from roombook.app.services.slots import time_slots


RoomSize = Literal["small", "large"]
ROOM_SIZES = ("small", "large")

TIME_PATTERN = re.compile(r"^(?:[01]\d|2[0-3]):[0-5]\d$|^24:00$", re.ASCII)
MOBILE_PATTERN = re.compile(r"^\d{3}-\d{3}-\d{4}$", re.ASCII)
PIN_PATTERN = re.compile(r"^\d{4}$", re.ASCII)


def normalize_date(value: str) -> str:
    """Return ``value`` as an ISO-8601 UTC timestamp with millisecond precision.

    A bare date is taken as midnight UTC and naive datetimes are assumed to
    be UTC, e.g. ``2025-06-01`` -> ``2025-06-01T00:00:00.000Z``.
    """
    if len(value) == 10:
        parsed = datetime.combine(date.fromisoformat(value), datetime.min.time(), tzinfo=timezone.utc)
    else:
        parsed = datetime.fromisoformat(value)
        if parsed.tzinfo is None or parsed.tzinfo.utcoffset(parsed) is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
    parsed = parsed.astimezone(timezone.utc)
    return parsed.strftime("%Y-%m-%dT%H:%M:%S.") + f"{parsed.microsecond // 1000:03d}Z"


class ReservationFields(BaseModel):
    model_config = ConfigDict(extra="ignore")

    meetingName: str
    personName: str
    mobileNumber: str
    date: str  # ISO-8601 UTC timestamp
    startTime: str  # "HH:MM"
    endTime: str  # "HH:MM"
    roomSize: RoomSize


class Reservation(ReservationFields):
    """A stored reservation, as kept in the document store."""

    id: str
    pin: str


class ReservationPublic(ReservationFields):
    """Read view of a reservation; the PIN is never sent back."""

    id: str


def _check_slot(value: str, label: str) -> str:
    if not value:
        raise PydanticCustomError("time_required", "{label} is required", {"label": label})
    if not TIME_PATTERN.match(value):
        raise PydanticCustomError("time_format", "{label} must be in HH:MM format", {"label": label})
    slots = time_slots()
    if value not in slots:
        raise PydanticCustomError(
            "time_slot",
            "{label} must be a half-hour slot between {first} and {last}",
            {"label": label, "first": slots[0], "last": slots[-1]},
        )
    return value


class ReservationUpdate(ReservationFields):
    """Validated mutable fields of a reservation."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    @field_validator("meetingName")
    @classmethod
    def check_meeting_name(cls, value: str) -> str:
        if len(value) < 3:
            raise PydanticCustomError("meeting_name", "Meeting name must be at least 3 characters")
        return value

    @field_validator("personName")
    @classmethod
    def check_person_name(cls, value: str) -> str:
        if len(value) < 2:
            raise PydanticCustomError("person_name", "Person name must be at least 2 characters")
        return value

    @field_validator("mobileNumber")
    @classmethod
    def check_mobile_number(cls, value: str) -> str:
        if not MOBILE_PATTERN.match(value):
            raise PydanticCustomError("mobile_number", "Mobile number must be in XXX-XXX-XXXX format")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def check_date(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("date_required", "Please select a date.")
        try:
            return normalize_date(value.strip())
        except (ValueError, OverflowError):
            raise PydanticCustomError("date_format", "Date must be an ISO-8601 date or datetime") from None

    @field_validator("startTime")
    @classmethod
    def check_start_time(cls, value: str) -> str:
        return _check_slot(value, "Start time")

    @field_validator("endTime")
    @classmethod
    def check_end_time(cls, value: str, info: ValidationInfo) -> str:
        value = _check_slot(value, "End time")
        # fixed-width "HH:MM" compares correctly as text
        start = info.data.get("startTime")
        if start is not None and value <= start:
            raise PydanticCustomError("time_order", "End time must be after start time.")
        return value

    @field_validator("roomSize", mode="before")
    @classmethod
    def check_room_size(cls, value: Any) -> Any:
        if value not in ROOM_SIZES:
            raise PydanticCustomError("room_size", "Room size must be small or large")
        return value


class ReservationCreate(ReservationUpdate):
    pin: str

    @field_validator("pin")
    @classmethod
    def check_pin(cls, value: str) -> str:
        if not PIN_PATTERN.match(value):
            raise PydanticCustomError("pin", "PIN must be 4 digits.")
        return value


def field_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Flatten pydantic errors into ``{field: [messages]}``."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__root__"
        errors.setdefault(field, []).append(error["msg"])
    return errors


def validate_create(raw: Mapping[str, Any]) -> ReservationCreate:
    try:
        return ReservationCreate.model_validate(raw)
    except ValidationError as exc:
        raise ReservationValidationError(field_errors(exc)) from exc


def validate_update(raw: Mapping[str, Any]) -> ReservationUpdate:
    try:
        return ReservationUpdate.model_validate(raw)
    except ValidationError as exc:
        raise ReservationValidationError(field_errors(exc)) from exc
