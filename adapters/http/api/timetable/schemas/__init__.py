"""API schemas for timetable endpoints."""

from .timetable_schemas import (
    FrequencySchema,
    TimetableEntryResponse,
    TimetableResponse,
)

from .holiday_schemas import HolidayResponse

__all__ = [
    "FrequencySchema",
    "TimetableEntryResponse",
    "TimetableResponse",
    "HolidayResponse",
]
