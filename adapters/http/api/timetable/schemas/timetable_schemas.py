"""Timetable response schemas."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel


class FrequencySchema(BaseModel):
    """Service frequency of a trip ("L-V" / "Lunes a viernes")."""
    id: str  # "fallback" when the feed had no metadata for the code
    code: str
    name: str
    is_fallback: bool = False  # feed had no metadata row for the code

    class Config:
        from_attributes = True


class TimetableEntryResponse(BaseModel):
    line_id: str
    line_code: str  # e.g. "M-383"
    departure_time: datetime  # ISO 8601 with the timetable's UTC offset
    arrival_time: datetime  # next day when the trip crosses midnight
    duration_minutes: int
    frequency: FrequencySchema
    notes: Optional[str] = None
    is_holiday_only: bool = False

    class Config:
        from_attributes = True


class TimetableResponse(BaseModel):
    consortium_id: int
    origin: str  # origin nucleus id
    destination: str  # destination nucleus id
    service_date: date
    timezone: str
    is_holiday: bool
    count: int
    entries: List[TimetableEntryResponse]
