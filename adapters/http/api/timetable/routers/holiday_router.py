"""Holiday lookup endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Request

from core.rate_limiter import limiter, RateLimits
from adapters.http.api.timetable.dependencies import get_holiday_calendar
from adapters.http.api.timetable.schemas import HolidayResponse
from src.timetable_bc.holiday.infrastructure.services import HolidayCalendar


router = APIRouter(prefix="/holidays", tags=["holidays"])


@router.get("/{day}", response_model=HolidayResponse)
@limiter.limit(RateLimits.HOLIDAYS)
def get_holiday(
    request: Request,
    day: date,
    calendar: HolidayCalendar = Depends(get_holiday_calendar),
):
    """Whether a date is a holiday in the configured community (Sunday holidays also count on Monday)."""
    match = calendar.get_holiday(day)
    if match is None:
        return HolidayResponse(day=day, is_holiday=False)
    return HolidayResponse(
        day=day,
        is_holiday=True,
        local_name=match.local_name,
        english_name=match.english_name,
    )
