"""FastAPI dependencies for timetable endpoints."""

from functools import lru_cache
from typing import Generator

from fastapi import Depends

from core.config import settings
from src.timetable_bc.holiday.infrastructure.services import HolidayCalendar
from src.timetable_bc.timetable.application import RouteTimetableService
from src.timetable_bc.timetable.infrastructure.services import CtanTimetableClient


@lru_cache(maxsize=1)
def get_holiday_calendar() -> HolidayCalendar:
    """Process-wide holiday calendar (year data is cached inside it)."""
    return HolidayCalendar(
        country_code=settings.HOLIDAY_COUNTRY_CODE,
        subdivision=settings.HOLIDAY_SUBDIVISION,
        timezone_name=settings.TIMEZONE,
    )


def get_timetable_client() -> Generator[CtanTimetableClient, None, None]:
    client = CtanTimetableClient(
        base_url=settings.CTAN_API_BASE_URL,
        language=settings.CTAN_API_LANGUAGE,
        timeout=settings.CTAN_HTTP_TIMEOUT_SECONDS,
    )
    try:
        yield client
    finally:
        client.close()


def get_timetable_service(
    client: CtanTimetableClient = Depends(get_timetable_client),
    holiday_calendar: HolidayCalendar = Depends(get_holiday_calendar),
) -> RouteTimetableService:
    return RouteTimetableService(
        source=client,
        timezone=settings.TIMEZONE,
        holiday_calendar=holiday_calendar,
    )
