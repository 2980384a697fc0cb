"""Origin/destination timetable endpoints."""

import logging
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from core.config import settings
from core.rate_limiter import limiter, RateLimits
from adapters.http.api.timetable.dependencies import get_timetable_service
from adapters.http.api.timetable.schemas import TimetableEntryResponse, TimetableResponse
from src.timetable_bc.timetable.application import RouteTimetableRequest, RouteTimetableService
from src.timetable_bc.timetable.domain.exceptions import MalformedResponseError, TimetableSourceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/consortiums", tags=["timetables"])


@router.get("/{consortium_id}/timetables", response_model=TimetableResponse)
@limiter.limit(RateLimits.TIMETABLES)
def get_route_timetable(
    request: Request,
    consortium_id: int,
    origin: str = Query(..., description="Origin nucleus id"),
    destination: str = Query(..., description="Destination nucleus id"),
    query_date: Optional[date] = Query(
        None, alias="date", description="Service date YYYY-MM-DD (default: today in the timetable timezone)"
    ),
    service: RouteTimetableService = Depends(get_timetable_service),
):
    """Trips running between two nuclei on a date, sorted by departure.

    Trips whose frequency does not run that day are left out; holiday-only
    services appear when the date is a holiday in the configured community.
    """
    service_date = query_date or datetime.now(ZoneInfo(settings.TIMEZONE)).date()
    timetable_request = RouteTimetableRequest(
        consortium_id=consortium_id,
        origin_nucleus_id=origin,
        destination_nucleus_id=destination,
        query_date=service_date,
    )

    is_holiday = service.is_holiday(timetable_request)
    try:
        entries = service.load_timetable(timetable_request, is_holiday=is_holiday)
    except TimetableSourceError as e:
        raise HTTPException(status_code=502, detail=f"Timetable source unavailable: {e}")
    except MalformedResponseError as e:
        logger.error(f"Malformed timetable for consortium {consortium_id} {origin}->{destination}: {e}")
        raise HTTPException(status_code=502, detail=f"Malformed timetable from source: {e}")

    return TimetableResponse(
        consortium_id=consortium_id,
        origin=origin,
        destination=destination,
        service_date=service_date,
        timezone=service.timezone,
        is_holiday=is_holiday,
        count=len(entries),
        entries=[TimetableEntryResponse.model_validate(entry) for entry in entries],
    )
