"""Origin/destination timetable lookups.

Glues the CTAN feed, the holiday calendar and the timetable mapper together:
fetch the raw timetable, decide whether the query date is a holiday, and map.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Tuple

from src.timetable_bc.timetable.domain.entities import MapperOptions, ResolvedTimetableEntry
from src.timetable_bc.timetable.domain.services import (
    load_timezone,
    map_route_timetable_response,
    resolve_query_date,
)
from src.timetable_bc.timetable.domain.services.timetable_mapper import QueryDate

logger = logging.getLogger(__name__)


class TimetableSource(Protocol):
    def load_timetable(self, consortium_id: int, origin_nucleus_id: str, destination_nucleus_id: str) -> Any:
        ...


class HolidayOracle(Protocol):
    def is_holiday(self, day) -> bool:
        ...


@dataclass(frozen=True)
class RouteTimetableRequest:
    consortium_id: int
    origin_nucleus_id: str
    destination_nucleus_id: str
    query_date: QueryDate


class RouteTimetableService:
    """Loads the trips running between two nuclei on a date."""

    def __init__(
        self,
        source: TimetableSource,
        timezone: str,
        holiday_calendar: Optional[HolidayOracle] = None,
    ):
        self.source = source
        self.timezone = timezone
        self.holiday_calendar = holiday_calendar
        self._zone = load_timezone(timezone)

    def is_holiday(self, request: RouteTimetableRequest) -> bool:
        if self.holiday_calendar is None:
            return False
        service_day = resolve_query_date(request.query_date, self._zone)
        return self.holiday_calendar.is_holiday(service_day)

    def load_timetable(
        self,
        request: RouteTimetableRequest,
        is_holiday: Optional[bool] = None,
    ) -> Tuple[ResolvedTimetableEntry, ...]:
        """Fetch and resolve the timetable for a request.

        Args:
            request: Consortium, nuclei and query date
            is_holiday: Holiday flag already worked out by the caller; looked up
                in the holiday calendar when None

        Raises:
            TimetableSourceError: the feed could not be fetched
            MalformedResponseError: the feed returned something that is not a timetable
        """
        if is_holiday is None:
            is_holiday = self.is_holiday(request)
        payload = self.source.load_timetable(
            request.consortium_id,
            request.origin_nucleus_id,
            request.destination_nucleus_id,
        )

        options = MapperOptions(timezone=self.timezone, is_holiday=is_holiday)
        entries = map_route_timetable_response(payload, request.query_date, options)

        logger.info(
            f"Timetable {request.origin_nucleus_id}->{request.destination_nucleus_id} "
            f"(consortium {request.consortium_id}) on {request.query_date}: "
            f"{len(entries)} trips, holiday={is_holiday}"
        )
        return entries
