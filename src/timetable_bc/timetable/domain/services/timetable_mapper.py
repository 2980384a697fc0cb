"""Route timetable mapper.

Turns a raw origin/destination timetable into the trips that run on a given
date, with departure/arrival as timezone-aware datetimes:

1. Frequencies are looked up by code in the feed metadata (fallback: the
   bare code).
2. Each trip's frequency is classified against the ISO weekday of the query
   date *as seen in the timetable's timezone*, plus the holiday flag.
3. "HH:MM" departure/arrival strings become local datetimes on that date;
   an arrival earlier than its departure belongs to the next day.
4. Results are sorted by departure instant (stable on ties).

Malformed trips never raise: missing or "--" times drop the trip, garbled or
out-of-range times fall back to midnight, unknown codes are treated as running daily.
"""

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.timetable_bc.frequency.domain.entities import Frequency, FrequencyRule
from src.timetable_bc.frequency.domain.services import resolve_frequency_rule, verdict_for_rule
from src.timetable_bc.timetable.domain.entities import (
    MapperOptions,
    RawFrequencyMetadata,
    ResolvedTimetableEntry,
    RouteTimetableResponse,
)
from src.timetable_bc.timetable.domain.exceptions import InvalidTimezoneError

logger = logging.getLogger(__name__)

TIME_SEPARATOR = ":"
HOURS_PER_DAY = 24
MINUTES_PER_HOUR = 60
ONE_DAY = timedelta(days=1)

QueryDate = Union[date, datetime]


def load_timezone(name: str) -> ZoneInfo:
    """ZoneInfo for an IANA name, InvalidTimezoneError if unknown."""
    if not name or not isinstance(name, str):
        raise InvalidTimezoneError(f"Invalid timezone: {name!r}")
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidTimezoneError(f"Unknown timezone: {name!r}") from e


def resolve_query_date(query_date: QueryDate, zone: ZoneInfo) -> date:
    """Civil date of the query in the timetable's timezone.

    Plain dates are used as they are. Datetimes are converted into the zone
    first (naive ones are read as UTC), so 2025-10-05T23:30Z is a Monday in
    Europe/Madrid.
    """
    if isinstance(query_date, datetime):
        moment = query_date if query_date.tzinfo else query_date.replace(tzinfo=timezone.utc)
        return moment.astimezone(zone).date()
    if isinstance(query_date, date):
        return query_date
    raise TypeError(f"query_date must be a date or datetime, got {type(query_date).__name__}")


def parse_time_of_day(text: Optional[str]) -> Optional[Tuple[int, int]]:
    """Parse "HH:MM" (extra ":SS" ignored) into (hour, minute).

    Returns None for anything that is not two integers, or whose hour is
    outside 0-23 or minute outside 0-59. The feed writes after-midnight
    arrivals as "00:20", never "24:20".
    """
    if not text:
        return None

    parts = text.split(TIME_SEPARATOR)
    if len(parts) < 2:
        return None

    try:
        hour = int(parts[0].strip())
        minute = int(parts[1].strip())
    except ValueError:
        return None

    if not 0 <= hour < HOURS_PER_DAY or not 0 <= minute < MINUTES_PER_HOUR:
        return None
    return hour, minute


def build_local_datetime(service_day: date, time_text: str, zone: ZoneInfo) -> datetime:
    """Wall-clock time on service_day in zone; midnight when time_text is unparseable."""
    start_of_day = datetime.combine(service_day, time.min, tzinfo=zone)
    parsed = parse_time_of_day(time_text)

    if parsed is None:
        logger.debug(f"Unparseable time '{time_text}' on {service_day}, using start of day")
        return start_of_day

    hour, minute = parsed
    return datetime.combine(service_day, time(hour, minute), tzinfo=zone)


def build_frequency_lookup(frequencies: Iterable[RawFrequencyMetadata]) -> Dict[str, Frequency]:
    """code -> Frequency; a repeated code keeps the last metadata row."""
    return {metadata.code: metadata.to_frequency() for metadata in frequencies}


def find_frequency(lookup: Dict[str, Frequency], code: str) -> Optional[Frequency]:
    return lookup.get(code)


def normalize_notes(notes: Optional[str]) -> Optional[str]:
    if notes is None:
        return None
    trimmed = notes.strip()
    return trimmed or None


def map_route_timetable_response(
    response: Union[RouteTimetableResponse, Any],
    query_date: QueryDate,
    options: MapperOptions,
) -> Tuple[ResolvedTimetableEntry, ...]:
    """Resolve which trips run on query_date and when.

    Args:
        response: RouteTimetableResponse, or the raw feed JSON (parsed with
            RouteTimetableResponse.from_api)
        query_date: Date being looked up; datetimes are converted into
            options.timezone before taking the civil date
        options: Timezone of the feed's wall-clock times and holiday flag

    Returns:
        Tuple of ResolvedTimetableEntry sorted by departure instant.

    Raises:
        MalformedResponseError: raw JSON that is not a timetable object
        InvalidTimezoneError: options.timezone is not an IANA zone
    """
    if not isinstance(response, RouteTimetableResponse):
        response = RouteTimetableResponse.from_api(response)

    zone = load_timezone(options.timezone)
    service_day = resolve_query_date(query_date, zone)
    weekday = service_day.isoweekday()
    lookup = build_frequency_lookup(response.frequencies)

    rules: Dict[str, Optional[FrequencyRule]] = {}
    entries: List[ResolvedTimetableEntry] = []
    hidden = 0
    missing_times = 0

    for raw in response.entries:
        metadata = find_frequency(lookup, raw.frequency_code)
        frequency = metadata if metadata is not None else Frequency.fallback(raw.frequency_code)

        if raw.frequency_code not in rules:
            rules[raw.frequency_code] = resolve_frequency_rule(frequency.code, frequency.name)
        verdict = verdict_for_rule(rules[raw.frequency_code], weekday, options.is_holiday)

        if not verdict.visible:
            hidden += 1
            continue

        departure_text = raw.departure_text
        arrival_text = raw.arrival_text
        if departure_text is None or arrival_text is None:
            logger.debug(f"Skipping {raw.line_code} ({raw.frequency_code}): no departure/arrival in {list(raw.times)}")
            missing_times += 1
            continue

        departure = build_local_datetime(service_day, departure_text, zone)
        arrival = build_local_datetime(service_day, arrival_text, zone)

        if arrival.timestamp() < departure.timestamp():
            arrival = arrival + ONE_DAY

        entries.append(
            ResolvedTimetableEntry(
                line_id=raw.line_id,
                line_code=raw.line_code,
                departure_time=departure,
                arrival_time=arrival,
                frequency=frequency,
                notes=normalize_notes(raw.notes),
                is_holiday_only=verdict.holiday_only,
            )
        )

    entries.sort(key=lambda entry: entry.departure_time.timestamp())

    logger.debug(
        f"Mapped {len(entries)}/{len(response.entries)} trips for {service_day} "
        f"(weekday={weekday}, holiday={options.is_holiday}, hidden={hidden}, missing_times={missing_times})"
    )
    return tuple(entries)
