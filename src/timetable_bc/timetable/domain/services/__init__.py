from .timetable_mapper import (
    build_frequency_lookup,
    build_local_datetime,
    find_frequency,
    load_timezone,
    map_route_timetable_response,
    normalize_notes,
    parse_time_of_day,
    resolve_query_date,
)

__all__ = [
    "build_frequency_lookup",
    "build_local_datetime",
    "find_frequency",
    "load_timezone",
    "map_route_timetable_response",
    "normalize_notes",
    "parse_time_of_day",
    "resolve_query_date",
]
