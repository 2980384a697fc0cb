from .route_timetable import (
    PLACEHOLDER_TIME,
    MapperOptions,
    RawFrequencyMetadata,
    RawScheduleEntry,
    ResolvedTimetableEntry,
    RouteTimetableResponse,
)

__all__ = [
    "PLACEHOLDER_TIME",
    "MapperOptions",
    "RawFrequencyMetadata",
    "RawScheduleEntry",
    "ResolvedTimetableEntry",
    "RouteTimetableResponse",
]
