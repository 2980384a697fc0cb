"""Errors raised by the timetable bounded context.

Per-entry problems in a feed (placeholder times, unknown frequency codes,
garbled "HH:MM" text) are never errors: those entries are skipped or
defaulted. These exceptions cover caller input and transport failures.
"""


class TimetableError(Exception):
    """Base exception for the timetable bounded context."""

    pass


class MalformedResponseError(TimetableError):
    """The timetable payload is structurally invalid (not a mapping, lists that are not lists)."""

    pass


class InvalidTimezoneError(TimetableError):
    """The configured timezone is not a known IANA zone name."""

    pass


class TimetableSourceError(TimetableError):
    """The upstream timetable feed could not be fetched or decoded."""

    pass
