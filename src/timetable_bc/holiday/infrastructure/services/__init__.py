from .holiday_calendar import HolidayCalendar, HolidayMatch, resolve_subdivision

__all__ = ["HolidayCalendar", "HolidayMatch", "resolve_subdivision"]
