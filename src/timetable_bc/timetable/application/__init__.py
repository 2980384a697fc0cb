from .route_timetable_service import RouteTimetableRequest, RouteTimetableService

__all__ = ["RouteTimetableRequest", "RouteTimetableService"]
