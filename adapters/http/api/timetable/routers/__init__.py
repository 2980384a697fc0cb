from .timetable_router import router as timetable_router
from .holiday_router import router as holiday_router

__all__ = ["timetable_router", "holiday_router"]
