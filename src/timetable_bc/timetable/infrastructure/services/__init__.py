from .ctan_timetable_client import CtanTimetableClient

__all__ = ["CtanTimetableClient"]
