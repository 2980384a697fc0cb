"""Holiday lookup schemas."""

from datetime import date
from typing import Optional

from pydantic import BaseModel


class HolidayResponse(BaseModel):
    day: date
    is_holiday: bool
    local_name: Optional[str] = None  # Spanish name, e.g. "Día de Andalucía"
    english_name: Optional[str] = None
