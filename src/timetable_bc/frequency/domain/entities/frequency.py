from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import FrozenSet


class Weekday(IntEnum):
    """ISO weekday numbers (Monday=1 .. Sunday=7)."""
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7


class RuleSource(str, Enum):
    """Which classifier pass produced a rule."""
    CODE_TABLE = "code_table"
    CODE_LETTERS = "code_letters"
    NAME_KEYWORDS = "name_keywords"


@dataclass(frozen=True)
class Frequency:
    """Service frequency attached to a timetable entry.

    Comes from the feed's frequency metadata (idfrecuencia/acronimo/nombre)
    or is synthesized from the bare code when the feed has no metadata for it.
    """

    id: str
    code: str
    name: str

    FALLBACK_ID = "fallback"

    @classmethod
    def fallback(cls, code: str) -> "Frequency":
        return cls(id=cls.FALLBACK_ID, code=code, name=code)

    @property
    def is_fallback(self) -> bool:
        return self.id == self.FALLBACK_ID


@dataclass(frozen=True)
class FrequencyRule:
    """Weekdays a frequency runs on, plus whether it also runs on holidays."""

    allowed_days: FrozenSet[Weekday]
    include_holiday: bool
    source: RuleSource

    @property
    def is_holiday_only(self) -> bool:
        return self.include_holiday and not self.allowed_days

    def same_days_as(self, other: "FrequencyRule") -> bool:
        return (
            self.allowed_days == other.allowed_days
            and self.include_holiday == other.include_holiday
        )


@dataclass(frozen=True)
class FrequencyVerdict:
    """Outcome of classifying a frequency for one date."""

    visible: bool
    holiday_only: bool
