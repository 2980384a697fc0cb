"""Spanish holiday calendar for timetable lookups.

Answers "is this date a holiday?" for one autonomous community using
python-holidays (national + regional days). A holiday that falls on a Sunday
is also observed on the following Monday, which is when consortia run their
holiday service.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Optional, Union
from zoneinfo import ZoneInfo

import holidays as holidays_lib

logger = logging.getLogger(__name__)

LOCAL_LANGUAGE = "es"
ENGLISH_LANGUAGE = "en_US"
OBSERVED_SHIFT = timedelta(days=1)
SUNDAY = 7

# Province NAME -> autonomous community code (ISO 3166-2:ES, as used by python-holidays)
# Only the provinces served by the Andalusian transport consortia
PROVINCE_NAME_TO_COMMUNITY = {
    "Almería": "AN",
    "Cádiz": "AN",
    "Córdoba": "AN",
    "Granada": "AN",
    "Huelva": "AN",
    "Jaén": "AN",
    "Málaga": "AN",
    "Sevilla": "AN",
}


def resolve_subdivision(value: Optional[str]) -> Optional[str]:
    """Accept either a community code ("AN") or a province name ("Almería")."""
    if not value:
        return None
    return PROVINCE_NAME_TO_COMMUNITY.get(value, value)


@dataclass(frozen=True)
class HolidayMatch:
    """A holiday on a given date, with its Spanish and English names."""

    date: date
    local_name: str
    english_name: str


class HolidayCalendar:
    """Holiday oracle for one country/community in a fixed civil timezone.

    Year data is built on first use and kept for the life of the instance.
    """

    def __init__(
        self,
        country_code: str = "ES",
        subdivision: Optional[str] = "AN",
        timezone_name: str = "Europe/Madrid",
    ):
        self.country_code = country_code
        self.subdivision = resolve_subdivision(subdivision)
        self.zone = ZoneInfo(timezone_name)
        self._years: Dict[int, Dict[date, HolidayMatch]] = {}

        try:
            holidays_lib.country_holidays(self.country_code, subdiv=self.subdivision)
        except NotImplementedError as e:
            raise ValueError(
                f"Unsupported holiday calendar {self.country_code}/{self.subdivision}"
            ) from e

    def _civil_date(self, day: Union[date, datetime]) -> date:
        if isinstance(day, datetime):
            moment = day if day.tzinfo else day.replace(tzinfo=timezone.utc)
            return moment.astimezone(self.zone).date()
        return day

    def _calendar(self, years, language: str):
        return holidays_lib.country_holidays(
            self.country_code,
            subdiv=self.subdivision,
            years=years,
            language=language,
        )

    def _load_year(self, year: int) -> Dict[date, HolidayMatch]:
        cached = self._years.get(year)
        if cached is not None:
            return cached

        # Previous year too: a Sunday 31 December is observed on 1 January
        years = [year - 1, year]
        local = self._calendar(years, LOCAL_LANGUAGE)
        english = self._calendar(years, ENGLISH_LANGUAGE)

        holidays_by_date: Dict[date, HolidayMatch] = {}
        for day, name in sorted(local.items()):
            if day.year == year:
                holidays_by_date[day] = HolidayMatch(day, name, english.get(day, name))

        for day, name in sorted(local.items()):
            if day.isoweekday() != SUNDAY:
                continue
            observed = day + OBSERVED_SHIFT
            if observed.year == year and observed not in holidays_by_date:
                holidays_by_date[observed] = HolidayMatch(observed, name, english.get(day, name))

        logger.info(
            f"Loaded {len(holidays_by_date)} holidays for {self.country_code}/{self.subdivision} {year}"
        )
        self._years[year] = holidays_by_date
        return holidays_by_date

    def get_holiday(self, day: Union[date, datetime]) -> Optional[HolidayMatch]:
        """Holiday on the given date, None if it is a regular day.

        Args:
            day: Date to check; datetimes are converted into the calendar's timezone
        """
        civil = self._civil_date(day)
        return self._load_year(civil.year).get(civil)

    def is_holiday(self, day: Union[date, datetime]) -> bool:
        return self.get_holiday(day) is not None
