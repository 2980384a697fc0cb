"""Unit tests for the holiday calendar."""

from datetime import date, datetime, timezone

import pytest

from src.timetable_bc.holiday.infrastructure.services import HolidayCalendar
from src.timetable_bc.holiday.infrastructure.services.holiday_calendar import resolve_subdivision


@pytest.fixture(scope="module")
def andalusia():
    return HolidayCalendar(country_code="ES", subdivision="AN", timezone_name="Europe/Madrid")


class TestResolveSubdivision:
    """Tests for province/community resolution."""

    def test_province_name(self):
        assert resolve_subdivision("Almería") == "AN"
        assert resolve_subdivision("Sevilla") == "AN"

    def test_community_code_passes_through(self):
        assert resolve_subdivision("MD") == "MD"

    def test_empty(self):
        assert resolve_subdivision("") is None
        assert resolve_subdivision(None) is None


class TestHolidayCalendar:
    """Tests for holiday lookups."""

    def test_national_holiday(self, andalusia):
        assert andalusia.is_holiday(date(2025, 1, 1))

    def test_regional_holiday(self, andalusia):
        match = andalusia.get_holiday(date(2025, 2, 28))
        assert match is not None
        assert match.date == date(2025, 2, 28)
        assert match.local_name
        assert match.english_name

    def test_regional_holiday_elsewhere(self):
        madrid = HolidayCalendar(country_code="ES", subdivision="MD")
        assert not madrid.is_holiday(date(2025, 2, 28))

    def test_regular_day(self, andalusia):
        assert andalusia.get_holiday(date(2025, 10, 8)) is None
        assert not andalusia.is_holiday(date(2025, 10, 8))

    def test_sunday_holiday_observed_on_monday(self, andalusia):
        # 12 October 2025 is a Sunday
        assert andalusia.is_holiday(date(2025, 10, 12))
        assert andalusia.is_holiday(date(2025, 10, 13))

    def test_datetime_uses_local_date(self, andalusia):
        # 23:30 UTC on 31 December is already New Year's Day in Madrid
        assert andalusia.is_holiday(datetime(2024, 12, 31, 23, 30, tzinfo=timezone.utc))
        assert not andalusia.is_holiday(datetime(2025, 1, 1, 23, 30, tzinfo=timezone.utc))

    def test_province_name_accepted(self):
        assert HolidayCalendar(subdivision="Almería").subdivision == "AN"

    def test_unsupported_country(self):
        with pytest.raises(ValueError):
            HolidayCalendar(country_code="ZZ", subdivision=None)

    def test_years_are_cached(self, andalusia):
        andalusia.is_holiday(date(2025, 5, 1))
        assert 2025 in andalusia._years
