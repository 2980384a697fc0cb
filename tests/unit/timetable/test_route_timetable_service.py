"""Unit tests for the route timetable service."""

from datetime import date, datetime, timezone

import pytest

from src.timetable_bc.timetable.application import RouteTimetableRequest, RouteTimetableService
from src.timetable_bc.timetable.domain.exceptions import InvalidTimezoneError, TimetableSourceError


class FakeSource:
    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.calls = []

    def load_timetable(self, consortium_id, origin_nucleus_id, destination_nucleus_id):
        self.calls.append((consortium_id, origin_nucleus_id, destination_nucleus_id))
        if self.error is not None:
            raise self.error
        return self.payload


class FakeCalendar:
    def __init__(self, *days):
        self.days = set(days)
        self.asked = []

    def is_holiday(self, day):
        self.asked.append(day)
        return day in self.days


@pytest.fixture
def payload(timetable_payload):
    return timetable_payload(
        [
            ("1", "WORKDAY", ["08:00", "08:40"], "L-V"),
            ("2", "HOLIDAY", ["09:00", "09:40"], "F"),
            ("3", "WEEKEND", ["10:00", "10:40"], "S-D-F"),
        ],
        [("1", "L-V", "Lunes a viernes"), ("2", "F", "Festivos"), ("3", "S-D-F", "Sábados, domingos y festivos")],
    )


class TestRouteTimetableService:
    """Tests for fetching and resolving a timetable."""

    def test_regular_weekday(self, payload):
        source = FakeSource(payload)
        service = RouteTimetableService(source, "Europe/Madrid", holiday_calendar=FakeCalendar())

        entries = service.load_timetable(RouteTimetableRequest(6, "52", "10", date(2025, 10, 8)))

        assert source.calls == [(6, "52", "10")]
        assert [entry.line_code for entry in entries] == ["WORKDAY"]

    def test_holiday_weekday(self, payload):
        calendar = FakeCalendar(date(2025, 10, 13))
        service = RouteTimetableService(FakeSource(payload), "Europe/Madrid", holiday_calendar=calendar)

        entries = service.load_timetable(RouteTimetableRequest(6, "52", "10", date(2025, 10, 13)))

        assert [(entry.line_code, entry.is_holiday_only) for entry in entries] == [
            ("WORKDAY", False),
            ("HOLIDAY", True),
            ("WEEKEND", False),
        ]

    def test_without_calendar_nothing_is_a_holiday(self, payload):
        service = RouteTimetableService(FakeSource(payload), "Europe/Madrid")
        request = RouteTimetableRequest(6, "52", "10", date(2025, 10, 13))
        assert service.is_holiday(request) is False
        assert "HOLIDAY" not in [entry.line_code for entry in service.load_timetable(request)]

    def test_calendar_gets_the_local_date(self, payload):
        calendar = FakeCalendar()
        service = RouteTimetableService(FakeSource(payload), "Europe/Madrid", holiday_calendar=calendar)
        query = datetime(2025, 10, 5, 23, 30, tzinfo=timezone.utc)

        service.is_holiday(RouteTimetableRequest(6, "52", "10", query))

        assert calendar.asked == [date(2025, 10, 6)]

    def test_source_errors_propagate(self):
        source = FakeSource(error=TimetableSourceError("down"))
        service = RouteTimetableService(source, "Europe/Madrid")
        with pytest.raises(TimetableSourceError):
            service.load_timetable(RouteTimetableRequest(6, "52", "10", date(2025, 10, 8)))

    def test_unknown_timezone(self, payload):
        with pytest.raises(InvalidTimezoneError):
            RouteTimetableService(FakeSource(payload), "Mars/Olympus")

    def test_caller_supplied_holiday_flag(self, payload):
        calendar = FakeCalendar()
        service = RouteTimetableService(FakeSource(payload), "Europe/Madrid", holiday_calendar=calendar)

        entries = service.load_timetable(RouteTimetableRequest(6, "52", "10", date(2025, 10, 8)), is_holiday=True)

        assert calendar.asked == []
        assert "HOLIDAY" in [entry.line_code for entry in entries]
