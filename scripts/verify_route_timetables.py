#!/usr/bin/env python3
"""Check timetable resolution against the live CTAN API.

Fetches a handful of origin/destination timetables, resolves them for a date
and prints how many trips run plus the first departures, so frequency-code
regressions show up against real data.

Usage:
    python scripts/verify_route_timetables.py
    python scripts/verify_route_timetables.py --date 2025-10-12 --limit 8
    python scripts/verify_route_timetables.py --consortium 6 --origin 52 --destination 10
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from core.config import settings
from src.timetable_bc.holiday.infrastructure.services import HolidayCalendar
from src.timetable_bc.timetable.application import RouteTimetableRequest, RouteTimetableService
from src.timetable_bc.timetable.domain.exceptions import TimetableError
from src.timetable_bc.timetable.infrastructure.services import CtanTimetableClient

logging.basicConfig(level=logging.WARNING, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# (label, consortium, origin nucleus, destination nucleus) - Consorcio de Almería
DEFAULT_CASES = [
    ("La Gangosa → Almería", 6, "74", "10"),
    ("Adra → Almería", 6, "52", "10"),
    ("El Ejido → Almería", 6, "38", "10"),
    ("Roquetas → Almería", 6, "53", "10"),
    ("Vícar → Almería", 6, "77", "10"),
    ("Benahadux → Almería", 6, "33", "10"),
    ("Níjar → Almería", 6, "50", "10"),
    ("Aguadulce → Almería", 6, "41", "10"),
    ("Berja → Almería", 6, "31", "10"),
    ("Adra → El Ejido", 6, "52", "38"),
]


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Verify route timetables against the live CTAN API")
    parser.add_argument("--date", type=date.fromisoformat, default=date.today(), help="Service date YYYY-MM-DD")
    parser.add_argument("--limit", type=int, default=5, help="Departures to print per timetable")
    parser.add_argument("--consortium", type=int, help="Consortium id (with --origin/--destination)")
    parser.add_argument("--origin", help="Origin nucleus id")
    parser.add_argument("--destination", help="Destination nucleus id")
    parser.add_argument("--verbose", action="store_true", help="Log frequency resolution details")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.consortium is not None:
        if not args.origin or not args.destination:
            logger.error("--consortium requires --origin and --destination")
            return 2
        cases = [(f"{args.origin} → {args.destination}", args.consortium, args.origin, args.destination)]
    else:
        cases = DEFAULT_CASES

    calendar = HolidayCalendar(
        country_code=settings.HOLIDAY_COUNTRY_CODE,
        subdivision=settings.HOLIDAY_SUBDIVISION,
        timezone_name=settings.TIMEZONE,
    )
    failures = 0

    with CtanTimetableClient(settings.CTAN_API_BASE_URL, language=settings.CTAN_API_LANGUAGE) as client:
        service = RouteTimetableService(client, settings.TIMEZONE, holiday_calendar=calendar)

        for label, consortium_id, origin, destination in cases:
            request = RouteTimetableRequest(consortium_id, origin, destination, args.date)
            try:
                entries = service.load_timetable(request)
            except TimetableError as e:
                logger.error(f"{label}: {e}")
                failures += 1
                continue

            formatted = ", ".join(
                f"{entry.departure_time:%H:%M}→{entry.arrival_time:%H:%M} {entry.line_code}"
                for entry in entries[:args.limit]
            )
            print(f"{label}: {len(entries)} servicios | {formatted}")

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
